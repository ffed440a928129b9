"""
TxtStore — Schema Bootstrap
============================

What:  Ensures the `records` table exists before the router starts serving.
Why:   The service owns a single table and applies its schema inline at
       startup instead of through a separate migration step.
How:   Renders CREATE TABLE from the model metadata with checkfirst=True: the
       table is inspected first and a plain CREATE TABLE (not IF NOT EXISTS)
       is issued only when it is missing, so re-running against an existing
       table is a no-op. Transient connection failures (database still
       starting) are retried with tenacity.

When:  Exactly once, after the store is built and before create_app().

Concurrent starts: two processes can both see the table missing, and the
slower CREATE TABLE then fails with a duplicate-table error. That surfaces as
a SQLAlchemyError, so the retry runs again, the inspection finds the table,
and the attempt succeeds without DDL.

Failure is fatal: after the last attempt SchemaBootstrapError propagates and
the entry point exits without binding the listener.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from txtstore.database import Base
from txtstore.exceptions import SchemaBootstrapError
from txtstore.services.record_store import RecordStore, describe_error

# Registers the records table on Base.metadata
from txtstore.models.record import Record  # noqa: F401

logger = logging.getLogger(__name__)


async def _apply_schema(store: RecordStore) -> None:
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)


async def ensure_schema(
    store: RecordStore,
    attempts: int = 5,
    max_wait: float = 10.0,
) -> None:
    """
    Idempotently create the schema against the store's engine.

    Args:
        store:     The Record Store whose engine receives the DDL
        attempts:  Total attempts before giving up
        max_wait:  Cap on the exponential backoff between attempts (seconds)

    Raises:
        SchemaBootstrapError: the schema could not be applied
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception_type((SQLAlchemyError, OSError)),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.5, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )

    try:
        async for attempt in retrying:
            with attempt:
                await _apply_schema(store)
    except RetryError as e:
        cause = e.last_attempt.exception()
        message = describe_error(cause) if cause else "unknown error"
        logger.error("Schema bootstrap failed after %d attempts: %s", attempts, message)
        raise SchemaBootstrapError(
            message=f"Could not apply the database schema: {message}",
            context={"attempts": attempts},
        ) from cause

    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
