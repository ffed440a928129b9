"""
TxtStore — Record Store (Persistence Layer)
============================================

What:  Durable persistence of Records behind create / delete / list.
Why:   Keeps every SQL statement and every driver exception in one place;
       callers only ever see Record objects or StoreError.
How:   Wraps an async SQLAlchemy engine. Each call checks out a session from
       the pool, runs exactly one statement in its own transaction, and
       returns the connection to the pool.
Who:   Constructed by the entry point, passed to the bootstrap and the router.

Statements:
    create:  INSERT INTO records (txt) VALUES (:txt) RETURNING id, txt
    delete:  DELETE FROM records WHERE id = :id RETURNING id, txt
    list:    SELECT id, txt FROM records          (no ORDER BY)

Concurrency:
    The store is safe to share between concurrent requests. Ids come from the
    database identity counter, so concurrent creates never collide. Delete is a
    single DELETE ... RETURNING, so when two requests delete the same id the
    database lets exactly one of them see the row; the other gets
    RecordNotFoundError.

Timeouts:
    Every call is bounded by `timeout` seconds (waiting for a pooled
    connection included) and raises StoreTimeoutError when exceeded.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, TypeVar

from sqlalchemy import delete, select, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from txtstore.config import Settings
from txtstore.database import create_engine, create_session_factory
from txtstore.exceptions import RecordNotFoundError, StoreError, StoreTimeoutError
from txtstore.models.record import Record

logger = logging.getLogger(__name__)

T = TypeVar("T")


def describe_error(exc: BaseException) -> str:
    """
    Text description of a driver failure.

    For DBAPI errors this is the driver's own message (e.g. asyncpg's
    "connection refused"), without SQLAlchemy's statement dump and
    background link.
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        message = str(exc.orig)
    else:
        message = str(exc)
    return message.strip() or type(exc).__name__


class RecordStore:
    """
    The persistence abstraction over the `records` table.

    Attributes:
        engine:   Async engine owning the connection pool
        timeout:  Upper bound in seconds on a single store call
    """

    def __init__(self, engine: AsyncEngine, timeout: float = 10.0):
        self.engine = engine
        self.timeout = timeout
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordStore":
        """Build the engine (and its pool) from settings and wrap it in a store."""
        return cls(create_engine(settings), timeout=settings.store_timeout)

    # ── Public operations ─────────────────────────────────────────────────

    async def create(self, txt: str) -> Record:
        """
        Insert a new row and return it with its generated id.

        Raises:
            StoreError: connection, pool, or statement failure
        """
        return await self._run("create", self._create, txt)

    async def delete(self, record_id: int) -> Record:
        """
        Remove the row with `record_id` and return its prior contents.

        Raises:
            RecordNotFoundError: no row matched (zero rows affected)
            StoreError: connection, pool, or statement failure
        """
        return await self._run("delete", self._delete, record_id)

    async def list(self) -> List[Record]:
        """
        Return every row, in whatever order the database produces them.

        The result is a plain list materialized at call time.
        """
        return await self._run("list", self._list)

    async def ping(self) -> None:
        """Round-trip a trivial query. Used by the readiness probe."""
        await self._run("ping", self._ping)

    async def close(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        await self.engine.dispose()

    # ── Statement bodies ──────────────────────────────────────────────────

    async def _create(self, txt: str) -> Record:
        async with self._session_factory() as session, session.begin():
            record = Record(txt=txt)
            session.add(record)
            # Flush emits the INSERT ... RETURNING and populates record.id
            await session.flush()
            logger.debug("Created record %s", record.id)
            return record

    async def _delete(self, record_id: int) -> Record:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                delete(Record)
                .where(Record.id == record_id)
                .returning(Record.id, Record.txt)
            )
            row = result.one_or_none()
            if row is None:
                raise RecordNotFoundError(record_id)
            logger.debug("Deleted record %s", record_id)
            return Record(id=row.id, txt=row.txt)

    async def _list(self) -> List[Record]:
        async with self._session_factory() as session:
            result = await session.scalars(select(Record))
            return list(result.all())

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    # ── Error translation ─────────────────────────────────────────────────

    async def _run(
        self,
        operation: str,
        func: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T:
        """
        Run one store call under the timeout and translate failures.

        Every failure leaves here as a StoreError subclass. RecordNotFoundError
        passes through unchanged.
        """
        try:
            return await asyncio.wait_for(func(*args), timeout=self.timeout)
        except RecordNotFoundError:
            raise
        except asyncio.TimeoutError:
            # Checked before OSError: TimeoutError subclasses OSError
            logger.warning("Store %s timed out after %.1fs", operation, self.timeout)
            raise StoreTimeoutError(operation, self.timeout)
        except (SQLAlchemyError, OSError, OverflowError) as e:
            # OverflowError: sqlite3 rejects ints beyond 64 bits before SQLAlchemy sees them
            message = describe_error(e)
            logger.warning("Store %s failed: %s", operation, message)
            raise StoreError(
                message=message,
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e
