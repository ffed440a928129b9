"""
TxtStore — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for store and startup failures.
Why:   The Record Store raises one family of exceptions regardless of driver,
       so handlers and the Error Mapper never see SQLAlchemy or asyncpg types.
How:   Each exception carries a message and an optional context dict.
       A global handler (registered in main.py) catches StoreError and runs it
       through the Error Mapper.

Exception Hierarchy:
    TxtStoreError (base)
    ├── StoreError                → 500 Internal Server Error (text/plain)
    │   ├── RecordNotFoundError   → 500 (no row matched a delete)
    │   └── StoreTimeoutError     → 500 (store call exceeded STORE_TIMEOUT)
    └── SchemaBootstrapError      → fatal at startup, never served

Not-found deliberately collapses into the same 500 as connectivity failures;
see DESIGN.md for the open question.
"""

from typing import Any, Dict, Optional


class TxtStoreError(Exception):
    """
    Base exception for all TxtStore application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        super().__init__(self.message)


class StoreError(TxtStoreError):
    """
    Raised when any Record Store operation fails.

    What:    Connection failure, statement failure, pool exhaustion, constraint
             violation, or a delete that matched nothing.
    HTTP:    500 Internal Server Error, with `message` as the plain-text body.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RecordNotFoundError(StoreError):
    """
    Raised when a delete affects zero rows.

    The single-row deletion contract requires exactly one affected row, so an
    unmatched id is an error rather than an empty success. A second delete of
    the same id, or the losing side of two concurrent deletes, ends up here.
    """

    def __init__(
        self,
        record_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["record_id"] = record_id
        super().__init__(message=f"no record with id {record_id}", context=ctx)
        self.record_id = record_id


class StoreTimeoutError(StoreError):
    """Raised when a store call does not complete within STORE_TIMEOUT seconds."""

    def __init__(
        self,
        operation: str,
        timeout: float,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx.update({"operation": operation, "timeout": timeout})
        super().__init__(
            message=f"store operation '{operation}' timed out after {timeout:g}s",
            context=ctx,
        )
        self.operation = operation
        self.timeout = timeout


class SchemaBootstrapError(TxtStoreError):
    """
    Raised when the schema cannot be applied at startup.

    What:    All bootstrap attempts failed.
    Effect:  Fatal. The entry point exits before the listener is bound.
    """

    def __init__(
        self,
        message: str = "Could not apply the database schema",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
