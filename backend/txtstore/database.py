"""
TxtStore — Database Engine & Session Factory
==============================================

What:  Async SQLAlchemy engine construction, session factory, and ORM base.
Why:   Centralizes all connection-pool configuration in one place.
How:   `create_engine()` builds an async engine from Settings; the Record Store
       owns the engine and derives its session factory from it.
Who:   Called by the entry point (main.serve) and by the test fixtures.
When:  Once at process start. Sessions are created per store call.

Connection Pooling Strategy:
    pool_size=10:      Persistent connections for normal load
    max_overflow=5:    Temporary connections for spikes (total max = 15)
    pool_timeout=30:   Requests beyond capacity wait for a connection instead of failing
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    The pool is the only shared mutable resource in the process. The database
    serializes conflicting row operations, so no in-process locking is needed.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from txtstore.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    The shared metadata is what the bootstrap renders into DDL.
    """
    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine (and its connection pool) from settings.

    SQLite URLs get the dialect's default pool: pool sizing arguments are only
    meaningful for server databases.
    """
    if settings.is_sqlite:
        return create_async_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
        )

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        # Echo SQL queries in DEBUG mode for development visibility
        echo=settings.log_level == "DEBUG",
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the engine.

    expire_on_commit=False keeps returned Record attributes readable after the
    transaction commits and the session closes.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
