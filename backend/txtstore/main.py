"""
TxtStore — Application Factory & Entry Point
=============================================

What:  Builds the FastAPI router around a Record Store and runs it under uvicorn.
Why:   Keeps the startup order explicit: store → schema → router → listener.
How:   create_app(store) returns a configured FastAPI instance; serve() wires
       the full sequence; main() is the console-script entry point.

Startup sequence (serve):
    1. Configure logging
    2. Build the Record Store (engine + connection pool) from settings
    3. ensure_schema(store): fatal if the table cannot be created
    4. create_app(store)
    5. Bind the listener and serve until SIGINT/SIGTERM
    6. Dispose the pool

Hosting runtimes that provide their own listener call ensure_schema() and
create_app() themselves, in that order.
"""

import asyncio
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from txtstore import __version__
from txtstore.bootstrap import ensure_schema
from txtstore.config import Settings, settings as default_settings
from txtstore.exceptions import SchemaBootstrapError, StoreError
from txtstore.middleware.logging import RequestLoggingMiddleware
from txtstore.middleware.request_id import RequestIDMiddleware, request_id_var
from txtstore.routes import health, records
from txtstore.services.error_mapper import map_store_error
from txtstore.services.record_store import RecordStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure stdout logging for the whole process.

    Called once, before anything else logs. force=True replaces handlers
    installed by earlier imports (uvicorn installs its own).
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Log router start/stop.

    The schema is already applied and the pool is owned by whoever built the
    store, so there is nothing to acquire or release here.
    """
    logger.info("Router accepting requests")
    yield
    logger.info("Router stopped")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to responses.

        StoreError (any cause)  → Error Mapper → 500 text/plain, error text as body
        Exception (fallback)    → 500 text/plain, generic message

    Input shape errors never get here: FastAPI answers them with 422 before
    the handler runs.
    """

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        status_code, message = map_store_error(exc)
        logger.warning("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(message, status_code=status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware, after the
        # ContextVar is reset; request.state still holds the ID
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory (the Router)
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: RecordStore) -> FastAPI:
    """
    Build the router around an already-provisioned store.

    Routes:
        GET    /             greeting
        GET    /health       readiness (pings the store)
        GET    /txt          list
        POST   /txt          create
        DELETE /txt/{id}     delete

    The store is reachable from every handler through app.state; the router
    itself holds no other state.
    """
    app = FastAPI(
        title="TxtStore API",
        description="Create, list, and delete text records.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.started_at = time.time()

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(records.router)

    return app


# ══════════════════════════════════════════════════════════════════════════
# Process Entry Point
# ══════════════════════════════════════════════════════════════════════════

async def serve(settings: Settings) -> None:
    """
    Construct store, apply schema, build router, start listening.

    Raises:
        SchemaBootstrapError: the schema could not be applied; nothing is served
    """
    store = RecordStore.from_settings(settings)
    try:
        await ensure_schema(
            store,
            attempts=settings.bootstrap_attempts,
            max_wait=settings.bootstrap_max_wait,
        )
        app = create_app(store)

        logger.info("Starting server on http://%s:%d", settings.host, settings.port)
        config = uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            log_config=None,  # keep the logging set up by setup_logging()
        )
        await uvicorn.Server(config).serve()
    finally:
        await store.close()
        logger.info("Shutdown complete.")


def main(settings: Optional[Settings] = None) -> int:
    """Console-script entry point. Returns the process exit code."""
    settings = settings or default_settings
    setup_logging(settings.log_level)
    logger.info("TxtStore %s starting", __version__)

    try:
        asyncio.run(serve(settings))
    except SchemaBootstrapError as e:
        logger.critical("%s; refusing to serve", e.message)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
