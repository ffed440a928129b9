"""
TxtStore — Greeting & Health Routes
====================================

What:  GET / (liveness greeting) and GET /health (readiness).
Why:   Orchestrators need two different answers: "is the process up?" (/) and
       "can it reach the database?" (/health).
How:   / returns a fixed string without touching the store. /health pings the
       store with SELECT 1 and reports 503 when that fails.
"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from txtstore import __version__
from txtstore.dependencies import get_store
from txtstore.exceptions import StoreError
from txtstore.schemas.record import HealthResponse
from txtstore.services.record_store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

GREETING = "Hello from TxtStore!"


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness greeting",
)
async def root() -> str:
    """Fixed greeting, unrelated to records."""
    return GREETING


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service readiness check",
)
async def health_check(
    request: Request,
    store: RecordStore = Depends(get_store),
):
    """
    Probe the database and report aggregate status.

    Returns 200 when SELECT 1 succeeds, 503 otherwise, so a load balancer can
    route away from an instance that has lost its database.
    """
    database = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StoreError as e:
        database = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", e.message)

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=database,
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
