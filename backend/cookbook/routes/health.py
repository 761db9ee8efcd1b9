"""
Cookbook Backend: Health Check Route
=====================================

What:  GET /health for Docker health checks and load balancer probes.
How:   Runs SELECT 1 on the engine kept on app.state.

Status levels:
    healthy:    database reachable (HTTP 200)
    unhealthy:  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from cookbook import __version__
from cookbook.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request):
    db_status = "connected"
    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if db_status == "connected" else 503, content=body.model_dump())
