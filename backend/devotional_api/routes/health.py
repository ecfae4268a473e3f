"""
Devotionals API - Health Check Routes
=====================================

What:  Health check endpoint for monitoring and load balancer probes, plus the
       plain-text hello-world probe.
How:   Runs SELECT 1 against the app's Database and reports aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

    Status levels:
    - healthy:   Database reachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from devotional_api import __version__
from devotional_api.schemas.devotional import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module load time, used for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Probe the database with SELECT 1 and report uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.database.ping()
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get("/hello_world", response_class=PlainTextResponse, summary="Plain-text liveness probe")
async def hello_world() -> str:
    return "Hello, World!"
