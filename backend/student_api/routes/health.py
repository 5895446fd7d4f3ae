"""
Student API — Health Check Route
=================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings MongoDB and reports the result with version and uptime.

Status levels:
    - healthy:   the store answered the ping
    - unhealthy: the ping failed (still HTTP 200 so probes can read the body)
"""

import logging
import time

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from student_api import __version__
from student_api.database import DocumentStore, get_store
from student_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
