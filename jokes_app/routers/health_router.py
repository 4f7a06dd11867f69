"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from jokes_app import __version__
from jokes_app.db.database import check_connection
from jokes_app.logging_config import get_logger, log_with_context
from jokes_app.models import DetailedHealthResponse, HealthResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for container healthchecks and basic monitoring.
    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check():
    """Readiness probe - can the application serve traffic?

    **Returns:**
    - 200: Database reachable
    - 503: Database check failed
    """
    checks = {}
    all_healthy = True

    try:
        await run_in_threadpool(check_connection)
        checks["database"] = "ok"
    except Exception as e:
        log_with_context(
            logger,
            "warning",
            "Database readiness check failed",
            error=str(e),
            error_type=type(e).__name__,
            event_type="health_db_failure",
        )
        checks["database"] = f"failed: {str(e)[:50]}"
        all_healthy = False

    status_code = 200 if all_healthy else 503
    status = "healthy" if all_healthy else "unhealthy"

    return JSONResponse(
        status_code=status_code,
        content=DetailedHealthResponse(
            status=status,
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
