"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from jokes_app import __version__
from jokes_app.config import get_settings
from jokes_app.db.database import dispose_engine, get_engine, init_db
from jokes_app.db.seed import seed_demo_data
from jokes_app.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup still runs and the
    error reaches the server.
    """
    settings = get_settings()

    log_with_context(
        logger,
        "info",
        "Starting Jokes App",
        version=__version__,
        event_type="app_startup",
    )

    engine = get_engine()
    await run_in_threadpool(init_db, engine)

    if settings.seed_demo_data:
        await run_in_threadpool(seed_demo_data, engine)

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Jokes App",
            event_type="app_shutdown",
        )
        dispose_engine()
