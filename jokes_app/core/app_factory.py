"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from jokes_app import __version__
from jokes_app.config import get_settings
from jokes_app.core.lifespan import lifespan
from jokes_app.core.middleware import setup_middleware
from jokes_app.middleware.error_handlers import register_error_handlers
from jokes_app.routers import auth_router, health_router, jokes_router

STATIC_DIR = Path(__file__).parent.parent / "static"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Jokes App",
        description="""
        🤪 **Jokes** - Share and browse jokes

        ## Pages
        - `/jokes` - Jokes listing with user selection, search and sort order
        - `/jokes/new` - Add your own joke (login required)
        - `/jokes/{id}` - A single joke
        - `/jokes.rss` - RSS feed of the latest jokes
        - `/login` - Login or register

        Add `?format=json` to `/jokes` for the listing data as JSON.

        ## 📊 Health
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe (database reachable?)
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app, settings)

    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # HTML pages - no prefix
    app.include_router(jokes_router.router, tags=["jokes"])
    app.include_router(auth_router.router, tags=["auth"])

    app.include_router(health_router.router, tags=["health"])

    return app
