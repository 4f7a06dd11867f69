"""Main FastAPI application entry point."""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import RedirectResponse, Response

from jokes_app.core.app_factory import create_app
from jokes_app.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
log_level = os.getenv("LOG_LEVEL", "INFO")
setup_logging(log_level)

app = create_app()


@app.get("/", include_in_schema=False)
async def root():
    """Send visitors to the jokes listing."""
    return RedirectResponse(url="/jokes", status_code=307)


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


if __name__ == "__main__":
    import uvicorn

    from jokes_app.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "jokes_app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
