"""Exception handlers for the application."""

from typing import Any
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from jokes_app.exceptions import ErrorCode, JokesAppException, NotAuthenticatedException
from jokes_app.logging_config import get_logger, log_with_context
from jokes_app.views.template_renderer import TemplateRenderer

logger = get_logger(__name__)


def wants_html(request: Request) -> bool:
    """Whether the client asked for an HTML page (browsers do)."""
    return "text/html" in request.headers.get("accept", "")


async def app_exception_handler(request: Request, exc: JokesAppException) -> Response:
    """Handle application exceptions with proper HTTP status codes.

    Browsers get an HTML error page (or a login redirect when the session is
    missing); API clients get a structured JSON error.
    """
    log_with_context(
        logger,
        "warning",
        "Application error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="app_error",
    )

    if wants_html(request):
        if isinstance(exc, NotAuthenticatedException):
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            redirect_to = quote(target, safe="/")
            return RedirectResponse(url=f"/login?redirectTo={redirect_to}", status_code=303)
        return TemplateRenderer.render_error(request, exc.message, exc.status_code)

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle general exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    # Don't expose internal error details to clients
    if wants_html(request):
        return TemplateRenderer.render_error(request, "Something went wrong. Sorry!", 500)

    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal server error"}},
    )


def register_error_handlers(app) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    app.add_exception_handler(JokesAppException, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
