"""Request logging middleware with sensitive data redaction."""

import re
import time

from fastapi import Request

from jokes_app.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Sensitive parameters to redact from URLs
SENSITIVE_PARAMS = [
    "password",
    "token",
    "secret",
    "session",
    "api_key",
    "access_token",
    "refresh_token",
    "authorization",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"({param}=)([^&\s\"]+)"
        redacted = re.sub(pattern, r"\1***REDACTED***", redacted, flags=re.IGNORECASE)
    return redacted


async def log_requests(request: Request, call_next):
    """Log every request with method, redacted URL, status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)

    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        status_code=response.status_code,
        duration_ms=duration_ms,
        event_type="http_request",
    )
    return response
