"""Cookie sessions and host/origin security settings for the Jokes App."""

from fastapi import Request
from fastapi.responses import RedirectResponse
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.orm import Session

from jokes_app.config import Settings
from jokes_app.db.models import User
from jokes_app.logging_config import get_logger, log_with_context
from jokes_app.services import auth_service

logger = get_logger(__name__)

SESSION_SALT = "jokes-app-session"


def get_serializer(settings: Settings) -> URLSafeTimedSerializer:
    """Serializer that signs and timestamps the session payload."""
    return URLSafeTimedSerializer(settings.session_secret, salt=SESSION_SALT)


def get_user_id(request: Request, settings: Settings) -> str | None:
    """Read the user id from the signed session cookie.

    Returns:
        The user id, or None if the cookie is missing, tampered with or expired
    """
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None

    try:
        payload = get_serializer(settings).loads(cookie, max_age=settings.session_max_age_seconds)
    except SignatureExpired:
        log_with_context(
            logger,
            "info",
            "Session cookie expired",
            path=request.url.path,
            event_type="session_expired",
        )
        return None
    except BadSignature:
        log_with_context(
            logger,
            "warning",
            "Invalid session cookie signature",
            path=request.url.path,
            ip=request.client.host if request.client else "unknown",
            event_type="session_invalid",
        )
        return None

    user_id = payload.get("userId") if isinstance(payload, dict) else None
    return user_id if isinstance(user_id, str) else None


def get_user(request: Request, db: Session, settings: Settings) -> User | None:
    """Resolve the logged-in user for this request, if any."""
    user_id = get_user_id(request, settings)
    if user_id is None:
        return None

    user = auth_service.get_user_by_id(db, user_id)
    if user is None:
        log_with_context(
            logger,
            "info",
            "Session refers to a missing user",
            user_id=user_id,
            event_type="session_user_missing",
        )
    return user


def create_user_session(user_id: str, redirect_to: str, settings: Settings) -> RedirectResponse:
    """Redirect to ``redirect_to`` with a fresh session cookie for ``user_id``."""
    response = RedirectResponse(url=redirect_to, status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        get_serializer(settings).dumps({"userId": user_id}),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return response


def destroy_session(redirect_to: str, settings: Settings) -> RedirectResponse:
    """Redirect to ``redirect_to`` and clear the session cookie."""
    response = RedirectResponse(url=redirect_to, status_code=303)
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


def get_cors_origins(settings: Settings) -> list[str]:
    """Get allowed CORS origins from settings.

    Args:
        settings: Settings instance with CORS configuration

    Returns:
        List of allowed origins
    """
    return [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Get trusted host patterns from settings.

    Args:
        settings: Settings instance with trusted hosts configuration

    Returns:
        List of trusted host patterns
    """
    return [host.strip() for host in settings.trusted_hosts.split(",") if host.strip()]
