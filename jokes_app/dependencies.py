"""FastAPI dependencies for dependency injection."""

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jokes_app import security
from jokes_app.config import Settings, get_settings
from jokes_app.db.database import get_session_factory
from jokes_app.db.models import User
from jokes_app.exceptions import NotAuthenticatedException


def get_db_session() -> Iterator[Session]:
    """
    Open a database session for the duration of one request.

    Yields:
        A SQLAlchemy Session, closed when the request finishes.
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> User | None:
    """
    Get the logged-in user from the session cookie.

    Returns:
        The User, or None for anonymous visitors.
    """
    return security.get_user(request, db, settings)


def require_user(request: Request, user: User | None = Depends(get_current_user)) -> User:
    """
    Get the logged-in user or reject the request.

    Raises:
        NotAuthenticatedException: If nobody is logged in.
    """
    if user is None:
        raise NotAuthenticatedException(details={"redirect_to": request.url.path})
    return user
