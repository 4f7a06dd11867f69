"""Pytest configuration and shared fixtures."""

import os

# Settings are read once, so the environment must be in place before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SESSION_SECRET", "test-session-secret-0123456789")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from jokes_app.config import Settings, get_settings
from jokes_app.core.middleware import limiter
from jokes_app.db.database import get_engine, get_session_factory, init_db
from jokes_app.db.models import Base, Joke, User
from jokes_app.main import app as fastapi_app
from jokes_app.security import get_serializer
from jokes_app.services.auth_service import hash_password

TEST_PASSWORD = "secret-password"


@pytest.fixture
def settings() -> Settings:
    """The Settings instance the app runs with."""
    return get_settings()


@pytest.fixture
def db_session():
    """Fresh in-memory schema and a session on it."""
    engine = get_engine()
    Base.metadata.drop_all(engine)
    init_db(engine)
    session = get_session_factory()()
    yield session
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_client(db_session):
    """FastAPI test client (lifespan included) on a fresh database."""
    limiter.reset()
    with TestClient(fastapi_app, follow_redirects=False) as client:
        yield client
        # Shutdown disposes the engine, so the shared connection must be released first
        db_session.close()


@pytest.fixture
def make_user(db_session):
    """Factory creating committed users."""

    def _make_user(username: str, password: str = TEST_PASSWORD) -> User:
        user = User(username=username, password_hash=hash_password(password, iterations=1_000))
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_joke(db_session):
    """Factory creating committed jokes."""

    def _make_joke(jokester: User, name: str, content: str = "A joke long enough to count.") -> Joke:
        joke = Joke(jokester_id=jokester.id, name=name, content=content)
        db_session.add(joke)
        db_session.commit()
        return joke

    return _make_joke


@pytest.fixture
def login_as(test_client, settings):
    """Put a valid session cookie for ``user`` on the test client."""

    def _login_as(user: User) -> None:
        cookie = get_serializer(settings).dumps({"userId": user.id})
        test_client.cookies.set(settings.session_cookie_name, cookie)

    return _login_as
