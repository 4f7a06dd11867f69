"""User accounts: password hashing, login and registration."""

import base64
import hashlib
import hmac
import os

from sqlalchemy import select
from sqlalchemy.orm import Session

from jokes_app.db.models import User
from jokes_app.exceptions import InvalidCredentialsException, UsernameTakenException
from jokes_app.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 120_000
SALT_BYTES = 16


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hash a password with PBKDF2-HMAC-SHA256 and a random salt.

    Returns:
        ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` with base64 salt and hash
    """
    salt = os.urandom(SALT_BYTES)
    digest = _pbkdf2(password, salt, iterations)
    salt_b64 = base64.b64encode(salt).decode("ascii")
    digest_b64 = base64.b64encode(digest).decode("ascii")
    return f"{HASH_ALGORITHM}${iterations}${salt_b64}${digest_b64}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        algorithm, iterations, salt_b64, digest_b64 = password_hash.split("$")
        if algorithm != HASH_ALGORITHM:
            return False
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(digest_b64)
        actual = _pbkdf2(password, salt, int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(expected, actual)


def get_user_by_id(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def get_user_by_username(session: Session, username: str) -> User | None:
    return session.scalars(select(User).where(User.username == username)).first()


def login(session: Session, username: str, password: str) -> User:
    """Authenticate a user by username and password.

    Raises:
        InvalidCredentialsException: If the user does not exist or the password is wrong
    """
    user = get_user_by_username(session, username)
    if user is None or not verify_password(password, user.password_hash):
        log_with_context(
            logger,
            "info",
            "Login failed",
            username=username,
            user_exists=user is not None,
            event_type="auth_login_failure",
        )
        raise InvalidCredentialsException()

    log_with_context(
        logger,
        "info",
        "User logged in",
        user_id=user.id,
        event_type="auth_login_success",
    )
    return user


def register(session: Session, username: str, password: str) -> User:
    """Create a new user account.

    Raises:
        UsernameTakenException: If the username is already registered
    """
    if get_user_by_username(session, username) is not None:
        log_with_context(
            logger,
            "info",
            "Registration rejected, username taken",
            username=username,
            event_type="auth_register_conflict",
        )
        raise UsernameTakenException(username)

    user = User(username=username, password_hash=hash_password(password))
    session.add(user)
    session.commit()

    log_with_context(
        logger,
        "info",
        "User registered",
        user_id=user.id,
        event_type="auth_register_success",
    )
    return user
