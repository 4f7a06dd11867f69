"""Unit tests for password hashing, login and registration."""

import pytest

from jokes_app.exceptions import ErrorCode, InvalidCredentialsException, UsernameTakenException
from jokes_app.services import auth_service


class TestPasswordHashing:
    """Tests for PBKDF2 password hashes."""

    def test_hash_format(self):
        password_hash = auth_service.hash_password("twixrox", iterations=1_000)

        algorithm, iterations, salt, digest = password_hash.split("$")
        assert algorithm == "pbkdf2_sha256"
        assert iterations == "1000"
        assert salt
        assert digest

    def test_verify_correct_password(self):
        password_hash = auth_service.hash_password("twixrox", iterations=1_000)

        assert auth_service.verify_password("twixrox", password_hash) is True

    def test_verify_wrong_password(self):
        password_hash = auth_service.hash_password("twixrox", iterations=1_000)

        assert auth_service.verify_password("twixrocks", password_hash) is False

    def test_same_password_gets_different_salts(self):
        assert auth_service.hash_password("twixrox", iterations=1_000) != auth_service.hash_password(
            "twixrox", iterations=1_000
        )

    @pytest.mark.parametrize("bad_hash", ["", "plain", "md5$1$abc$def", "pbkdf2_sha256$x$abc$def"])
    def test_malformed_hash_never_verifies(self, bad_hash):
        assert auth_service.verify_password("twixrox", bad_hash) is False


class TestLogin:
    """Tests for auth_service.login."""

    def test_login_success(self, db_session, make_user):
        user = make_user("kody", "twixrox")

        logged_in = auth_service.login(db_session, "kody", "twixrox")

        assert logged_in.id == user.id

    def test_login_wrong_password(self, db_session, make_user):
        make_user("kody", "twixrox")

        with pytest.raises(InvalidCredentialsException) as exc_info:
            auth_service.login(db_session, "kody", "wrong-password")

        assert exc_info.value.message == "Username/Password combination is incorrect"
        assert exc_info.value.code == ErrorCode.INVALID_CREDENTIALS

    def test_login_unknown_user(self, db_session):
        with pytest.raises(InvalidCredentialsException):
            auth_service.login(db_session, "nobody", "twixrox")


class TestRegister:
    """Tests for auth_service.register."""

    def test_register_creates_user(self, db_session):
        user = auth_service.register(db_session, "newbie", "password123")

        assert user.id
        assert auth_service.get_user_by_username(db_session, "newbie").id == user.id
        assert auth_service.verify_password("password123", user.password_hash)

    def test_register_taken_username(self, db_session, make_user):
        make_user("kody")

        with pytest.raises(UsernameTakenException) as exc_info:
            auth_service.register(db_session, "kody", "password123")

        assert exc_info.value.message == "User with username kody already exists"
        assert exc_info.value.status_code == 400
