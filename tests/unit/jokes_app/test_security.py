"""Unit tests for cookie sessions and security helpers."""

from unittest.mock import MagicMock

from jokes_app import security


def _request_with_cookies(cookies: dict[str, str]) -> MagicMock:
    request = MagicMock()
    request.cookies = cookies
    request.url.path = "/jokes"
    request.client.host = "127.0.0.1"
    return request


class TestSessionCookies:
    """Tests for reading and writing the signed session cookie."""

    def test_create_session_sets_signed_cookie(self, settings):
        response = security.create_user_session("user-1", "/jokes/new", settings)

        assert response.status_code == 303
        assert response.headers["location"] == "/jokes/new"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.session_cookie_name}=")
        assert "httponly" in set_cookie.lower()
        assert "samesite=lax" in set_cookie.lower()

    def test_user_id_round_trip(self, settings):
        cookie = security.get_serializer(settings).dumps({"userId": "user-1"})
        request = _request_with_cookies({settings.session_cookie_name: cookie})

        assert security.get_user_id(request, settings) == "user-1"

    def test_missing_cookie(self, settings):
        assert security.get_user_id(_request_with_cookies({}), settings) is None

    def test_tampered_cookie(self, settings):
        cookie = security.get_serializer(settings).dumps({"userId": "user-1"})
        request = _request_with_cookies({settings.session_cookie_name: cookie[:-2] + "xx"})

        assert security.get_user_id(request, settings) is None

    def test_cookie_signed_with_other_secret(self, settings):
        other = settings.model_copy(update={"session_secret": "another-secret-0123456789"})
        cookie = security.get_serializer(other).dumps({"userId": "user-1"})
        request = _request_with_cookies({settings.session_cookie_name: cookie})

        assert security.get_user_id(request, settings) is None

    def test_expired_cookie(self, settings):
        cookie = security.get_serializer(settings).dumps({"userId": "user-1"})
        request = _request_with_cookies({settings.session_cookie_name: cookie})
        expired = settings.model_copy(update={"session_max_age_seconds": -1})

        assert security.get_user_id(request, expired) is None

    def test_destroy_session_clears_cookie(self, settings):
        response = security.destroy_session("/login", settings)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f'{settings.session_cookie_name}=""')
        assert "max-age=0" in set_cookie.lower()


class TestGetUser:
    """Tests for resolving the logged-in user."""

    def test_get_user(self, db_session, make_user, settings):
        user = make_user("kody")
        cookie = security.get_serializer(settings).dumps({"userId": user.id})
        request = _request_with_cookies({settings.session_cookie_name: cookie})

        assert security.get_user(request, db_session, settings).id == user.id

    def test_deleted_user(self, db_session, settings):
        cookie = security.get_serializer(settings).dumps({"userId": "gone"})
        request = _request_with_cookies({settings.session_cookie_name: cookie})

        assert security.get_user(request, db_session, settings) is None


class TestHostsAndOrigins:
    def test_get_trusted_hosts(self, settings):
        custom = settings.model_copy(update={"trusted_hosts": "localhost, 127.0.0.1 ,jokes.example.com"})

        assert security.get_trusted_hosts(custom) == ["localhost", "127.0.0.1", "jokes.example.com"]

    def test_get_cors_origins(self, settings):
        custom = settings.model_copy(update={"cors_origins": "http://a.test,http://b.test,"})

        assert security.get_cors_origins(custom) == ["http://a.test", "http://b.test"]
