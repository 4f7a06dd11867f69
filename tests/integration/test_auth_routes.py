"""Integration tests for login, registration and logout."""

from sqlalchemy import select

from jokes_app.db.models import User

PASSWORD = "secret-password"


def _login_form(**overrides) -> dict[str, str]:
    data = {"loginType": "login", "username": "alice", "password": PASSWORD, "redirectTo": "/jokes"}
    data.update(overrides)
    return data


class TestLoginPage:
    def test_renders_form(self, test_client):
        response = test_client.get("/login")

        assert response.status_code == 200
        assert 'name="username"' in response.text
        assert 'name="redirectTo" value="/jokes"' in response.text

    def test_keeps_redirect_target(self, test_client):
        response = test_client.get("/login", params={"redirectTo": "/jokes/new"})

        assert 'name="redirectTo" value="/jokes/new"' in response.text

    def test_keeps_redirect_target_query(self, test_client):
        response = test_client.get("/login", params={"redirectTo": "/jokes?sortOrder=asc"})

        assert 'name="redirectTo" value="/jokes?sortOrder=asc"' in response.text

    def test_rejects_offsite_redirect_target(self, test_client):
        response = test_client.get("/login", params={"redirectTo": "//evil.example.com"})

        assert 'name="redirectTo" value="/jokes"' in response.text


class TestLogin:
    def test_login_sets_session_and_redirects(self, test_client, make_user, settings):
        make_user("alice")

        response = test_client.post("/login", data=_login_form(redirectTo="/jokes/new"))

        assert response.status_code == 303
        assert response.headers["location"] == "/jokes/new"
        assert settings.session_cookie_name in response.cookies

        page = test_client.get("/jokes")
        assert "Hi alice" in page.text

    def test_wrong_password(self, test_client, make_user, settings):
        make_user("alice")

        response = test_client.post("/login", data=_login_form(password="not-the-password"))

        assert response.status_code == 400
        assert "Username/Password combination is incorrect" in response.text
        assert settings.session_cookie_name not in response.cookies
        assert 'value="alice"' in response.text

    def test_unknown_user(self, test_client):
        response = test_client.post("/login", data=_login_form(username="nobody"))

        assert response.status_code == 400
        assert "Username/Password combination is incorrect" in response.text

    def test_field_errors(self, test_client):
        response = test_client.post("/login", data=_login_form(username="al", password="123"))

        assert response.status_code == 400
        assert "Usernames must be at least 3 characters long" in response.text
        assert "Passwords must be at least 6 characters long" in response.text

    def test_invalid_login_type(self, test_client):
        response = test_client.post("/login", data=_login_form(loginType="sneak"))

        assert response.status_code == 400
        assert "Login type invalid" in response.text

    def test_offsite_redirect_falls_back(self, test_client, make_user):
        make_user("alice")

        response = test_client.post("/login", data=_login_form(redirectTo="https://evil.example.com"))

        assert response.status_code == 303
        assert response.headers["location"] == "/jokes"

    def test_login_is_rate_limited(self, test_client, settings):
        allowed = int(settings.login_rate_limit.split("/")[0])

        for _ in range(allowed):
            assert test_client.post("/login", data=_login_form(username="nobody")).status_code == 400

        assert test_client.post("/login", data=_login_form(username="nobody")).status_code == 429


class TestRegister:
    def test_register_creates_user(self, test_client, db_session):
        response = test_client.post("/login", data=_login_form(loginType="register", username="newbie"))

        assert response.status_code == 303
        assert response.headers["location"] == "/jokes"
        assert db_session.scalar(select(User).where(User.username == "newbie")) is not None

    def test_register_taken_username(self, test_client, make_user):
        make_user("alice")

        response = test_client.post("/login", data=_login_form(loginType="register"))

        assert response.status_code == 400
        assert "User with username alice already exists" in response.text
        assert 'value="register" checked' in response.text


class TestLogout:
    def test_logout_clears_session(self, test_client, make_user, login_as, settings):
        login_as(make_user("alice"))

        response = test_client.post("/logout")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert f'{settings.session_cookie_name}=""' in response.headers["set-cookie"]
