"""Login, registration and logout routes."""

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from jokes_app import security
from jokes_app.config import Settings, get_settings
from jokes_app.core.middleware import limiter
from jokes_app.dependencies import get_db_session
from jokes_app.exceptions import AuthException
from jokes_app.models.forms import DEFAULT_REDIRECT, LoginForm, LoginType, form_errors, safe_redirect_path
from jokes_app.services import auth_service
from jokes_app.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/login", response_class=HTMLResponse)
def login_form(
    request: Request,
    redirect_to: str | None = Query(default=None, alias="redirectTo"),
):
    """Render the login/register form."""
    return TemplateRenderer.render_login(request, fields={"redirect_to": safe_redirect_path(redirect_to)})


@router.post(
    "/login",
    response_class=HTMLResponse,
    responses={
        303: {"description": "Logged in, redirecting to redirectTo"},
        400: {"description": "Form errors or wrong credentials"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(lambda: get_settings().login_rate_limit)
def login(
    request: Request,
    login_type: str = Form(default=LoginType.LOGIN.value, alias="loginType"),
    username: str = Form(default=""),
    password: str = Form(default=""),
    redirect_to: str = Form(default=DEFAULT_REDIRECT, alias="redirectTo"),
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    """Log in or register, then start a session and redirect.

    **Rate Limited:** LOGIN_RATE_LIMIT per IP (default 10/minute)
    """
    fields = {"login_type": login_type, "username": username, "redirect_to": safe_redirect_path(redirect_to)}
    try:
        form = LoginForm(login_type=login_type, username=username, password=password, redirect_to=redirect_to)
    except ValidationError as e:
        return TemplateRenderer.render_login(request, fields=fields, field_errors=form_errors(e), status_code=400)

    try:
        if form.login_type is LoginType.REGISTER:
            user = auth_service.register(db, form.username, form.password)
        else:
            user = auth_service.login(db, form.username, form.password)
    except AuthException as e:
        return TemplateRenderer.render_login(request, fields=fields, form_error=e.message, status_code=e.status_code)

    return security.create_user_session(user.id, form.redirect_to, settings)


@router.post("/logout")
def logout(settings: Settings = Depends(get_settings)):
    """End the session and go back to the login page."""
    return security.destroy_session("/login", settings)
