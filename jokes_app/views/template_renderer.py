"""Template rendering utilities for HTML views."""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from jokes_app.logging_config import get_logger
from jokes_app.models.jokes import JokeDetail, JokeListParams, JokesPageData, RssItem, UserSummary

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

RSS_CACHE_CONTROL = "public, max-age=600, s-maxage=1200"


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for all jokes views."""

    @staticmethod
    def render_jokes_page(request: Request, data: JokesPageData, params: JokeListParams) -> HTMLResponse:
        """Render the jokes listing with its filter form.

        The form fields are pre-filled from the parsed query parameters so a
        resubmit carries them back unchanged.

        Args:
            request: FastAPI request object
            data: Loaded page data (jokes, users, current user, selected user)
            params: Parsed listing parameters

        Returns:
            HTMLResponse with the rendered listing page
        """
        return templates.TemplateResponse(
            request,
            "jokes.html",
            {
                "user": data.user,
                "users": data.users,
                "jokes": data.joke_list_items,
                "selected_user_id": data.selected_user_id or "",
                "search_query": params.search_query,
                "sort_order": params.sort_order.value,
            },
        )

    @staticmethod
    def render_joke(request: Request, joke: JokeDetail, user: UserSummary | None) -> HTMLResponse:
        """Render a single joke. Its jokester gets a delete button."""
        return templates.TemplateResponse(
            request,
            "joke.html",
            {
                "user": user,
                "joke": joke,
                "is_owner": user is not None and user.id == joke.jokester_id,
            },
        )

    @staticmethod
    def render_new_joke(
        request: Request,
        user: UserSummary | None,
        fields: dict[str, str] | None = None,
        field_errors: dict[str, str] | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render the new-joke form, optionally with submitted values and errors.

        Args:
            request: FastAPI request object
            user: Logged-in user (None renders the "log in first" notice)
            fields: Previously submitted values
            field_errors: Validation messages keyed by field name
            status_code: HTTP status (400 on validation errors, 401 when anonymous)

        Returns:
            HTMLResponse with the rendered form
        """
        return templates.TemplateResponse(
            request,
            "new_joke.html",
            {
                "user": user,
                "fields": fields or {},
                "field_errors": field_errors or {},
            },
            status_code=status_code,
        )

    @staticmethod
    def render_login(
        request: Request,
        fields: dict[str, str] | None = None,
        field_errors: dict[str, str] | None = None,
        form_error: str | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render the login/register form."""
        fields = {"login_type": "login", "username": "", "redirect_to": "/jokes", **(fields or {})}
        return templates.TemplateResponse(
            request,
            "login.html",
            {
                "user": None,
                "fields": fields,
                "field_errors": field_errors or {},
                "form_error": form_error,
            },
            status_code=status_code,
        )

    @staticmethod
    def render_rss(request: Request, items: list[RssItem], base_url: str) -> Response:
        """Render the RSS feed of recent jokes."""
        return templates.TemplateResponse(
            request,
            "jokes.rss.xml",
            {
                "items": items,
                "base_url": base_url,
            },
            media_type="application/xml",
            headers={"Cache-Control": RSS_CACHE_CONTROL},
        )

    @staticmethod
    def render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "user": None,
                "message": message,
                "status_code": status_code,
            },
            status_code=status_code,
        )
