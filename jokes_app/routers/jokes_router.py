"""Joke pages: listing, new joke, joke detail and RSS feed."""

from typing import Literal

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from jokes_app.config import Settings, get_settings
from jokes_app.db.models import User
from jokes_app.dependencies import get_current_user, get_db_session, require_user
from jokes_app.exceptions import ValidationException
from jokes_app.models.forms import NewJokeForm, form_errors
from jokes_app.models.jokes import JokesPageData, UserSummary
from jokes_app.services import joke_service
from jokes_app.views.template_renderer import TemplateRenderer

router = APIRouter()


def _summary(user: User | None) -> UserSummary | None:
    return UserSummary(id=user.id, username=user.username) if user else None


@router.get(
    "/jokes",
    response_class=HTMLResponse,
    summary="Jokes listing",
    description="""
    Lists the jokes of the selected user (defaults to the logged-in user),
    filtered by a name substring and ordered by name.

    Anonymous visitors always get an empty joke list.
    """,
    responses={200: {"description": "HTML page, or JokesPageData with format=json", "model": JokesPageData}},
)
def jokes_index(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId", description="Whose jokes to list"),
    search_query: str | None = Query(default=None, alias="searchQuery", description="Substring of the joke name"),
    sort_order: str | None = Query(default=None, alias="sortOrder", description="'asc' or 'desc' (default)"),
    format: Literal["html", "json"] = Query(default="html", description="Response format"),
    db: Session = Depends(get_db_session),
    user: User | None = Depends(get_current_user),
):
    """Render the jokes listing with the user selector and filter form."""
    params = joke_service.parse_list_params(user_id, search_query, sort_order)
    data = joke_service.load_jokes_page(db, user, params)

    if format == "json":
        return JSONResponse(content=data.model_dump(mode="json", by_alias=True))

    return TemplateRenderer.render_jokes_page(request, data, params)


@router.get("/jokes.rss", summary="RSS feed of the latest jokes")
def jokes_rss(
    request: Request,
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    items = joke_service.list_recent_jokes(db, settings.rss_item_limit, settings.public_base_url)
    return TemplateRenderer.render_rss(request, items, settings.public_base_url)


@router.get("/jokes/new", response_class=HTMLResponse)
def new_joke_form(request: Request, user: User | None = Depends(get_current_user)):
    """Render the new-joke form. Anonymous visitors are asked to log in."""
    if user is None:
        return TemplateRenderer.render_new_joke(request, None, status_code=401)
    return TemplateRenderer.render_new_joke(request, _summary(user))


@router.post("/jokes/new", response_class=HTMLResponse)
def create_joke(
    request: Request,
    name: str = Form(default=""),
    content: str = Form(default=""),
    db: Session = Depends(get_db_session),
    user: User = Depends(require_user),
):
    """Create a joke and redirect to it, or re-render the form with errors."""
    fields = {"name": name, "content": content}
    try:
        form = NewJokeForm(**fields)
    except ValidationError as e:
        return TemplateRenderer.render_new_joke(
            request, _summary(user), fields=fields, field_errors=form_errors(e), status_code=400
        )

    joke = joke_service.create_joke(db, user.id, form)
    return RedirectResponse(url=f"/jokes/{joke.id}", status_code=303)


@router.get("/jokes/{joke_id}", response_class=HTMLResponse)
def joke_detail(
    request: Request,
    joke_id: str,
    db: Session = Depends(get_db_session),
    user: User | None = Depends(get_current_user),
):
    joke = joke_service.get_joke(db, joke_id)
    return TemplateRenderer.render_joke(request, joke, _summary(user))


@router.post("/jokes/{joke_id}")
def joke_action(
    joke_id: str,
    intent: str = Form(default=""),
    db: Session = Depends(get_db_session),
    user: User = Depends(require_user),
):
    """Handle form actions on a joke. Only ``intent=delete`` is supported."""
    if intent != "delete":
        raise ValidationException(f"The intent {intent} is not supported", details={"intent": intent})

    joke_service.delete_joke(db, joke_id, user.id)
    return RedirectResponse(url="/jokes", status_code=303)
