"""Jokes App models"""

from jokes_app.models.base_models import DetailedHealthResponse, HealthResponse
from jokes_app.models.forms import LoginForm, LoginType, NewJokeForm, form_errors, safe_redirect_path
from jokes_app.models.jokes import (
    JokeDetail,
    JokeFilter,
    JokeListItem,
    JokeListParams,
    JokesPageData,
    RssItem,
    SortOrder,
    UserSummary,
)

__all__ = [
    "DetailedHealthResponse",
    "HealthResponse",
    "JokeDetail",
    "JokeFilter",
    "JokeListItem",
    "JokeListParams",
    "JokesPageData",
    "LoginForm",
    "LoginType",
    "NewJokeForm",
    "RssItem",
    "SortOrder",
    "UserSummary",
    "form_errors",
    "safe_redirect_path",
]
