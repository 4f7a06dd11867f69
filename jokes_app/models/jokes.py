"""Pydantic models for joke listing, detail and feed data."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys (e.g. ``jokeListItems``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SortOrder(str, Enum):
    """Direction for ordering jokes by name."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder | None":
        """Return the matching order, or None when the value is not recognised.

        Matching ignores case. Empty and missing values map to the default
        (descending).
        """
        if not value:
            return cls.DESC
        try:
            return cls(value.lower())
        except ValueError:
            return None


class UserSummary(CamelModel):
    """Public view of a user: id and username only."""

    id: str
    username: str


class JokeListItem(CamelModel):
    """A joke as shown in the listing."""

    id: str
    name: str


class JokeListParams(BaseModel):
    """Listing parameters as read from the query string.

    ``user_id`` is None when the parameter is missing or empty.
    """

    user_id: str | None = None
    search_query: str = ""
    sort_order: SortOrder = SortOrder.DESC


class JokeFilter(BaseModel):
    """Resolved joke query: owner, name substring and name ordering."""

    jokester_id: str
    name_contains: str = ""
    sort_order: SortOrder = SortOrder.DESC


class JokesPageData(CamelModel):
    """Everything the jokes listing page renders."""

    joke_list_items: list[JokeListItem] = Field(default_factory=list)
    user: UserSummary | None = None
    users: list[UserSummary] = Field(default_factory=list)
    selected_user_id: str | None = None


class JokeDetail(CamelModel):
    """A single joke with its jokester."""

    id: str
    name: str
    content: str
    jokester_id: str
    jokester_username: str
    created_at: datetime


class RssItem(BaseModel):
    """One entry of the RSS feed."""

    id: str
    title: str
    description: str
    author: str
    link: str
    pub_date: str
