"""Joke queries and mutations.

The listing loader turns query-string parameters into a filtered, sorted read
of one user's jokes plus the list of users for the selector.
"""

from datetime import UTC
from email.utils import format_datetime

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import Session, joinedload

from jokes_app.db.models import Joke, User
from jokes_app.exceptions import JokeForbiddenException, JokeNotFoundException
from jokes_app.logging_config import get_logger, log_with_context
from jokes_app.models.forms import NewJokeForm
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

logger = get_logger(__name__)


def parse_list_params(
    user_id: str | None = None,
    search_query: str | None = None,
    sort_order: str | None = None,
) -> JokeListParams:
    """Normalise raw query-string values for the jokes listing.

    Empty strings count as missing. Unrecognised sort orders fall back to
    descending.
    """
    order = SortOrder.parse(sort_order)
    if order is None:
        log_with_context(
            logger,
            "warning",
            "Unknown sort order, using default",
            sort_order=sort_order,
            event_type="jokes_sort_order_invalid",
        )
        order = SortOrder.DESC

    return JokeListParams(
        user_id=user_id or None,
        search_query=search_query or "",
        sort_order=order,
    )


def build_joke_filter(params: JokeListParams, current_user_id: str | None) -> JokeFilter | None:
    """Resolve which jokes to read.

    The selected user wins over the logged-in user. Anonymous visitors get no
    filter at all, meaning no jokes are listed.
    """
    if current_user_id is None:
        return None
    return JokeFilter(
        jokester_id=params.user_id or current_user_id,
        name_contains=params.search_query,
        sort_order=params.sort_order,
    )


def joke_list_statement(joke_filter: JokeFilter) -> Select:
    """SELECT id, name FROM jokes filtered by owner and name, ordered by name."""
    order_by = Joke.name.asc() if joke_filter.sort_order is SortOrder.ASC else Joke.name.desc()
    return (
        select(Joke.id, Joke.name)
        .where(
            Joke.jokester_id == joke_filter.jokester_id,
            Joke.name.contains(joke_filter.name_contains, autoescape=True),
        )
        .order_by(order_by)
    )


def list_users(session: Session) -> list[UserSummary]:
    """All users as ``{id, username}`` for the user selector."""
    rows = session.execute(select(User.id, User.username).order_by(User.username)).all()
    return [UserSummary(id=row.id, username=row.username) for row in rows]


def list_jokes(session: Session, joke_filter: JokeFilter) -> list[JokeListItem]:
    rows = session.execute(joke_list_statement(joke_filter)).all()
    return [JokeListItem(id=row.id, name=row.name) for row in rows]


def load_jokes_page(session: Session, current_user: User | None, params: JokeListParams) -> JokesPageData:
    """Fetch everything the jokes listing page renders.

    Args:
        session: Database session
        current_user: Logged-in user, or None for anonymous visitors
        params: Parsed listing parameters

    Returns:
        JokesPageData with jokes, users, the current user and the selected user id
    """
    users = list_users(session)

    joke_filter = build_joke_filter(params, current_user.id if current_user else None)
    jokes = list_jokes(session, joke_filter) if joke_filter else []

    log_with_context(
        logger,
        "debug",
        "Jokes page loaded",
        user_id=current_user.id if current_user else None,
        selected_user_id=params.user_id,
        search_query=params.search_query,
        sort_order=params.sort_order.value,
        joke_count=len(jokes),
        event_type="jokes_page_loaded",
    )

    return JokesPageData(
        joke_list_items=jokes,
        user=UserSummary(id=current_user.id, username=current_user.username) if current_user else None,
        users=users,
        selected_user_id=params.user_id,
    )


def get_joke(session: Session, joke_id: str) -> JokeDetail:
    """Load one joke with its jokester.

    Raises:
        JokeNotFoundException: If no joke has this id
    """
    joke = session.scalars(select(Joke).options(joinedload(Joke.jokester)).where(Joke.id == joke_id)).first()
    if joke is None:
        raise JokeNotFoundException(details={"joke_id": joke_id})

    return JokeDetail(
        id=joke.id,
        name=joke.name,
        content=joke.content,
        jokester_id=joke.jokester_id,
        jokester_username=joke.jokester.username,
        created_at=joke.created_at,
    )


def create_joke(session: Session, jokester_id: str, form: NewJokeForm) -> Joke:
    joke = Joke(jokester_id=jokester_id, name=form.name, content=form.content)
    session.add(joke)
    session.commit()

    log_with_context(
        logger,
        "info",
        "Joke created",
        joke_id=joke.id,
        user_id=jokester_id,
        event_type="joke_created",
    )
    return joke


def delete_joke(session: Session, joke_id: str, user_id: str) -> None:
    """Delete a joke owned by ``user_id``.

    Raises:
        JokeNotFoundException: If no joke has this id
        JokeForbiddenException: If the joke belongs to someone else
    """
    jokester_id = session.scalar(select(Joke.jokester_id).where(Joke.id == joke_id))
    if jokester_id is None:
        raise JokeNotFoundException("Can't delete what does not exist", details={"joke_id": joke_id})
    if jokester_id != user_id:
        log_with_context(
            logger,
            "warning",
            "Attempt to delete another user's joke",
            joke_id=joke_id,
            user_id=user_id,
            event_type="joke_delete_forbidden",
        )
        raise JokeForbiddenException(details={"joke_id": joke_id})

    session.execute(delete(Joke).where(Joke.id == joke_id))
    session.commit()

    log_with_context(
        logger,
        "info",
        "Joke deleted",
        joke_id=joke_id,
        user_id=user_id,
        event_type="joke_deleted",
    )


def list_recent_jokes(session: Session, limit: int, base_url: str) -> list[RssItem]:
    """Newest jokes first, shaped as RSS items."""
    jokes = session.scalars(
        select(Joke).options(joinedload(Joke.jokester)).order_by(Joke.created_at.desc()).limit(limit)
    ).all()

    items = []
    for joke in jokes:
        created_at = joke.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always stored in UTC
            created_at = created_at.replace(tzinfo=UTC)
        items.append(
            RssItem(
                id=joke.id,
                title=joke.name,
                description=joke.content,
                author=joke.jokester.username,
                link=f"{base_url}/jokes/{joke.id}",
                pub_date=format_datetime(created_at.astimezone(UTC), usegmt=True),
            )
        )
    return items
