"""Demo data: one user with a handful of jokes."""

from sqlalchemy import Engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jokes_app.db.models import Joke, User
from jokes_app.logging_config import get_logger, log_with_context
from jokes_app.services.auth_service import hash_password

logger = get_logger(__name__)

DEMO_USERNAME = "kody"
DEMO_PASSWORD = "twixrox"

DEMO_JOKES = [
    {
        "name": "Road worker",
        "content": "I never wanted to believe that my Dad was stealing from his job as a road worker. "
        "But when I got home, all the signs were there.",
    },
    {
        "name": "Frisbee",
        "content": "I was wondering why the frisbee was getting bigger, then it hit me.",
    },
    {
        "name": "Trees",
        "content": "Why do trees seem suspicious on sunny days? Dunno, they're just a bit shady.",
    },
    {
        "name": "Skeletons",
        "content": "Why don't skeletons ride roller coasters? They don't have the stomach for it.",
    },
    {
        "name": "Hippos",
        "content": "Why don't you find hippopotamuses hiding in trees? They're really good at it.",
    },
    {
        "name": "Dinner",
        "content": "What did one plate say to the other plate? Dinner is on me!",
    },
    {
        "name": "Elevator",
        "content": "My first time using an elevator was an uplifting experience. The second time let me down.",
    },
]


def seed_demo_data(engine: Engine) -> bool:
    """Insert the demo user and jokes unless the user already exists.

    Returns:
        True if data was inserted, False if it was already there
    """
    with Session(engine) as session:
        if session.scalar(select(User.id).where(User.username == DEMO_USERNAME)) is not None:
            log_with_context(
                logger,
                "debug",
                "Demo data already present",
                event_type="db_seed_skipped",
            )
            return False

        user = User(username=DEMO_USERNAME, password_hash=hash_password(DEMO_PASSWORD))
        user.jokes = [Joke(**joke) for joke in DEMO_JOKES]
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            # Another worker seeded concurrently
            session.rollback()
            return False

    log_with_context(
        logger,
        "info",
        "Demo data seeded",
        username=DEMO_USERNAME,
        joke_count=len(DEMO_JOKES),
        event_type="db_seeded",
    )
    return True
