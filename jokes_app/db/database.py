"""Database engine and session management.

The engine is created lazily from ``Settings.database_url`` and shared for
the lifetime of the process. ``init_db`` creates missing tables on startup.
"""

from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jokes_app.config import get_settings
from jokes_app.db.models import Base
from jokes_app.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get the shared SQLAlchemy engine, creating it on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        engine_kwargs: dict[str, Any] = {}
        if settings.is_sqlite:
            # Sync routes run in a threadpool, so connections cross threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if settings.database_url in IN_MEMORY_SQLITE_URLS:
                # One connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        _engine = create_engine(settings.database_url, **engine_kwargs)
        log_with_context(
            logger,
            "info",
            "Database engine created",
            dialect=_engine.dialect.name,
            event_type="db_engine_created",
        )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get the shared session factory bound to the engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    engine = engine or get_engine()
    Base.metadata.create_all(engine, checkfirst=True)
    log_with_context(
        logger,
        "info",
        "Database schema ready",
        tables=sorted(Base.metadata.tables),
        event_type="db_schema_ready",
    )


def check_connection(engine: Engine | None = None) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    engine = engine or get_engine()
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        log_with_context(
            logger,
            "info",
            "Database engine disposed",
            event_type="db_engine_disposed",
        )
    _engine = None
    _session_factory = None
