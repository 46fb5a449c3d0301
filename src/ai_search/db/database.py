"""Database engine and session management."""

from collections.abc import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ai_search.config import settings
from ai_search.db.models import Base
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)


def create_db_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """Create an engine for database_url (defaults to settings.database_url).

    SQLite connections are shared with FastAPI's worker threads and enforce
    foreign keys.
    """
    database_url = database_url or settings.database_url
    echo = settings.database_echo if echo is None else echo

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(database_url, echo=echo, pool_pre_ping=True)


engine = create_db_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready", extra={"url": bind.url.render_as_string(hide_password=True)})


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session per request.

    Commits when the request handler returns, rolls back on error.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
