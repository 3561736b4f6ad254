"""SQLAlchemy database configuration and session management."""

from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from portfolio_tracker.config import get_settings

settings = get_settings()


def make_engine(database_url: str) -> Engine:
    """Create an engine, with SQLite-specific settings where needed."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # Needed for SQLite
    return create_engine(database_url, connect_args=connect_args, echo=False)


def make_session_factory(bind: Engine) -> Callable[[], Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        expire_on_commit=False,  # Allow accessing attributes after commit/close
    )


engine = make_engine(settings.database_url)
SessionLocal = make_session_factory(engine)


@contextmanager
def get_db(session_factory: Callable[[], Session] = SessionLocal) -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Usage:
        with get_db() as db:
            db.query(HoldingRecord).all()
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Initialize database tables."""
    from .models import Base

    Base.metadata.create_all(bind=bind)
