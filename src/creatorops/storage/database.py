"""SQLite database initialization and session management."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

# Import models so SQLModel registers them
from creatorops.storage import models as _models  # noqa: F401


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLAlchemy engine for the given database path and ensure tables exist.

    The caller owns the engine; the API keeps one on ``app.state``.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        # Request handlers run in a threadpool
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    return engine


def get_session(engine: Engine) -> Session:
    """Create a new database session."""
    return Session(engine)
