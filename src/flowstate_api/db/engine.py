"""SQLite engine for the playlist repository."""

import logging
from pathlib import Path

from sqlalchemy import Engine, inspect
from sqlmodel import SQLModel, create_engine

logger = logging.getLogger(__name__)

DB_FILE = "flowstate.db"


def create_db_engine(db_path: Path, *, echo: bool = False) -> Engine:
    """Create an engine for the playlist database, creating its directory.

    Request handlers run in FastAPI's threadpool, so the connection is not
    tied to the thread that opened it.

    Args:
        db_path: Path to the SQLite database file.
        echo: Log every SQL statement (debug mode).
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
        echo=echo,
    )


def init_db(engine: Engine) -> None:
    """Create the playlists table if it does not exist yet."""
    # Registers PlaylistRecord on SQLModel.metadata
    from flowstate_api.db.models import PlaylistRecord

    table = PlaylistRecord.__tablename__
    if not inspect(engine).has_table(table):
        logger.info("Creating table %s", table)
    SQLModel.metadata.create_all(engine)
