"""Database module for saved playlists."""

from flowstate_api.db.engine import DB_FILE, create_db_engine, init_db
from flowstate_api.db.models import PlaylistRecord
from flowstate_api.db.repository import PlaylistRepository

__all__ = [
    "DB_FILE",
    "PlaylistRecord",
    "PlaylistRepository",
    "create_db_engine",
    "init_db",
]
