"""Playlist storage backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from types import TracebackType
from typing import Protocol

from flowstate.models.domain import Playlist

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "flowstate-playlists"


class PlaylistStoreProtocol(Protocol):
    """Storage collaborator for finished playlists.

    ``save`` fully replaces any playlist with the same id.
    ``list_all`` returns playlists oldest-first by creation time.
    """

    def save(self, playlist: Playlist) -> None: ...

    def load(self, playlist_id: str) -> Playlist | None: ...

    def delete(self, playlist_id: str) -> bool: ...

    def list_all(self) -> list[Playlist]: ...


class InMemoryPlaylistStore:
    """Dict-backed store for tests and one-off runs.

    Implements PlaylistStoreProtocol.
    """

    def __init__(self) -> None:
        self._playlists: dict[str, Playlist] = {}

    def save(self, playlist: Playlist) -> None:
        self._playlists[playlist.id] = playlist

    def load(self, playlist_id: str) -> Playlist | None:
        return self._playlists.get(playlist_id)

    def delete(self, playlist_id: str) -> bool:
        return self._playlists.pop(playlist_id, None) is not None

    def list_all(self) -> list[Playlist]:
        return sorted(self._playlists.values(), key=lambda p: p.created_at_ms)

    def __len__(self) -> int:
        return len(self._playlists)


class PlaylistStore:
    """Persistent blob store of playlists in a SQLite file.

    Each playlist is stored as one JSON blob under (namespace, id), so
    several independent libraries can share a database file.
    Implements PlaylistStoreProtocol.

    Usage::

        with PlaylistStore(Path("flowstate.db")) as store:
            store.save(playlist)
            for saved in store.list_all():
                ...
    """

    def __init__(self, path: Path, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._path = path
        self._namespace = namespace
        self._conn: sqlite3.Connection | None = None
        # Writes may arrive from worker threads via asyncio.to_thread
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        """Open the database and ensure the schema exists."""
        if self._conn is not None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute(
            "CREATE TABLE IF NOT EXISTS playlists ("
            "  namespace TEXT NOT NULL,"
            "  id TEXT NOT NULL,"
            "  created_at_ms INTEGER NOT NULL,"
            "  payload TEXT NOT NULL,"
            "  PRIMARY KEY (namespace, id)"
            ")"
        )
        self._conn.commit()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("PlaylistStore is not open")
        return self._conn

    def save(self, playlist: Playlist) -> None:
        """Insert or fully replace a playlist by id."""
        conn = self._connection()
        with self._lock:
            conn.execute(
                "INSERT OR REPLACE INTO playlists"
                " (namespace, id, created_at_ms, payload) VALUES (?, ?, ?, ?)",
                (
                    self._namespace,
                    playlist.id,
                    playlist.created_at_ms,
                    playlist.model_dump_json(),
                ),
            )
            conn.commit()

    def load(self, playlist_id: str) -> Playlist | None:
        """Look up a playlist by id."""
        with self._lock:
            row = (
                self._connection()
                .execute(
                    "SELECT payload FROM playlists WHERE namespace = ? AND id = ?",
                    (self._namespace, playlist_id),
                )
                .fetchone()
            )
        if row is None:
            return None
        return Playlist.model_validate_json(row[0])

    def delete(self, playlist_id: str) -> bool:
        """Delete a playlist. Returns False if it did not exist."""
        conn = self._connection()
        with self._lock:
            cursor = conn.execute(
                "DELETE FROM playlists WHERE namespace = ? AND id = ?",
                (self._namespace, playlist_id),
            )
            conn.commit()
        return cursor.rowcount > 0

    def list_all(self) -> list[Playlist]:
        """All playlists in this namespace, oldest first."""
        with self._lock:
            rows = (
                self._connection()
                .execute(
                    "SELECT payload FROM playlists WHERE namespace = ?"
                    " ORDER BY created_at_ms, id",
                    (self._namespace,),
                )
                .fetchall()
            )
        return [Playlist.model_validate_json(row[0]) for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> PlaylistStore:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __len__(self) -> int:
        if self._conn is None:
            return 0
        with self._lock:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM playlists WHERE namespace = ?",
                (self._namespace,),
            ).fetchone()
        return row[0] if row else 0
