"""Database repository for playlists."""

from flowstate import Playlist
from flowstate.services.store import DEFAULT_NAMESPACE
from sqlalchemy import Engine
from sqlmodel import Session, col, select

from flowstate_api.db.models import PlaylistRecord


class PlaylistRepository:
    """Repository for playlist database operations.

    Implements flowstate's PlaylistStoreProtocol, so it can be handed to
    PlaylistAssembler directly.
    """

    def __init__(self, engine: Engine, namespace: str = DEFAULT_NAMESPACE) -> None:
        """Initialize repository with database engine."""
        self._engine = engine
        self._namespace = namespace

    def save(self, playlist: Playlist) -> None:
        """Insert a playlist, fully replacing any with the same id."""
        with Session(self._engine) as session:
            session.merge(PlaylistRecord.from_playlist(playlist, self._namespace))
            session.commit()

    def load(self, playlist_id: str) -> Playlist | None:
        """Get playlist by ID."""
        with Session(self._engine) as session:
            record = session.get(PlaylistRecord, (self._namespace, playlist_id))
            return record.to_playlist() if record else None

    def delete(self, playlist_id: str) -> bool:
        """Delete playlist by ID. Returns False if it did not exist."""
        with Session(self._engine) as session:
            record = session.get(PlaylistRecord, (self._namespace, playlist_id))
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    def list_all(self) -> list[Playlist]:
        """List all playlists, oldest first."""
        with Session(self._engine) as session:
            stmt = (
                select(PlaylistRecord)
                .where(PlaylistRecord.namespace == self._namespace)
                .order_by(col(PlaylistRecord.created_at_ms), col(PlaylistRecord.id))
            )
            return [record.to_playlist() for record in session.exec(stmt).all()]

    def count(self) -> int:
        """Count playlists in this namespace."""
        with Session(self._engine) as session:
            stmt = select(PlaylistRecord.id).where(
                PlaylistRecord.namespace == self._namespace
            )
            return len(session.exec(stmt).all())
