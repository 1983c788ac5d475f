"""Tests for the playlist repository."""

from collections.abc import Callable
from pathlib import Path

from flowstate import Playlist, Track
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from flowstate_api.db import (
    PlaylistRecord,
    PlaylistRepository,
    create_db_engine,
    init_db,
)

PlaylistFactory = Callable[..., Playlist]


class TestPlaylistRecord:
    """Tests for PlaylistRecord conversion."""

    def test_copies_listing_columns(self, make_playlist: PlaylistFactory) -> None:
        playlist = make_playlist("p1", created_at_ms=42, name="Drive")

        record = PlaylistRecord.from_playlist(playlist, "ns")

        assert record.namespace == "ns"
        assert record.id == "p1"
        assert record.name == "Drive"
        assert record.created_at_ms == 42
        assert record.track_count == 3
        assert record.total_duration_seconds == 702

    def test_round_trips(self, make_playlist: PlaylistFactory) -> None:
        playlist = make_playlist("p1")
        assert PlaylistRecord.from_playlist(playlist, "ns").to_playlist() == playlist


class TestPlaylistRepository:
    """Tests for PlaylistRepository."""

    def test_save_and_load(
        self, repository: PlaylistRepository, make_playlist: PlaylistFactory
    ) -> None:
        playlist = make_playlist("p1")

        repository.save(playlist)

        assert repository.load("p1") == playlist

    def test_load_missing(self, repository: PlaylistRepository) -> None:
        assert repository.load("missing") is None

    def test_save_replaces(
        self,
        repository: PlaylistRepository,
        make_playlist: PlaylistFactory,
        sample_tracks: list[Track],
    ) -> None:
        repository.save(make_playlist("p1", name="Before"))
        repository.save(make_playlist("p1", name="After", tracks=sample_tracks[1:]))

        loaded = repository.load("p1")

        assert loaded is not None
        assert loaded.name == "After"
        assert loaded.track_ids == ["v2", "v3"]
        assert repository.count() == 1

    def test_list_all_oldest_first(
        self, repository: PlaylistRepository, make_playlist: PlaylistFactory
    ) -> None:
        repository.save(make_playlist("c", created_at_ms=300))
        repository.save(make_playlist("a", created_at_ms=100))
        repository.save(make_playlist("b", created_at_ms=200))

        assert [p.id for p in repository.list_all()] == ["a", "b", "c"]

    def test_delete(
        self, repository: PlaylistRepository, make_playlist: PlaylistFactory
    ) -> None:
        repository.save(make_playlist("p1"))

        assert repository.delete("p1") is True
        assert repository.delete("p1") is False
        assert repository.load("p1") is None
        assert repository.count() == 0

    def test_namespaces_are_isolated(
        self, engine: Engine, make_playlist: PlaylistFactory
    ) -> None:
        alice = PlaylistRepository(engine, "alice")
        bob = PlaylistRepository(engine, "bob")

        alice.save(make_playlist("p1", name="Alice's"))

        assert bob.load("p1") is None
        assert bob.list_all() == []
        assert bob.delete("p1") is False

        bob.save(make_playlist("p1", name="Bob's"))

        loaded = alice.load("p1")
        assert loaded is not None
        assert loaded.name == "Alice's"
        assert alice.count() == bob.count() == 1

    def test_stores_one_row_per_playlist(
        self,
        engine: Engine,
        repository: PlaylistRepository,
        make_playlist: PlaylistFactory,
    ) -> None:
        repository.save(make_playlist("p1"))
        repository.save(make_playlist("p1"))

        with Session(engine) as session:
            rows = session.exec(select(PlaylistRecord)).all()
        assert len(rows) == 1


class TestEngine:
    """Tests for create_db_engine and init_db."""

    def test_creates_database_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "data" / "flowstate.db"

        engine = create_db_engine(db_path)
        try:
            init_db(engine)
            assert db_path.exists()
            assert inspect(engine).has_table("playlists")
        finally:
            engine.dispose()

    def test_init_keeps_existing_rows(
        self, tmp_path: Path, make_playlist: PlaylistFactory
    ) -> None:
        engine = create_db_engine(tmp_path / "flowstate.db")
        try:
            init_db(engine)
            PlaylistRepository(engine).save(make_playlist("p1"))

            init_db(engine)

            assert PlaylistRepository(engine).load("p1") is not None
        finally:
            engine.dispose()

    def test_echo(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "flowstate.db", echo=True)
        try:
            assert engine.echo is True
        finally:
            engine.dispose()
