"""Test fixtures and configuration for flowstate-api tests.

This module provides shared fixtures organized into:
- Isolation fixtures: Environment, working directory and logging
- Database fixtures: In-memory SQLite for repository tests
- Application fixtures: TestClient over fake-backed services
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fakes import FakeCompletion, FakeProvider
from fastapi.testclient import TestClient
from flowstate import (
    ContentFilter,
    Playlist,
    PlaylistAssembler,
    PlaylistGenerator,
    PlaylistStats,
    SuggestionGenerator,
    Track,
    VideoResolver,
)
from flowstate.services.retry import RetryPolicy
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from flowstate_api.api.app import create_app
from flowstate_api.api.container import Services
from flowstate_api.db import PlaylistRepository
from flowstate_api.settings import Settings, get_settings

# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Isolate tests from .env file and shell environment."""
    for key in list(os.environ.keys()):
        if key.startswith("FLOWSTATE_"):
            monkeypatch.delenv(key, raising=False)
    # Change to temp dir so Settings won't find .env file
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """create_app reconfigures the root and uvicorn loggers."""
    names = ("", "uvicorn", "uvicorn.error", "uvicorn.access")
    saved = {
        name: (
            list(logging.getLogger(name).handlers),
            logging.getLogger(name).level,
            logging.getLogger(name).propagate,
        )
        for name in names
    }
    yield
    for name, (handlers, level, propagate) in saved.items():
        target = logging.getLogger(name)
        target.handlers[:] = handlers
        target.setLevel(level)
        target.propagate = propagate


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create in-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine: Engine) -> PlaylistRepository:
    """Create repository with test engine."""
    return PlaylistRepository(engine)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def make_playlist(sample_tracks: list[Track]) -> Callable[..., Playlist]:
    """Build playlists over the sample tracks."""

    def _make(
        playlist_id: str,
        created_at_ms: int = 1_000,
        name: str = "Mix",
        tracks: list[Track] | None = None,
    ) -> Playlist:
        members = sample_tracks if tracks is None else tracks
        return Playlist(
            id=playlist_id,
            name=name,
            tracks=members,
            created_at_ms=created_at_ms,
            stats=PlaylistStats.from_tracks(members),
        )

    return _make


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def make_client(
    repository: PlaylistRepository, retry: RetryPolicy
) -> Generator[Callable[..., TestClient], None, None]:
    """Start the app over fake services and return a TestClient.

    The completion fake serves both the suggestion and filter steps, in
    the order they are called.
    """
    clients: list[TestClient] = []

    def _make(completion: FakeCompletion, *providers: FakeProvider) -> TestClient:
        suggestions = SuggestionGenerator(completion, retry=retry)
        resolver = VideoResolver(providers or (FakeProvider(),))
        content_filter = ContentFilter(completion, retry=retry)
        services = Services(
            suggestions=suggestions,
            resolver=resolver,
            content_filter=content_filter,
            generator=PlaylistGenerator(
                suggestions,
                resolver,
                content_filter,
                PlaylistAssembler(repository),
            ),
            repository=repository,
        )
        client = TestClient(create_app(Settings(), services))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
