"""Tests for the HTTP API."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import FakeCompletion, FakeProvider, failing_provider
from fastapi.testclient import TestClient
from flowstate import Playlist, RateLimitError, ResolvedVideo, UpstreamError

from flowstate_api.api.app import create_app
from flowstate_api.api.exceptions import PlaylistNotFoundError, error_code_for
from flowstate_api.db import PlaylistRepository
from flowstate_api.settings import Settings

ClientFactory = Callable[..., TestClient]

SONGS = json.dumps(
    [
        {"title": "Midnight City", "artist": "M83"},
        {"title": "Nightcall", "artist": "Kavinsky"},
    ]
)


@pytest.fixture
def provider(make_video: Callable[..., ResolvedVideo]) -> FakeProvider:
    return FakeProvider(
        "youtube",
        results={
            "M83 Midnight City audio": [
                make_video("mc", "Midnight City (Official Audio)", "M83", 244)
            ],
            "Kavinsky Nightcall audio": [
                make_video("nc", "Nightcall", "Kavinsky", 258)
            ],
        },
    )


class TestHealth:
    """Tests for the health endpoint."""

    def test_ok(self, make_client: ClientFactory) -> None:
        response = make_client(FakeCompletion()).get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestGeneratePlaylist:
    """Tests for POST /api/playlists/generate."""

    def test_creates_playlist(
        self,
        make_client: ClientFactory,
        provider: FakeProvider,
        repository: PlaylistRepository,
    ) -> None:
        client = make_client(FakeCompletion(SONGS, "[0, 1]"), provider)

        response = client.post(
            "/api/playlists/generate", json={"prompt": "late night drive"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Late Night Drive"
        assert [t["id"] for t in data["tracks"]] == ["mc", "nc"]
        assert data["tracks"][0]["title"] == "Midnight City"
        assert data["stats"]["track_count"] == 2
        assert data["stats"]["total_duration_seconds"] == 502
        assert repository.load(data["id"]) is not None

    def test_count_and_name(
        self, make_client: ClientFactory, provider: FakeProvider
    ) -> None:
        completion = FakeCompletion(SONGS, "[0]")
        client = make_client(completion, provider)

        response = client.post(
            "/api/playlists/generate",
            json={"prompt": "late night drive", "count": 2, "name": "Drive"},
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Drive"
        assert "suggest 2 specific" in str(completion.calls[0]["system_prompt"])

    def test_no_suggestions(
        self, make_client: ClientFactory, repository: PlaylistRepository
    ) -> None:
        client = make_client(FakeCompletion("[]"))

        response = client.post("/api/playlists/generate", json={"prompt": "x" * 5})

        assert response.status_code == 422
        assert response.json()["error"] == "no_suggestions"
        assert repository.count() == 0

    def test_no_tracks_resolved(self, make_client: ClientFactory) -> None:
        client = make_client(FakeCompletion(SONGS), FakeProvider(default=[]))

        response = client.post(
            "/api/playlists/generate", json={"prompt": "late night drive"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "no_tracks_resolved"

    def test_completion_rate_limited(self, make_client: ClientFactory) -> None:
        client = make_client(
            FakeCompletion(*(RateLimitError("429") for _ in range(5)))
        )

        response = client.post(
            "/api/playlists/generate", json={"prompt": "late night drive"}
        )

        assert response.status_code == 429
        assert response.json()["error"] == "rate_limited"

    @pytest.mark.parametrize(
        "body",
        [{}, {"prompt": ""}, {"prompt": "ok", "count": 0}, {"prompt": "ok", "count": 51}],
        ids=["missing_prompt", "empty_prompt", "zero_count", "count_too_high"],
    )
    def test_validation(self, make_client: ClientFactory, body: dict) -> None:
        response = make_client(FakeCompletion()).post(
            "/api/playlists/generate", json=body
        )
        assert response.status_code == 422


class TestPlaylistCrud:
    """Tests for listing, reading and deleting saved playlists."""

    def test_list_oldest_first(
        self,
        make_client: ClientFactory,
        repository: PlaylistRepository,
        make_playlist: Callable[..., Playlist],
    ) -> None:
        repository.save(make_playlist("newer", created_at_ms=2000, name="Newer"))
        repository.save(make_playlist("older", created_at_ms=1000, name="Older"))

        response = make_client(FakeCompletion()).get("/api/playlists")

        assert response.status_code == 200
        items = response.json()["items"]
        assert [i["id"] for i in items] == ["older", "newer"]
        assert items[0] == {
            "id": "older",
            "name": "Older",
            "track_count": 3,
            "total_duration_seconds": 702,
            "created_at_ms": 1000,
        }

    def test_list_empty(self, make_client: ClientFactory) -> None:
        response = make_client(FakeCompletion()).get("/api/playlists")
        assert response.json() == {"items": []}

    def test_get(
        self,
        make_client: ClientFactory,
        repository: PlaylistRepository,
        make_playlist: Callable[..., Playlist],
    ) -> None:
        playlist = make_playlist("p1")
        repository.save(playlist)

        response = make_client(FakeCompletion()).get("/api/playlists/p1")

        assert response.status_code == 200
        assert Playlist.model_validate(response.json()) == playlist

    def test_get_missing(self, make_client: ClientFactory) -> None:
        response = make_client(FakeCompletion()).get("/api/playlists/nope")

        assert response.status_code == 404
        assert response.json() == {
            "error": "playlist_not_found",
            "message": "Playlist nope not found",
            "playlist_id": "nope",
        }

    def test_delete(
        self,
        make_client: ClientFactory,
        repository: PlaylistRepository,
        make_playlist: Callable[..., Playlist],
    ) -> None:
        repository.save(make_playlist("p1"))
        client = make_client(FakeCompletion())

        assert client.delete("/api/playlists/p1").status_code == 204
        assert client.delete("/api/playlists/p1").status_code == 404
        assert repository.load("p1") is None


class TestSearch:
    """Tests for POST /api/search."""

    def test_returns_results(
        self, make_client: ClientFactory, make_video: Callable[..., ResolvedVideo]
    ) -> None:
        provider = FakeProvider(
            "youtube",
            default=[make_video("a", "Song A"), make_video("b", "Song B")],
        )
        client = make_client(FakeCompletion(), provider)

        response = client.post("/api/search", json={"query": "song", "max_results": 1})

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["provider_id"] for r in results] == ["a"]
        assert provider.queries == ["song"]

    def test_empty_is_ok(self, make_client: ClientFactory) -> None:
        client = make_client(FakeCompletion(), FakeProvider(default=[]))

        response = client.post("/api/search", json={"query": "nothing"})

        assert response.status_code == 200
        assert response.json() == {"results": []}

    def test_all_tiers_failed(self, make_client: ClientFactory) -> None:
        client = make_client(
            FakeCompletion(), failing_provider("youtube"), failing_provider("piped")
        )

        response = client.post("/api/search", json={"query": "song"})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "providers_exhausted"
        assert body["query"] == "song"

    def test_validation(self, make_client: ClientFactory) -> None:
        response = make_client(FakeCompletion()).post(
            "/api/search", json={"query": "song", "max_results": 26}
        )
        assert response.status_code == 422


class TestAi:
    """Tests for the /api/ai endpoints."""

    def test_suggest(self, make_client: ClientFactory) -> None:
        client = make_client(FakeCompletion(SONGS))

        response = client.post(
            "/api/ai/suggest", json={"prompt": "late night drive", "count": 5}
        )

        assert response.status_code == 200
        assert response.json() == {
            "songs": [
                {"title": "Midnight City", "artist": "M83"},
                {"title": "Nightcall", "artist": "Kavinsky"},
            ]
        }

    def test_suggest_unparseable(self, make_client: ClientFactory) -> None:
        client = make_client(FakeCompletion("Sorry, I can't help."))

        response = client.post("/api/ai/suggest", json={"prompt": "late night drive"})

        assert response.status_code == 502
        assert response.json()["error"] == "format_error"

    def test_suggest_upstream_down(self, make_client: ClientFactory) -> None:
        client = make_client(FakeCompletion(UpstreamError("down", status=503)))

        response = client.post("/api/ai/suggest", json={"prompt": "late night drive"})

        assert response.status_code == 502
        assert response.json() == {"error": "upstream_error", "message": "down"}

    def test_filter(
        self, make_client: ClientFactory, sample_tracks: list
    ) -> None:
        client = make_client(FakeCompletion("[2, 0]"))

        response = client.post(
            "/api/ai/filter",
            json={"tracks": [t.model_dump() for t in sample_tracks]},
        )

        assert response.status_code == 200
        assert [t["id"] for t in response.json()["tracks"]] == ["v1", "v3"]

    def test_filter_fails_open(
        self, make_client: ClientFactory, sample_tracks: list
    ) -> None:
        client = make_client(FakeCompletion(UpstreamError("down")))

        response = client.post(
            "/api/ai/filter",
            json={"tracks": [t.model_dump() for t in sample_tracks]},
        )

        assert response.status_code == 200
        assert [t["id"] for t in response.json()["tracks"]] == ["v1", "v2", "v3"]


class TestErrorCodes:
    """Tests for error_code_for."""

    def test_most_specific_wins(self) -> None:
        assert error_code_for(PlaylistNotFoundError("p1")) == "playlist_not_found"
        assert error_code_for(RateLimitError("429")) == "rate_limited"
        assert error_code_for(UpstreamError("down")) == "upstream_error"


class TestAppLifespan:
    """Tests for building services from settings at startup."""

    def test_starts_with_real_services(self, tmp_path: Path) -> None:
        settings = Settings(data=tmp_path / "data")

        with TestClient(create_app(settings)) as client:
            assert client.get("/api/health").json() == {"status": "ok"}
            assert client.get("/api/playlists").json() == {"items": []}

        assert settings.db_path.exists()
