"""Tests for naming and display helpers."""

import re
from datetime import date

import pytest
from flowstate.utils.naming import (
    clean_title,
    format_duration,
    generate_playlist_id,
    generate_playlist_name,
)

TODAY = date(2024, 6, 15)


class TestGeneratePlaylistName:
    """Tests for generate_playlist_name."""

    @pytest.mark.parametrize(
        ("prompt", "expected"),
        [
            ("late night drive", "Late Night Drive"),
            ("give me some late night drive music", "Some Late Night"),
            ("Chill SONGS for studying", "Chill Studying"),
            ("music for the rainy days with friends", "Rainy Days Friends"),
            ("I want upbeat workout playlist", "Upbeat Workout"),
            ("play something mellow", "Something Mellow"),
        ],
        ids=[
            "plain",
            "filler_words",
            "uppercase_filler",
            "stop_words",
            "i_want",
            "play",
        ],
    )
    def test_names_from_keywords(self, prompt: str, expected: str) -> None:
        assert generate_playlist_name(prompt, today=TODAY) == expected

    def test_short_words_dropped(self) -> None:
        """Words of three characters or fewer never make the name."""
        assert generate_playlist_name("sad pop and emo jams", today=TODAY) == "Jams"

    def test_singular_song_is_filler(self) -> None:
        """The singular "song" is dropped like "songs"."""
        assert generate_playlist_name("song about heartbreak", today=TODAY) == (
            "About Heartbreak"
        )
        assert generate_playlist_name("a song", today=TODAY) == (
            f"Playlist {TODAY.strftime('%x')}"
        )

    def test_fillers_inside_words_are_kept(self) -> None:
        """Only whole filler words are removed."""
        assert generate_playlist_name("playful musical", today=TODAY) == (
            "Playful Musical"
        )

    @pytest.mark.parametrize(
        "prompt",
        ["", "give me music", "songs for the car", "   "],
        ids=["empty", "only_filler", "only_short_words", "blank"],
    )
    def test_falls_back_to_date(self, prompt: str) -> None:
        assert generate_playlist_name(prompt, today=TODAY) == (
            f"Playlist {TODAY.strftime('%x')}"
        )


class TestGeneratePlaylistId:
    """Tests for generate_playlist_id."""

    def test_format(self) -> None:
        playlist_id = generate_playlist_id(1718452800000)
        assert re.fullmatch(r"playlist-1718452800000-[0-9a-f]{9}", playlist_id)

    def test_unique(self) -> None:
        ids = {generate_playlist_id(1718452800000) for _ in range(50)}
        assert len(ids) == 50

    def test_defaults_to_now(self) -> None:
        assert generate_playlist_id().startswith("playlist-")


class TestCleanTitle:
    """Tests for clean_title."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Nightcall (Official Video)", "Nightcall"),
            ("Nightcall (OFFICIAL AUDIO)", "Nightcall"),
            ("Nightcall [Official Music Video]", "Nightcall"),
            ("Nightcall (Official Video) (Remastered)", "Nightcall (Remastered)"),
            ("Nightcall (Lyric Video)", "Nightcall (Lyric Video)"),
            ("Nightcall", "Nightcall"),
        ],
    )
    def test_cleans(self, title: str, expected: str) -> None:
        assert clean_title(title) == expected


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0:00"),
            (5, "0:05"),
            (225, "3:45"),
            (600, "10:00"),
            (3600, "1:00:00"),
            (3723, "1:02:03"),
            (-5, "0:00"),
        ],
    )
    def test_formats(self, seconds: int, expected: str) -> None:
        assert format_duration(seconds) == expected
