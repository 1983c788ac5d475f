#!/usr/bin/env python3
"""Command-line interface for flowstate.

This CLI is primarily for debugging and development.
For production use, import flowstate as a library or run the API.
"""

import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from flowstate import create_playlist_generator, create_resolver
from flowstate.config import (
    CompletionConfig,
    GeneratorConfig,
    ResolverConfig,
)
from flowstate.exceptions import FlowstateError
from flowstate.lib.parsing import parse_string_list
from flowstate.models.domain import Playlist, ResolvedVideo
from flowstate.models.enums import GenerationStage
from flowstate.services.store import PlaylistStore
from flowstate.utils.naming import format_duration

logger = logging.getLogger("flowstate")


@dataclass(frozen=True)
class CLIContext:
    """Options shared by every command."""

    verbose: bool
    db: Path
    completion: CompletionConfig
    resolver: ResolverConfig


class StringListType(click.ParamType):
    """A repeatable string option whose environment variable holds a list.

    The variable is read as a JSON list or comma-separated, the same way the
    API settings read it, rather than split on whitespace.
    """

    name = "text"

    def split_envvar_value(self, rv: str) -> Sequence[str]:
        try:
            return parse_string_list(rv)
        except ValueError as e:
            raise click.BadParameter(str(e)) from e


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first, so it can be called again to switch to
    a command's own console.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler. Pass the
            console a status spinner uses so logs appear above it.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # httpx logs full request URLs, which carry API keys
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def print_playlist(console: Console, playlist: Playlist) -> None:
    """Print a playlist as a track table followed by its stats."""
    table = Table(
        title=f"[bold yellow]{playlist.name}[/bold yellow]",
        title_justify="left",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Artist", style="cyan")
    table.add_column("Time", justify="right")
    table.add_column("ID", style="dim")

    for i, track in enumerate(playlist.tracks, 1):
        table.add_row(
            str(i),
            track.title,
            track.artist,
            format_duration(track.duration_seconds),
            track.id,
        )

    console.print()
    console.print(table)
    stats = playlist.stats
    console.print(
        f"\n[cyan]{stats.track_count}[/cyan] tracks, "
        f"[cyan]{format_duration(stats.total_duration_seconds)}[/cyan] total "
        f"[dim](id {playlist.id})[/dim]"
    )


def print_videos(console: Console, videos: Sequence[ResolvedVideo]) -> None:
    """Print resolver matches as a table."""
    table = Table()
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Channel", style="cyan")
    table.add_column("Time", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Source", style="dim")

    for i, video in enumerate(videos, 1):
        table.add_row(
            str(i),
            video.title,
            video.channel,
            format_duration(video.duration_seconds),
            video.provider_id,
            video.source,
        )
    console.print(table)


def dump_json(data: object) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--db",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("flowstate.db"),
    show_default=True,
    envvar="FLOWSTATE_DB",
    help="SQLite file holding saved playlists.",
)
@click.option(
    "--completion-api-key",
    envvar="FLOWSTATE_COMPLETION_API_KEY",
    help="API key for the completion service.",
)
@click.option(
    "--completion-base-url",
    envvar="FLOWSTATE_COMPLETION_BASE_URL",
    default=CompletionConfig.base_url,
    show_default=True,
    help="OpenAI-compatible completion API base URL.",
)
@click.option(
    "--completion-model",
    envvar="FLOWSTATE_COMPLETION_MODEL",
    default=CompletionConfig.model,
    show_default=True,
    help="Completion model name.",
)
@click.option(
    "--youtube-api-key",
    "youtube_api_keys",
    type=StringListType(),
    multiple=True,
    envvar="FLOWSTATE_YOUTUBE_API_KEYS",
    help="YouTube Data API key. Repeat for several keys.",
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    db: Path,
    completion_api_key: str | None,
    completion_base_url: str,
    completion_model: str,
    youtube_api_keys: tuple[str, ...],
) -> None:
    """Generate playlists from a mood or activity prompt."""
    ctx.obj = CLIContext(
        verbose=verbose,
        db=db,
        completion=CompletionConfig(
            api_key=completion_api_key,
            base_url=completion_base_url,
            model=completion_model,
        ),
        resolver=ResolverConfig(youtube_api_keys=youtube_api_keys),
    )
    setup_logging(verbose=verbose)


@main.command(name="generate")
@click.argument("prompt")
@click.option(
    "--count",
    type=click.IntRange(1, 50),
    default=GeneratorConfig.suggestion_count,
    show_default=True,
    help="Number of songs to ask for.",
)
@click.option("--name", default=None, help="Playlist name (derived if omitted).")
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum concurrent lookups (unbounded if omitted).",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def generate_cmd(
    obj: CLIContext,
    prompt: str,
    count: int,
    name: str | None,
    concurrency: int | None,
    as_json: bool,
) -> None:
    """Generate a playlist for PROMPT and save it.

    \b
    Examples:
      flowstate generate "late night drive"
      flowstate generate "rainy sunday morning" --count 15 --name "Rain"
    """
    console = Console(stderr=as_json)
    setup_logging(verbose=obj.verbose, console=console)

    async def run(store: PlaylistStore) -> Playlist:
        generator = create_playlist_generator(
            obj.completion,
            obj.resolver,
            GeneratorConfig(suggestion_count=count, resolve_concurrency=concurrency),
            store=store,
        )
        async with generator:
            with console.status("Starting") as status:

                def on_stage(stage: GenerationStage) -> None:
                    if not stage.is_terminal:
                        status.update(f"{stage.value.capitalize()}...")

                return await generator.generate(prompt, name=name, on_stage=on_stage)

    try:
        with PlaylistStore(obj.db) as store:
            playlist = asyncio.run(run(store))
    except FlowstateError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if as_json:
        dump_json(playlist.model_dump())
    else:
        print_playlist(console, playlist)


@main.command(name="search")
@click.argument("query")
@click.option(
    "--max-results",
    type=click.IntRange(1, 25),
    default=5,
    show_default=True,
    help="Maximum number of matches.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def search_cmd(obj: CLIContext, query: str, max_results: int, as_json: bool) -> None:
    """Resolve QUERY against the search providers."""
    console = Console()

    async def run() -> list[ResolvedVideo]:
        resolver, http = create_resolver(obj.resolver)
        try:
            return await resolver.resolve(query, max_results)
        finally:
            await http.aclose()

    try:
        videos = asyncio.run(run())
    except FlowstateError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if as_json:
        dump_json([v.model_dump() for v in videos])
    elif not videos:
        console.print("[yellow]No matches found[/yellow]")
    else:
        print_videos(console, videos)


@main.command(name="list")
@click.pass_obj
def list_cmd(obj: CLIContext) -> None:
    """List saved playlists, oldest first."""
    console = Console()
    with PlaylistStore(obj.db) as store:
        playlists = store.list_all()

    if not playlists:
        console.print("[yellow]No saved playlists[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Tracks", justify="right")
    table.add_column("Time", justify="right")
    for playlist in playlists:
        table.add_row(
            playlist.id,
            playlist.name,
            str(playlist.stats.track_count),
            format_duration(playlist.stats.total_duration_seconds),
        )
    console.print(table)


@main.command(name="show")
@click.argument("playlist_id", metavar="ID")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def show_cmd(obj: CLIContext, playlist_id: str, as_json: bool) -> None:
    """Show a saved playlist."""
    with PlaylistStore(obj.db) as store:
        playlist = store.load(playlist_id)
    if playlist is None:
        raise click.ClickException(f"Playlist not found: {playlist_id}")

    if as_json:
        dump_json(playlist.model_dump())
    else:
        print_playlist(Console(), playlist)


@main.command(name="delete")
@click.argument("playlist_id", metavar="ID")
@click.pass_obj
def delete_cmd(obj: CLIContext, playlist_id: str) -> None:
    """Delete a saved playlist."""
    with PlaylistStore(obj.db) as store:
        deleted = store.delete(playlist_id)
    if not deleted:
        raise click.ClickException(f"Playlist not found: {playlist_id}")
    Console().print(f"[green]Deleted[/green] {playlist_id}")


if __name__ == "__main__":
    main()
