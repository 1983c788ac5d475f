"""Playlist generation and management endpoints."""

import asyncio

from fastapi import APIRouter, status
from flowstate import Playlist

from flowstate_api.api.deps import GeneratorDep, RepositoryDep
from flowstate_api.api.exceptions import PlaylistNotFoundError
from flowstate_api.schemas.playlists import (
    GenerateRequest,
    PlaylistListResponse,
    PlaylistSummary,
)

router = APIRouter(prefix="/playlists", tags=["playlists"])


# =============================================================================
# /generate MUST be registered BEFORE /{playlist_id} routes
# =============================================================================


@router.post(
    "/generate", response_model=Playlist, status_code=status.HTTP_201_CREATED
)
async def generate_playlist(
    body: GenerateRequest,
    generator: GeneratorDep,
) -> Playlist:
    """Generate a playlist from a prompt and save it."""
    return await generator.generate(body.prompt, count=body.count, name=body.name)


# =============================================================================
# CRUD routes
# =============================================================================


@router.get("", response_model=PlaylistListResponse)
async def list_playlists(repository: RepositoryDep) -> PlaylistListResponse:
    """List saved playlists, oldest first."""
    playlists = await asyncio.to_thread(repository.list_all)
    return PlaylistListResponse(
        items=[PlaylistSummary.from_playlist(p) for p in playlists]
    )


@router.get("/{playlist_id}", response_model=Playlist)
async def get_playlist(playlist_id: str, repository: RepositoryDep) -> Playlist:
    """Get a saved playlist."""
    playlist = await asyncio.to_thread(repository.load, playlist_id)
    if playlist is None:
        raise PlaylistNotFoundError(playlist_id)
    return playlist


@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(playlist_id: str, repository: RepositoryDep) -> None:
    """Delete a saved playlist."""
    if not await asyncio.to_thread(repository.delete, playlist_id):
        raise PlaylistNotFoundError(playlist_id)
