"""Resolve the destination playlist for a sync run."""

import time
from datetime import date
from typing import Optional

from .api import YouTubeAPI
from .errors import ApiError, YouTubeError
from .logging_config import get_logger
from .models import PlaylistDescriptor

logger = get_logger(__name__)

PAGE_DELAY = 0.2


def build_description(
    title_primary: str, title_secondary: str, created: Optional[date] = None
) -> str:
    """Build the description for a newly created playlist."""
    created = created or date.today()
    day = created.strftime("%d/%m/%Y")
    return (
        f"PT: Playlist sincronizada automaticamente com vídeos do canal. Criada em {day}. / "
        f"EN: Playlist automatically synced with channel videos. Created on {day}. "
        f"(Names: {title_primary} / {title_secondary})"
    )


def find_playlist_by_title(api: YouTubeAPI, title: str) -> Optional[PlaylistDescriptor]:
    """Search the user's playlists for an exact title match.

    Stops at the first match; later pages are not fetched.

    Raises:
        YouTubeError: If the playlists cannot be listed
    """
    page_token = None
    while True:
        try:
            response = api.list_my_playlists_page(page_token)
        except ApiError as e:
            logger.error("Error fetching user playlists: %s", str(e))
            raise YouTubeError("Could not list your playlists") from e

        for playlist in response.get("items") or []:
            snippet = playlist.get("snippet") or {}
            if snippet.get("title") == title:
                return PlaylistDescriptor(
                    id=playlist["id"],
                    title=title,
                    description=snippet.get("description", ""),
                )

        page_token = response.get("nextPageToken")
        if not page_token:
            return None
        time.sleep(PAGE_DELAY)


def find_or_create_playlist(
    api: YouTubeAPI, title_primary: str, title_secondary: str
) -> PlaylistDescriptor:
    """Find a playlist by title, creating a private one if none matches.

    Args:
        api: YouTube API wrapper
        title_primary: Title to search for and to create with
        title_secondary: Alternate name, recorded in the description

    Returns:
        Descriptor of the found or created playlist

    Raises:
        YouTubeError: If listing fails
        PlaylistCreationError: If creation fails
    """
    logger.info("Searching for existing playlist named %r...", title_primary)
    found = find_playlist_by_title(api, title_primary)
    if found:
        logger.info("Playlist %r found with ID: %s", title_primary, found.id)
        return found

    logger.info("Playlist %r not found. Creating a new one...", title_primary)
    description = build_description(title_primary, title_secondary)
    playlist_id = api.create_playlist(title_primary, description, privacy_status="private")
    logger.info("Playlist %r created with ID: %s", title_primary, playlist_id)
    return PlaylistDescriptor(id=playlist_id, title=title_primary, description=description)


def resolve_destination(
    api: YouTubeAPI,
    explicit_id: Optional[str],
    title_primary: str,
    title_secondary: str,
) -> PlaylistDescriptor:
    """Resolve the playlist videos are added to.

    An explicit ID that can be read wins over name matching. If it cannot be
    read, resolution falls back to the title.

    Args:
        api: YouTube API wrapper
        explicit_id: Optional playlist ID from the settings
        title_primary: Title to find or create
        title_secondary: Alternate name for the description

    Returns:
        The destination playlist
    """
    if explicit_id:
        logger.info("Using destination playlist ID: %s", explicit_id)
        try:
            playlist = api.get_playlist_info(explicit_id)
        except YouTubeError as e:
            logger.warning(
                "Could not access playlist %s: %s. Falling back to name %r.",
                explicit_id,
                str(e),
                title_primary,
            )
        else:
            logger.info("Destination playlist found by ID: %r (%s)", playlist.title, playlist.id)
            return playlist

    return find_or_create_playlist(api, title_primary, title_secondary)
