"""Paginated listing of the video IDs in a playlist."""

import time
from typing import Any, Dict, List, Optional

from .api import YouTubeAPI
from .errors import NotFoundError, YouTubeError, describe_error, linear_backoff, with_retry
from .logging_config import get_logger

logger = get_logger(__name__)

MAX_PAGES = 200
PAGE_ATTEMPTS = 3
RETRY_DELAY = 1.5
PAGE_DELAY = 0.5

# Titles the API gives to items whose video is no longer viewable. Some
# private or deleted videos come back with their real title, so this only
# catches part of them.
UNAVAILABLE_TITLES = ("[Private video]", "[Deleted video]")


def extract_video_id(item: Dict[str, Any]) -> Optional[str]:
    """Get the video ID of a playlist item if it should be synced.

    Args:
        item: Playlist item resource

    Returns:
        The video ID, or None for non-video and private/deleted items
    """
    snippet = item.get("snippet") or {}
    resource = snippet.get("resourceId") or {}
    video_id = resource.get("videoId")
    if resource.get("kind") != "youtube#video" or not video_id:
        return None

    if snippet.get("title") in UNAVAILABLE_TITLES:
        logger.debug("Skipping private/deleted video %s", video_id)
        return None
    return video_id


def _is_not_found(error: Exception) -> bool:
    return isinstance(error, NotFoundError)


def list_all_video_ids(api: YouTubeAPI, playlist_id: str) -> List[str]:
    """Collect the IDs of every syncable video in a playlist.

    Walks the pages until there is no continuation token or MAX_PAGES is
    reached. A page that keeps failing, or a 404, ends the walk early and the
    IDs gathered so far are returned instead of an error.

    Args:
        api: YouTube API wrapper
        playlist_id: Playlist to read

    Returns:
        Unique video IDs in the order they were first seen
    """
    video_ids: Dict[str, None] = {}
    page_token = None
    page_count = 0

    def log_failure(error: Exception, attempt: int, max_attempts: int) -> None:
        logger.warning(
            "Error fetching page %d of playlist %s (attempt %d/%d): %s",
            page_count,
            playlist_id,
            attempt,
            max_attempts,
            describe_error(error),
        )

    logger.info("Fetching video IDs from playlist %s...", playlist_id)

    while True:
        page_count += 1

        try:
            response = with_retry(
                lambda: api.list_playlist_items_page(playlist_id, page_token),
                max_attempts=PAGE_ATTEMPTS,
                backoff=linear_backoff(RETRY_DELAY),
                is_terminal=_is_not_found,
                on_failure=log_failure,
            )
        except NotFoundError:
            logger.error("Playlist %s not found (404). Stopping search.", playlist_id)
            break
        except YouTubeError:
            logger.error(
                "Failed to fetch page %d of playlist %s after %d attempts. Stopping search.",
                page_count,
                playlist_id,
                PAGE_ATTEMPTS,
            )
            break

        items = response.get("items") or []
        for item in items:
            video_id = extract_video_id(item)
            if video_id:
                video_ids[video_id] = None

        if items:
            logger.info(
                "  Page %d: %d items processed, %d unique IDs",
                page_count,
                len(items),
                len(video_ids),
            )
        else:
            logger.info("  Page %d: no items found", page_count)

        page_token = response.get("nextPageToken")
        if not page_token:
            break
        if page_count >= MAX_PAGES:
            logger.warning(
                "Page limit of %d reached for playlist %s. Some videos might be missing.",
                MAX_PAGES,
                playlist_id,
            )
            break
        time.sleep(PAGE_DELAY)

    logger.info(
        "Search complete for playlist %s. Total valid video IDs found: %d",
        playlist_id,
        len(video_ids),
    )
    return list(video_ids)
