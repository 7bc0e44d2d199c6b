"""Synchronize a destination playlist with a channel's uploads."""

import time
from typing import List, Optional, Sequence, Tuple

from .api import YouTubeAPI
from .auth import YouTubeSession
from .config import SyncSettings, load_settings, validate_settings
from .errors import (
    ApiError,
    ConfigurationError,
    QuotaExceededError,
    YouTubeError,
    describe_error,
    linear_backoff,
    with_retry,
)
from .listing import list_all_video_ids
from .logging_config import get_logger
from .models import SyncStatus, SyncSummary
from .resolver import resolve_destination

logger = get_logger(__name__)

ADD_ATTEMPTS = 2
RETRY_DELAY = 1.5
ITEM_DELAY = 0.5
FAILURE_DELAY = 5.0
FAILURE_THRESHOLD = 5
PROGRESS_EVERY = 20


def add_video(
    api: YouTubeAPI,
    playlist_id: str,
    video_id: str,
    position: Optional[int] = None,
    total: Optional[int] = None,
) -> bool:
    """Add one video to a playlist, retrying once.

    Quota errors are only logged on the last attempt, other errors on every
    attempt.

    Args:
        api: YouTube API wrapper
        playlist_id: Playlist to add to
        video_id: Video to add
        position: 1-based index in the batch, for log lines
        total: Batch size, for log lines

    Returns:
        True if the video was added
    """
    label = f"[{position}/{total}] " if position and total else ""

    def log_failure(error: Exception, attempt: int, max_attempts: int) -> None:
        if isinstance(error, QuotaExceededError) and attempt < max_attempts:
            return
        logger.warning(
            "  %sFAILED %s (attempt %d/%d): %s",
            label,
            video_id,
            attempt,
            max_attempts,
            describe_error(error),
        )

    try:
        with_retry(
            lambda: api.insert_playlist_item(playlist_id, video_id),
            max_attempts=ADD_ATTEMPTS,
            backoff=linear_backoff(RETRY_DELAY),
            on_failure=log_failure,
        )
    except YouTubeError:
        return False
    return True


def add_videos_to_playlist(
    api: YouTubeAPI, playlist_id: str, video_ids: Sequence[str]
) -> Tuple[int, int]:
    """Add videos one by one, never aborting on individual failures.

    Pauses after each video; the pause gets longer once failures pile up,
    which usually means the quota is gone.

    Returns:
        Tuple of (added, failed) counts
    """
    added = 0
    failed = 0
    total = len(video_ids)
    logger.info("Adding %d videos to playlist %s...", total, playlist_id)

    for index, video_id in enumerate(video_ids, start=1):
        if add_video(api, playlist_id, video_id, position=index, total=total):
            added += 1
        else:
            failed += 1

        if failed > FAILURE_THRESHOLD and failed % FAILURE_THRESHOLD == 0:
            time.sleep(FAILURE_DELAY)
        else:
            time.sleep(ITEM_DELAY)

        if index % PROGRESS_EVERY == 0 or index == total:
            logger.info(
                "  Progress: %d/%d processed. %d added, %d failures.",
                index,
                total,
                added,
                failed,
            )

    logger.info(
        "Finished adding to playlist %s: %d added, %d failures.", playlist_id, added, failed
    )
    return added, failed


def compute_diff(
    source_ids: Sequence[str], destination_ids: Sequence[str]
) -> Tuple[List[str], List[str]]:
    """Compare source and destination video IDs.

    Returns:
        Tuple of (missing, extra): source videos absent from the destination,
        in source order, and destination videos absent from the source
    """
    destination = set(destination_ids)
    source = set(source_ids)
    missing = [video_id for video_id in source_ids if video_id not in destination]
    extra = [video_id for video_id in destination_ids if video_id not in source]
    return missing, extra


def log_settings(settings: SyncSettings) -> None:
    """Log the loaded settings without revealing secrets."""
    logger.info("Settings loaded:")
    logger.info("- CHANNEL_ID: %s", settings.channel_id or "NOT SET!")
    logger.info(
        "- DESTINATION_PLAYLIST_ID: %s",
        settings.destination_playlist_id or "not provided (will use name)",
    )
    logger.info("- DESTINATION_PLAYLIST_NAME: %s", settings.destination_playlist_name)
    logger.info("- YOUTUBE_CLIENT_ID: %s", "SET" if settings.client_id else "NOT SET!")
    logger.info("- YOUTUBE_CLIENT_SECRET: %s", "SET" if settings.client_secret else "NOT SET!")


def run_sync(
    settings: Optional[SyncSettings] = None,
    session: Optional[YouTubeSession] = None,
    api: Optional[YouTubeAPI] = None,
) -> SyncSummary:
    """Run a full sync of the channel uploads into the destination playlist.

    Errors never propagate out of this function; the returned summary says
    how far the run got.

    Args:
        settings: Settings for the run, loaded from the environment if omitted
        session: OAuth session, built from the settings if omitted
        api: API wrapper, built from the session if omitted

    Returns:
        Summary counts and final status of the run
    """
    settings = settings or load_settings()
    summary = SyncSummary()

    logger.info("--- Starting YouTube playlist sync ---")
    log_settings(settings)

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.error("CRITICAL ERROR: %s", str(e))
        logger.error(
            "Set CHANNEL_ID, YOUTUBE_CLIENT_ID and YOUTUBE_CLIENT_SECRET in the "
            "environment or in a .env file, then run again."
        )
        summary.status = SyncStatus.CONFIGURATION_ERROR
        summary.error = str(e)
        return summary

    try:
        session = session or YouTubeSession.from_settings(settings)
        if not session.has_valid_token():
            summary.authorization_url = session.authorization_url()
            logger.warning(
                "Authorization required. Open the URL below, grant access, then run again."
            )
            logger.warning("Authorization URL: %s", summary.authorization_url)
            summary.status = SyncStatus.AUTHORIZATION_REQUIRED
            return summary
        logger.info("YouTube authentication successful.")

        if api is None:
            api = YouTubeAPI(session.build_client())

        _sync(api, settings, summary)
    except Exception as e:
        logger.exception("GENERAL ERROR DURING SYNC: %s", str(e))
        if isinstance(e, ApiError):
            logger.error("API error details: %s", describe_error(e))
        summary.status = SyncStatus.FAILED
        summary.error = str(e)
        return summary

    summary.status = SyncStatus.COMPLETED
    logger.info("Synchronization completed!")
    return summary


def _sync(api: YouTubeAPI, settings: SyncSettings, summary: SyncSummary) -> None:
    channel_id = settings.channel_id
    logger.info("Fetching videos from source channel: %s", channel_id)
    uploads_playlist_id = api.get_uploads_playlist_id(channel_id)
    logger.info("Source channel uploads playlist ID: %s", uploads_playlist_id)
    logger.info("Fetching ALL public videos from this playlist, not just music.")

    source_ids = list_all_video_ids(api, uploads_playlist_id)
    summary.source_count = len(source_ids)
    logger.info("Total videos found on source channel: %d", len(source_ids))
    if not source_ids:
        logger.warning(
            "No videos found in the source uploads playlist. "
            "Check the channel ID and video visibility."
        )

    playlist = resolve_destination(
        api,
        settings.destination_playlist_id,
        settings.destination_playlist_name,
        settings.destination_playlist_name_secondary,
    )
    summary.playlist_id = playlist.id
    summary.playlist_title = playlist.title

    logger.info("Fetching existing videos from destination %r (%s)", playlist.title, playlist.id)
    destination_ids = list_all_video_ids(api, playlist.id)
    summary.destination_count = len(destination_ids)

    missing, extra = compute_diff(source_ids, destination_ids)
    summary.missing_count = len(missing)
    summary.extra_count = len(extra)
    logger.info("--- Comparison ---")
    logger.info("Videos on source channel: %d", len(source_ids))
    logger.info("Videos in destination playlist: %d", len(destination_ids))
    logger.info("Source videos MISSING from playlist: %d", len(missing))
    if extra:
        logger.info("Playlist videos not on the source channel (left in place): %d", len(extra))

    if missing:
        added, failed = add_videos_to_playlist(api, playlist.id, missing)
        summary.added_count = added
        summary.failed_count = failed
        logger.info("Add process completed: %d of %d videos added.", added, len(missing))
        if failed:
            logger.warning(
                "%d videos could not be added. This can happen for private, deleted or "
                "region-restricted videos, API issues or quota limits.",
                failed,
            )
    else:
        logger.info("Destination playlist already contains every source video.")

    summary.final_count = api.get_playlist_item_count(playlist.id)
    logger.info("--- Final sync summary ---")
    logger.info("Source channel (%s): %d videos found", channel_id, summary.source_count)
    logger.info(
        "Destination playlist (%r, %s): %d videos currently",
        playlist.title,
        playlist.id,
        summary.final_count,
    )
    if summary.shortfall:
        logger.warning(
            "ALERT: %d channel videos are still not in the playlist "
            "(add errors or unavailable videos).",
            summary.shortfall,
        )
