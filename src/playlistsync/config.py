"""Configuration and environment settings."""

import os
import re
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Force reload of environment variables
load_dotenv(override=True)

# Directory Settings
DATA_DIR = os.getenv("DATA_DIR", "data")
CREDENTIALS_DIR = os.getenv("CREDENTIALS_DIR", os.path.join(DATA_DIR, "credentials"))

# YouTube API Settings
YOUTUBE_SCOPES = ["https://www.googleapis.com/auth/youtube.force-ssl"]
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"
TOKEN_FILE = os.path.join(CREDENTIALS_DIR, "token.pickle")
REDIRECT_URI = os.getenv("OAUTH_REDIRECT_URI", "http://localhost:8000/oauth2callback")

# Sync Settings
CHANNEL_ID = os.getenv("CHANNEL_ID")
CLIENT_ID = os.getenv("YOUTUBE_CLIENT_ID")
CLIENT_SECRET = os.getenv("YOUTUBE_CLIENT_SECRET")
DESTINATION_PLAYLIST_NAME = os.getenv("DESTINATION_PLAYLIST_NAME")
DESTINATION_PLAYLIST_ID = os.getenv("DESTINATION_PLAYLIST_ID")

DEFAULT_PLAYLIST_NAME = "Minha Playlist Sincronizada"
DEFAULT_PLAYLIST_NAME_SECONDARY = "My Synced Playlist"

CHANNEL_ID_PATTERN = re.compile(r"^UC[\w-]{22}$")


@dataclass(frozen=True)
class SyncSettings:
    """Settings for one sync run, read once at startup."""

    channel_id: Optional[str]
    client_id: Optional[str]
    client_secret: Optional[str]
    destination_playlist_name: str = DEFAULT_PLAYLIST_NAME
    destination_playlist_name_secondary: str = DEFAULT_PLAYLIST_NAME_SECONDARY
    destination_playlist_id: Optional[str] = None
    token_file: str = TOKEN_FILE
    redirect_uri: str = REDIRECT_URI


def load_settings() -> SyncSettings:
    """Build settings from the module-level environment values.

    A configured DESTINATION_PLAYLIST_NAME replaces both locale defaults.

    Returns:
        SyncSettings for this process
    """
    return SyncSettings(
        channel_id=(CHANNEL_ID or "").strip() or None,
        client_id=(CLIENT_ID or "").strip() or None,
        client_secret=(CLIENT_SECRET or "").strip() or None,
        destination_playlist_name=DESTINATION_PLAYLIST_NAME or DEFAULT_PLAYLIST_NAME,
        destination_playlist_name_secondary=(
            DESTINATION_PLAYLIST_NAME or DEFAULT_PLAYLIST_NAME_SECONDARY
        ),
        destination_playlist_id=(DESTINATION_PLAYLIST_ID or "").strip() or None,
        token_file=TOKEN_FILE,
        redirect_uri=REDIRECT_URI,
    )


def validate_settings(settings: SyncSettings) -> None:
    """Check required settings before any network call.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If a required setting is missing or malformed
    """
    missing: List[str] = []
    if not settings.channel_id:
        missing.append("CHANNEL_ID")
    if not settings.client_id:
        missing.append("YOUTUBE_CLIENT_ID")
    if not settings.client_secret:
        missing.append("YOUTUBE_CLIENT_SECRET")
    if missing:
        raise ConfigurationError(
            f"Required settings not set: {', '.join(missing)}. "
            "Set them as environment variables or in a .env file."
        )

    if not CHANNEL_ID_PATTERN.match(settings.channel_id):
        raise ConfigurationError(
            f"Invalid CHANNEL_ID {settings.channel_id!r}. It must start with 'UC' "
            "followed by 22 letters, digits, underscores or hyphens."
        )
