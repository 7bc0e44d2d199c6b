"""Keep a YouTube playlist in sync with a channel's uploads."""

__version__ = "0.1.0"

# Import all public components
from .api import YouTubeAPI
from .auth import YouTubeSession
from .cli import main
from .config import SyncSettings, load_settings, validate_settings
from .errors import (
    ApiError,
    AuthorizationError,
    ChannelNotFoundError,
    ConfigurationError,
    PlaylistCreationError,
    PlaylistNotFoundError,
    YouTubeError,
    with_retry,
)
from .listing import list_all_video_ids
from .logging_config import configure_logging, get_logger
from .models import PlaylistDescriptor, SyncStatus, SyncSummary
from .resolver import find_or_create_playlist, resolve_destination
from .sync import add_video, add_videos_to_playlist, compute_diff, run_sync

# Configure logging
configure_logging()

# Get logger for this module
logger = get_logger(__name__)
