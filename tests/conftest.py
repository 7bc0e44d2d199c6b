"""Common test fixtures and utilities."""

from unittest.mock import MagicMock, patch

import pytest

from helpers import CHANNEL_ID, UPLOADS_ID, make_item
from src.playlistsync.config import SyncSettings


@pytest.fixture(autouse=True)
def no_sleep():
    """Skip the rate-limit pauses and backoffs."""
    with patch("time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def settings(tmp_path) -> SyncSettings:
    """Valid settings with tokens stored under tmp_path."""
    return SyncSettings(
        channel_id=CHANNEL_ID,
        client_id="client-id",
        client_secret="client-secret",
        destination_playlist_name="Minha Playlist Sincronizada",
        destination_playlist_name_secondary="My Synced Playlist",
        token_file=str(tmp_path / "credentials" / "token.pickle"),
        redirect_uri="http://localhost:8000/oauth2callback",
    )


@pytest.fixture
def session() -> MagicMock:
    """Authorized session double."""
    mock = MagicMock()
    mock.has_valid_token.return_value = True
    mock.authorization_url.return_value = "https://accounts.google.com/o/oauth2/auth?x=1"
    return mock


@pytest.fixture
def youtube_client() -> MagicMock:
    """Create a mock YouTube API client.

    Returns:
        MagicMock: Mock YouTube API client with common methods configured
    """
    mock = MagicMock()

    mock.channels.return_value.list.return_value.execute.return_value = {
        "items": [{"contentDetails": {"relatedPlaylists": {"uploads": UPLOADS_ID}}}]
    }
    mock.playlistItems.return_value.list.return_value.execute.return_value = {
        "items": [make_item("vid1"), make_item("vid2")],
        "pageInfo": {"totalResults": 2},
    }
    mock.playlistItems.return_value.insert.return_value.execute.return_value = {"id": "item-new"}
    mock.playlists.return_value.list.return_value.execute.return_value = {
        "items": [
            {
                "id": "playlist1",
                "snippet": {"title": "Playlist 1", "description": "Description 1"},
            }
        ]
    }
    mock.playlists.return_value.insert.return_value.execute.return_value = {"id": "PLnew"}

    return mock
