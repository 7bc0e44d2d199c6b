"""Tests for destination playlist resolution."""

from datetime import date
from unittest.mock import Mock, call

import pytest

from src.playlistsync.api import YouTubeAPI
from src.playlistsync.errors import (
    ApiError,
    PlaylistCreationError,
    PlaylistNotFoundError,
    YouTubeError,
)
from src.playlistsync.models import PlaylistDescriptor
from src.playlistsync.resolver import (
    build_description,
    find_or_create_playlist,
    find_playlist_by_title,
    resolve_destination,
)

PRIMARY = "Minha Playlist Sincronizada"
SECONDARY = "My Synced Playlist"


def playlist(playlist_id, title):
    return {"id": playlist_id, "snippet": {"title": title, "description": ""}}


@pytest.fixture
def api():
    return Mock(spec=YouTubeAPI)


def test_explicit_id_skips_name_search(api):
    api.get_playlist_info.return_value = PlaylistDescriptor(id="PLexplicit", title="Real title")
    api.list_my_playlists_page.side_effect = AssertionError("name search must not run")
    api.create_playlist.side_effect = AssertionError("creation must not run")

    result = resolve_destination(api, "PLexplicit", PRIMARY, SECONDARY)

    assert result == PlaylistDescriptor(id="PLexplicit", title="Real title")
    api.get_playlist_info.assert_called_once_with("PLexplicit")


def test_invalid_explicit_id_falls_back_and_creates_once(api):
    api.get_playlist_info.side_effect = PlaylistNotFoundError("Playlist PLgone not found")
    api.list_my_playlists_page.return_value = {"items": []}
    api.create_playlist.return_value = "PLnew"

    result = resolve_destination(api, "PLgone", PRIMARY, SECONDARY)

    assert result.id == "PLnew"
    assert result.title == PRIMARY
    api.create_playlist.assert_called_once()
    args, kwargs = api.create_playlist.call_args
    assert args[0] == PRIMARY
    assert kwargs["privacy_status"] == "private"


def test_no_explicit_id_uses_name(api):
    api.list_my_playlists_page.return_value = {
        "items": [playlist("PLother", "Other"), playlist("PLmatch", PRIMARY)]
    }

    result = resolve_destination(api, None, PRIMARY, SECONDARY)

    assert result.id == "PLmatch"
    api.get_playlist_info.assert_not_called()
    api.create_playlist.assert_not_called()


def test_first_match_stops_paging(api, no_sleep):
    api.list_my_playlists_page.side_effect = [
        {"items": [playlist("PL1", "Other")], "nextPageToken": "p2"},
        {"items": [playlist("PL2", PRIMARY), playlist("PL3", PRIMARY)], "nextPageToken": "p3"},
    ]

    result = find_playlist_by_title(api, PRIMARY)

    assert result.id == "PL2"
    assert api.list_my_playlists_page.call_args_list == [call(None), call("p2")]
    no_sleep.assert_called_once_with(0.2)


def test_title_match_is_exact(api):
    api.list_my_playlists_page.return_value = {
        "items": [playlist("PL1", PRIMARY.lower()), playlist("PL2", PRIMARY + " ")]
    }

    assert find_playlist_by_title(api, PRIMARY) is None


def test_listing_failure_raises(api):
    api.list_my_playlists_page.side_effect = ApiError("Forbidden", status=403)

    with pytest.raises(YouTubeError, match="Could not list your playlists"):
        find_or_create_playlist(api, PRIMARY, SECONDARY)


def test_creation_failure_raises(api):
    api.list_my_playlists_page.return_value = {"items": []}
    api.create_playlist.side_effect = PlaylistCreationError("Failed to create playlist")

    with pytest.raises(PlaylistCreationError):
        find_or_create_playlist(api, PRIMARY, SECONDARY)


def test_build_description():
    description = build_description(PRIMARY, SECONDARY, created=date(2024, 3, 9))

    assert "09/03/2024" in description
    assert PRIMARY in description
    assert SECONDARY in description
