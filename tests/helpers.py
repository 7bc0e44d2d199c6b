"""Builders and doubles shared by the tests."""

import json
from typing import Dict, List, Optional

import httplib2
from googleapiclient.errors import HttpError

from src.playlistsync.errors import (
    ApiError,
    ChannelNotFoundError,
    NotFoundError,
    PlaylistNotFoundError,
)
from src.playlistsync.models import PlaylistDescriptor

CHANNEL_ID = "UCabcdefghijklmnopqrstuv"
UPLOADS_ID = "UUabcdefghijklmnopqrstuv"


def make_http_error(status: int, reason: str = "backendError", message: str = "API Error"):
    """Build an HttpError the way googleapiclient raises it."""
    resp = httplib2.Response({"status": str(status)})
    content = json.dumps(
        {
            "error": {
                "code": status,
                "message": message,
                "errors": [{"reason": reason, "message": message}],
            }
        }
    ).encode("utf-8")
    return HttpError(resp, content)


def make_item(video_id: str, title: Optional[str] = None, kind: str = "youtube#video") -> Dict:
    """Build a playlistItems resource."""
    return {
        "id": f"item-{video_id}",
        "snippet": {
            "title": title or f"Video {video_id}",
            "resourceId": {"kind": kind, "videoId": video_id},
        },
    }


def make_page(video_ids: List[str], next_page_token: Optional[str] = None) -> Dict:
    """Build a playlistItems.list response."""
    page = {"items": [make_item(video_id) for video_id in video_ids]}
    if next_page_token:
        page["nextPageToken"] = next_page_token
    return page


class FakeYouTubeAPI:
    """In-memory stand-in for YouTubeAPI."""

    def __init__(self, channels: Dict[str, str], playlists: Dict[str, Dict], page_size: int = 2):
        """Initialize fake.

        Args:
            channels: Channel ID -> uploads playlist ID
            playlists: Playlist ID -> {"title", "videos", "mine"}
            page_size: Items per page
        """
        self.channels = channels
        self.playlists = playlists
        self.page_size = page_size
        self.inserted: List[str] = []
        self.created: List[str] = []
        self.rejected: set = set()

    def get_uploads_playlist_id(self, channel_id: str) -> str:
        if channel_id not in self.channels:
            raise ChannelNotFoundError(f"Channel {channel_id} not found")
        return self.channels[channel_id]

    def get_playlist_info(self, playlist_id: str) -> PlaylistDescriptor:
        if playlist_id not in self.playlists:
            raise PlaylistNotFoundError(f"Playlist {playlist_id} not found")
        return PlaylistDescriptor(id=playlist_id, title=self.playlists[playlist_id]["title"])

    def list_playlist_items_page(self, playlist_id: str, page_token: Optional[str] = None) -> Dict:
        if playlist_id not in self.playlists:
            raise NotFoundError("playlistNotFound", status=404, reason="playlistNotFound")
        videos = self.playlists[playlist_id]["videos"]
        start = int(page_token or 0)
        end = start + self.page_size
        return make_page(videos[start:end], str(end) if end < len(videos) else None)

    def list_my_playlists_page(self, page_token: Optional[str] = None) -> Dict:
        return {
            "items": [
                {"id": playlist_id, "snippet": {"title": playlist["title"], "description": ""}}
                for playlist_id, playlist in self.playlists.items()
                if playlist.get("mine")
            ]
        }

    def create_playlist(self, title: str, description: str, privacy_status: str = "private") -> str:
        playlist_id = f"PLcreated{len(self.created) + 1}"
        self.playlists[playlist_id] = {"title": title, "videos": [], "mine": True}
        self.created.append(playlist_id)
        return playlist_id

    def insert_playlist_item(self, playlist_id: str, video_id: str) -> str:
        if video_id in self.rejected:
            raise ApiError("Video unavailable", status=400, reason="videoNotFound")
        self.playlists[playlist_id]["videos"].append(video_id)
        self.inserted.append(video_id)
        return f"item-{video_id}"

    def get_playlist_item_count(self, playlist_id: str) -> int:
        return len(self.playlists[playlist_id]["videos"])
