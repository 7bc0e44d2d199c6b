"""YouTube API wrapper."""

from typing import Any, Dict, Optional

from googleapiclient.errors import HttpError

from .errors import (
    ApiError,
    ChannelNotFoundError,
    PlaylistCreationError,
    PlaylistNotFoundError,
    api_error_from_http,
)
from .logging_config import get_logger
from .models import PlaylistDescriptor

logger = get_logger(__name__)

PAGE_SIZE = 50


class YouTubeAPI:
    """Wrapper for YouTube API operations.

    Every method issues a single request. Failures surface as ApiError
    subclasses; paging and retries belong to the callers.
    """

    def __init__(self, youtube):
        """Initialize API wrapper.

        Args:
            youtube: YouTube API client
        """
        self.youtube = youtube

    def _execute(self, request) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            raise api_error_from_http(e) from e
        except Exception as e:
            raise ApiError(f"Request failed: {str(e)}") from e

    def get_uploads_playlist_id(self, channel_id: str) -> str:
        """Get the ID of a channel's uploads playlist.

        Args:
            channel_id: Channel to look up

        Returns:
            Uploads playlist ID

        Raises:
            ChannelNotFoundError: If the channel or its uploads playlist is missing
        """
        request = self.youtube.channels().list(part="contentDetails", id=channel_id)
        try:
            response = self._execute(request)
        except ApiError as e:
            logger.error("Error fetching channel details for %s: %s", channel_id, str(e))
            raise ChannelNotFoundError(
                f"Channel {channel_id} not found or inaccessible. Check the ID."
            ) from e

        items = response.get("items") or []
        if not items:
            raise ChannelNotFoundError(
                f"Channel {channel_id} not found or inaccessible. Check the ID."
            )

        uploads = (
            items[0].get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads")
        )
        if not uploads:
            logger.error("No uploads playlist in channel response: %s", response)
            raise ChannelNotFoundError(
                f"Could not find the uploads playlist for channel {channel_id}."
            )
        return uploads

    def get_playlist_info(self, playlist_id: str) -> PlaylistDescriptor:
        """Get playlist information.

        Args:
            playlist_id: ID of playlist to get info for

        Returns:
            Descriptor with the playlist id, title and description

        Raises:
            PlaylistNotFoundError: If the playlist is missing or not accessible
        """
        request = self.youtube.playlists().list(part="snippet", id=playlist_id, maxResults=1)
        try:
            response = self._execute(request)
        except ApiError as e:
            raise PlaylistNotFoundError(
                f"Playlist {playlist_id} not found or not accessible: {str(e)}"
            ) from e

        items = response.get("items") or []
        if not items:
            raise PlaylistNotFoundError(f"Playlist {playlist_id} not found or not accessible")

        snippet = items[0].get("snippet", {})
        return PlaylistDescriptor(
            id=playlist_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
        )

    def list_playlist_items_page(
        self, playlist_id: str, page_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """Fetch one page of playlist items.

        Raises:
            ApiError: If the request fails
        """
        request = self.youtube.playlistItems().list(
            part="snippet",
            playlistId=playlist_id,
            maxResults=PAGE_SIZE,
            pageToken=page_token,
        )
        return self._execute(request)

    def list_my_playlists_page(self, page_token: Optional[str] = None) -> Dict[str, Any]:
        """Fetch one page of the authenticated user's playlists.

        Raises:
            ApiError: If the request fails
        """
        request = self.youtube.playlists().list(
            part="snippet",
            mine=True,
            maxResults=PAGE_SIZE,
            pageToken=page_token,
        )
        return self._execute(request)

    def create_playlist(
        self, title: str, description: str, privacy_status: str = "private"
    ) -> str:
        """Create a playlist in the authenticated user's account.

        Args:
            title: Playlist title
            description: Playlist description
            privacy_status: public, private or unlisted

        Returns:
            ID of the new playlist

        Raises:
            PlaylistCreationError: If the playlist could not be created
        """
        request = self.youtube.playlists().insert(
            part="snippet,status",
            body={
                "snippet": {"title": title, "description": description},
                "status": {"privacyStatus": privacy_status},
            },
        )
        try:
            response = self._execute(request)
        except ApiError as e:
            logger.error("Error creating playlist %r: %s", title, str(e))
            raise PlaylistCreationError(f"Failed to create playlist {title!r}") from e

        playlist_id = response.get("id")
        if not playlist_id:
            logger.error("Playlist creation returned no ID: %s", response)
            raise PlaylistCreationError(f"Failed to create playlist {title!r}")
        return playlist_id

    def insert_playlist_item(self, playlist_id: str, video_id: str) -> str:
        """Append a video to a playlist.

        Args:
            playlist_id: Playlist to add to
            video_id: Video to add

        Returns:
            ID of the created playlist item

        Raises:
            ApiError: If the request fails or returns no item ID
        """
        request = self.youtube.playlistItems().insert(
            part="snippet",
            body={
                "snippet": {
                    "playlistId": playlist_id,
                    "resourceId": {"kind": "youtube#video", "videoId": video_id},
                }
            },
        )
        response = self._execute(request)
        item_id = response.get("id") if response else None
        if not item_id:
            raise ApiError("Response did not include a playlist item ID")
        return item_id

    def get_playlist_item_count(self, playlist_id: str) -> int:
        """Get the total number of items in a playlist.

        Returns:
            Item count reported by the API, 0 if it cannot be read
        """
        request = self.youtube.playlistItems().list(
            part="id", playlistId=playlist_id, maxResults=1
        )
        try:
            response = self._execute(request)
        except ApiError as e:
            logger.error("Error getting item count for playlist %s: %s", playlist_id, str(e))
            return 0
        return int(response.get("pageInfo", {}).get("totalResults", 0))
