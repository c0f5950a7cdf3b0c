"""YouTube API wrapper."""

from typing import Any, Dict, List, Optional, Tuple

from .errors import PlaylistNotFoundError, RatingDisabledError, YouTubeError, is_rating_disabled
from .logging_config import get_logger

logger = get_logger(__name__)

COLLECTIONS = ("channels", "playlists", "playlistItems", "subscriptions", "videos")
RATINGS = ("like", "dislike", "none")


class YouTubeAPI:
    """Wrapper for the YouTube API operations the migrator needs.

    Offers list/insert/delete/rate over a googleapiclient resource so
    callers never touch request builders directly.
    """

    def __init__(self, youtube):
        """Initialize API wrapper.

        Args:
            youtube: YouTube API client
        """
        self.youtube = youtube

    def _resource(self, collection: str):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        return getattr(self.youtube, collection)()

    def list_page(
        self,
        collection: str,
        part: str = "snippet",
        page_token: Optional[str] = None,
        page_size: int = 50,
        **filters: Any,
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Fetch one page of a collection.

        Args:
            collection: API collection name, e.g. "playlistItems"
            part: Resource parts to request
            page_token: Cursor returned by the previous page, None for the first
            page_size: Maximum number of items to return
            **filters: Collection filters such as mine=True or playlistId

        Returns:
            Tuple of (items, next page token or None)

        Raises:
            PlaylistNotFoundError: If a playlist filter names a missing playlist
            YouTubeError: If API request fails
        """
        request = self._resource(collection).list(
            part=part,
            maxResults=page_size,
            pageToken=page_token,
            **filters,
        )
        try:
            response = request.execute()
        except Exception as e:
            if "playlistNotFound" in str(e):
                raise PlaylistNotFoundError(
                    f"Playlist {filters.get('playlistId')} not found"
                ) from e
            raise YouTubeError(f"Failed to list {collection}: {str(e)}") from e

        return response.get("items", []), response.get("nextPageToken") or None

    def insert(
        self, collection: str, body: Dict[str, Any], part: str = "snippet"
    ) -> Dict[str, Any]:
        """Insert a resource.

        Args:
            collection: API collection name
            body: Resource to insert
            part: Resource parts present in body

        Returns:
            The created resource

        Raises:
            YouTubeError: If API request fails
        """
        try:
            return self._resource(collection).insert(part=part, body=body).execute()
        except Exception as e:
            raise YouTubeError(f"Failed to insert into {collection}: {str(e)}") from e

    def delete(self, collection: str, resource_id: str) -> None:
        """Delete a resource.

        Args:
            collection: API collection name
            resource_id: ID of the resource to delete

        Raises:
            YouTubeError: If API request fails
        """
        try:
            self._resource(collection).delete(id=resource_id).execute()
        except Exception as e:
            raise YouTubeError(
                f"Failed to delete {resource_id} from {collection}: {str(e)}"
            ) from e

    def rate(self, video_id: str, rating: str) -> None:
        """Rate a video.

        Args:
            video_id: ID of the video
            rating: One of "like", "dislike" or "none"

        Raises:
            RatingDisabledError: If the video's owner has disabled ratings
            YouTubeError: If API request fails
        """
        if rating not in RATINGS:
            raise ValueError(f"Invalid rating: {rating}")
        try:
            self.youtube.videos().rate(id=video_id, rating=rating).execute()
        except Exception as e:
            if is_rating_disabled(e):
                raise RatingDisabledError(video_id) from e
            raise YouTubeError(f"Failed to rate video {video_id}: {str(e)}") from e

    def list_my_channels(self) -> List[Dict[str, Any]]:
        """Get the channels owned by the authenticated account.

        Returns:
            List of channel resources

        Raises:
            YouTubeError: If API request fails
        """
        items, _ = self.list_page(
            "channels", part="id,snippet,contentDetails", mine=True
        )
        return items
