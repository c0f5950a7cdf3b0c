"""Common test fixtures and utilities."""

import threading
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from src.ytmigrate.config import MigrationConfig
from src.ytmigrate.endpoint import Endpoint


class FakeAPI:
    """In-memory stand-in for YouTubeAPI.

    Pages are keyed by collection and, where the listing is filtered,
    by (collection, playlistId or myRating). Deleted resources stop
    showing up in later listings, like the real service.
    """

    def __init__(self, pages: Optional[Dict[Any, List[List[Dict[str, Any]]]]] = None):
        self.pages = pages or {}
        self.list_calls: List[tuple] = []
        self.inserted: List[tuple] = []
        self.deleted: List[tuple] = []
        self.rated: List[tuple] = []
        self.fail_insert: Callable[[str, Dict[str, Any]], Optional[Exception]] = lambda c, b: None
        self.fail_delete: Callable[[str, str], Optional[Exception]] = lambda c, i: None
        self.fail_rate: Callable[[str, str], Optional[Exception]] = lambda v, r: None
        self.fail_list: Optional[Exception] = None
        self.on_rate: Optional[Callable[[str, str], None]] = None
        self._lock = threading.Lock()
        self._next_id = 0

    def _key(self, collection: str, filters: Dict[str, Any]):
        for name in ("playlistId", "myRating"):
            if name in filters:
                return (collection, filters[name])
        return collection

    def list_page(self, collection, part="snippet", page_token=None, page_size=50, **filters):
        key = self._key(collection, filters)
        self.list_calls.append((key, page_token))
        if self.fail_list is not None:
            raise self.fail_list

        pages = self.pages.get(key, [[]])
        index = int(page_token) if page_token else 0
        deleted_ids = {resource_id for _, resource_id in self.deleted}
        items = [item for item in pages[index] if item.get("id") not in deleted_ids]
        next_token = str(index + 1) if index + 1 < len(pages) else None
        return items, next_token

    def insert(self, collection, body, part="snippet"):
        error = self.fail_insert(collection, body)
        if error is not None:
            raise error
        with self._lock:
            self._next_id += 1
            new_id = f"new-{collection}-{self._next_id}"
            self.inserted.append((collection, body, part))
        return {"id": new_id, **body}

    def delete(self, collection, resource_id):
        error = self.fail_delete(collection, resource_id)
        if error is not None:
            raise error
        with self._lock:
            self.deleted.append((collection, resource_id))

    def rate(self, video_id, rating):
        if self.on_rate is not None:
            self.on_rate(video_id, rating)
        error = self.fail_rate(video_id, rating)
        if error is not None:
            raise error
        with self._lock:
            self.rated.append((video_id, rating))

    @property
    def mutations(self) -> int:
        return len(self.inserted) + len(self.deleted) + len(self.rated)


def make_channel(
    channel_id: str, title: str = "", likes: str = "LL", watch_later: str = "WL"
) -> Dict[str, Any]:
    return {
        "id": channel_id,
        "snippet": {"title": title or channel_id},
        "contentDetails": {"relatedPlaylists": {"likes": likes, "watchLater": watch_later}},
    }


def make_endpoint(api, channel_id: str = "UC_source", **kwargs) -> Endpoint:
    return Endpoint(api, make_channel(channel_id, **kwargs))


def playlist(playlist_id: str, title: str, channel_id: str = "UC_source") -> Dict[str, Any]:
    return {
        "id": playlist_id,
        "snippet": {"title": title, "description": "", "channelId": channel_id},
        "status": {"privacyStatus": "unlisted"},
    }


def playlist_item(
    item_id: str,
    video_id: str,
    title: str = "",
    playlist_id: str = "PL1",
    position: int = 0,
    channel_id: str = "UC_source",
) -> Dict[str, Any]:
    return {
        "id": item_id,
        "snippet": {
            "title": title or f"Video {video_id}",
            "channelId": channel_id,
            "playlistId": playlist_id,
            "position": position,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
        },
    }


def subscription(sub_id: str, channel_id: str, title: str = "") -> Dict[str, Any]:
    return {
        "id": sub_id,
        "snippet": {
            "title": title or channel_id,
            "channelId": "UC_source",
            "resourceId": {"kind": "youtube#channel", "channelId": channel_id},
        },
    }


def video(video_id: str, title: str = "") -> Dict[str, Any]:
    return {"id": video_id, "snippet": {"title": title or f"Video {video_id}"}}


@pytest.fixture
def run_config() -> MigrationConfig:
    """Config with progress bars and pacing turned off."""
    return MigrationConfig(rate_delay=0, show_progress=False)


@pytest.fixture
def source_api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def target_api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def source(source_api) -> Endpoint:
    return make_endpoint(source_api, "UC_source")


@pytest.fixture
def target(target_api) -> Endpoint:
    return make_endpoint(target_api, "UC_target", likes="LL_target", watch_later="WL_target")


@pytest.fixture
def youtube_client() -> MagicMock:
    """Create a mock YouTube API client.

    Returns:
        MagicMock: Mock YouTube API client with common methods configured
    """
    mock = MagicMock()

    mock.playlistItems.return_value.list.return_value.execute.return_value = {
        "items": [
            playlist_item("item1", "vid1", "Video 1"),
            playlist_item("item2", "vid2", "Video 2"),
        ]
    }

    mock.channels.return_value.list.return_value.execute.return_value = {
        "items": [make_channel("UC_source", "Source channel")]
    }

    return mock
