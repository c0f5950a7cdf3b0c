"""Playlist, playlist item and watch later transfers."""

from typing import Any, Dict, List, Optional, Tuple

from ..models import Action, DataKind, ItemStatus, TransferContext, TransferSummary
from .base import TransferStrategy, rewrite_channel


class PlaylistItemStrategy(TransferStrategy):
    """Transfer the videos of one playlist."""

    kind = DataKind.PLAYLIST_ITEMS
    collection = "playlistItems"

    def __init__(
        self,
        context: TransferContext,
        source_playlist_id: str,
        target_playlist_id: Optional[str] = None,
    ) -> None:
        """Initialize strategy.

        Args:
            context: Action, endpoints and settings for the run
            source_playlist_id: Playlist the items are read from
            target_playlist_id: Playlist the items are inserted into
        """
        super().__init__(context)
        self.source_playlist_id = source_playlist_id
        self.target_playlist_id = target_playlist_id

    def validate(self) -> None:
        super().validate()
        if not self.source_playlist_id:
            raise ValueError("Source playlist ID is required")
        if self.action is Action.MIGRATE and not self.target_playlist_id:
            raise ValueError("Target playlist ID is required to migrate playlist items")

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        return self.source.api.list_page(
            self.collection,
            part="snippet",
            page_token=cursor,
            page_size=self.config.page_size,
            playlistId=self.source_playlist_id,
        )

    def describe(self, item: Dict[str, Any]) -> str:
        snippet = item.get("snippet", {})
        video_id = snippet.get("resourceId", {}).get("videoId")
        return f"{snippet.get('title', '')} ({video_id})"

    def build_insert(self, item: Dict[str, Any]) -> Dict[str, Any]:
        snippet = rewrite_channel(item["snippet"], self.target.channel_id)
        snippet["playlistId"] = self.target_playlist_id
        # Source positions can have gaps left by deleted videos
        snippet.pop("position", None)
        return {"snippet": snippet}


class PlaylistStrategy(TransferStrategy):
    """Transfer playlists, optionally followed by their videos."""

    kind = DataKind.PLAYLISTS
    collection = "playlists"
    insert_part = "snippet,status"

    def __init__(self, context: TransferContext, include_items: bool = False) -> None:
        """Initialize strategy.

        Args:
            context: Action, endpoints and settings for the run
            include_items: Whether to transfer each playlist's videos too
        """
        super().__init__(context)
        self.include_items = include_items
        if include_items:
            self.kind = DataKind.PLAYLIST_ITEMS
            self.summary = TransferSummary(self.kind)
        self.items_summary = TransferSummary(DataKind.PLAYLIST_ITEMS)

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        return self.source.api.list_page(
            self.collection,
            part="snippet,status,contentDetails",
            page_token=cursor,
            page_size=self.config.playlist_page_size,
            mine=True,
        )

    def build_insert(self, item: Dict[str, Any]) -> Dict[str, Any]:
        body = {"snippet": rewrite_channel(item["snippet"], self.target.channel_id)}
        if "status" in item:
            body["status"] = {"privacyStatus": item["status"].get("privacyStatus", "private")}
        return body

    def process(self, item: Dict[str, Any]) -> ItemStatus:
        # Deleting a playlist takes its videos with it
        if not self.include_items or self.action is Action.DELETE:
            return super().process(item)

        label = self.describe(item)
        self._logger.info("%d) %s", self._current_item, label)

        target_playlist_id = None
        if self.target is None:
            self._logger.info("Preview mode, %s skipped", label)
            status = ItemStatus.SKIPPED
        else:
            status, target_playlist_id = self.insert(item, label)
            if status is ItemStatus.FAILED or not target_playlist_id:
                self._logger.warning(
                    "Skipping videos of %s, the target playlist was not created", label
                )
                return ItemStatus.FAILED

        self._logger.info("Videos of %s:", label)
        nested = PlaylistItemStrategy(self.context, item["id"], target_playlist_id)
        self.items_summary.merge(nested.run())
        return status


class WatchLaterStrategy(PlaylistItemStrategy):
    """Transfer the account's watch later list."""

    kind = DataKind.WATCH_LATER

    def __init__(self, context: TransferContext) -> None:
        target_playlist_id = None
        if context.target is not None:
            target_playlist_id = context.target.related_playlist("watchLater")
        super().__init__(
            context,
            context.source.related_playlist("watchLater"),
            target_playlist_id,
        )

    def validate(self) -> None:
        if not self.source_playlist_id:
            raise ValueError("Source channel exposes no watch later playlist")
        super().validate()
