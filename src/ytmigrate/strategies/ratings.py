"""Rating transfers over the rating-filtered video listing.

This path lists videos with myRating and is slow for large libraries.
Liked videos normally go through the bulk pipeline in bulk_likes; this
strategy covers disliked videos and the legacy liked-videos mode.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..models import Action, DataKind, ItemStatus, TransferContext
from .base import TransferStrategy, apply_isolated

RATING_KINDS = {
    "like": DataKind.LIKED_VIDEOS,
    "dislike": DataKind.DISLIKED_VIDEOS,
}


class RatedVideoStrategy(TransferStrategy):
    """Transfer the videos the account has rated a given way."""

    collection = "videos"

    def __init__(self, context: TransferContext, rating: str) -> None:
        """Initialize strategy.

        Args:
            context: Action, endpoints and settings for the run
            rating: "like" or "dislike"
        """
        if rating not in RATING_KINDS:
            raise ValueError(f"Invalid rating: {rating}")
        self.kind = RATING_KINDS[rating]
        self.rating = rating
        super().__init__(context)

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        return self.source.api.list_page(
            self.collection,
            part="snippet",
            page_token=cursor,
            page_size=self.config.page_size,
            myRating=self.rating,
        )

    def process(self, item: Dict[str, Any]) -> ItemStatus:
        label = self.describe(item)
        video_id = item["id"]
        self._logger.info("%d) %s", self._current_item, label)

        if self.action is Action.DELETE:
            result = apply_isolated(
                f"Failed to clear rating of {label}",
                lambda: self.source.api.rate(video_id, "none"),
            )
            if not result.ok:
                return ItemStatus.FAILED
            self._logger.info("Successfully cleared rating - %s", video_id)
            return ItemStatus.DELETED

        if self.target is None:
            self._logger.info("Preview mode, %s skipped", label)
            return ItemStatus.SKIPPED

        result = apply_isolated(
            f"Failed to rate {label}",
            lambda: self.target.api.rate(video_id, self.rating),
        )
        if not result.ok:
            return ItemStatus.FAILED
        self._logger.info("Successfully rated %s - %s", self.rating, video_id)
        return ItemStatus.RATED
