"""Bulk transfer of liked videos through the Likes playlist.

Listing videos by rating is slow and capped, so liked videos are read
from the channel's Likes system playlist instead. Every item that has
been dealt with is removed from that playlist, which makes a re-run
pick up only what is left.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from ..errors import RatingDisabledError, log_error
from ..logging_config import get_logger
from ..models import Action, DataKind, ItemOutcome, TransferContext, UnratedReason
from ..paginator import paginate
from ..throttle import FixedIntervalRateLimiter
from .base import TransferStrategy, apply_isolated

logger = get_logger(__name__)

# Titles the API reports for videos that can no longer be rated
UNAVAILABLE_TITLES = {
    "Private video": UnratedReason.PRIVATE,
    "Deleted video": UnratedReason.DELETED,
}


class BulkRatingPipeline(TransferStrategy):
    """Rate or unrate every video of the Likes playlist, a page at a time.

    Items of one page are handled by up to config.bulk_concurrency
    workers. The next page is only fetched once all of them are done.
    """

    kind = DataKind.LIKED_VIDEOS_BULK
    collection = "playlistItems"

    def __init__(
        self,
        context: TransferContext,
        rate_limiter: Optional[FixedIntervalRateLimiter] = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            context: Action, endpoints and settings for the run
            rate_limiter: Gate applied between a rating and its cleanup
        """
        super().__init__(context)
        self.rate_limiter = rate_limiter or FixedIntervalRateLimiter(self.config.rate_delay)
        self.likes_playlist_id = context.source.related_playlist("likes")
        self.outcomes: List[ItemOutcome] = []

    def validate(self) -> None:
        super().validate()
        if not self.likes_playlist_id:
            raise ValueError("Source channel exposes no Likes playlist")

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        return self.source.api.list_page(
            self.collection,
            part="snippet",
            page_token=cursor,
            page_size=self.config.page_size,
            playlistId=self.likes_playlist_id,
        )

    def _run(self) -> None:
        with ThreadPoolExecutor(
            max_workers=self.config.bulk_concurrency, thread_name_prefix="ytmigrate-rate"
        ) as executor:
            for page, items in enumerate(paginate(self.fetch_page), start=1):
                self._process_batch(items, executor, page)

        if self.action is not Action.PREVIEW:
            logger.info(
                "Items removed from the Likes playlist shift later pages, "
                "run again to pick up anything still listed"
            )

    def _process_batch(self, items: List[Dict[str, Any]], executor, page: int) -> None:
        futures = []
        for item in items:
            self.update_progress()
            futures.append(executor.submit(self.process_item, item, self._current_item))

        with tqdm(
            total=len(futures),
            desc=f"Likes page {page}",
            disable=not self.config.show_progress,
            leave=False,
        ) as pbar:
            # Page barrier, every worker finishes before the next fetch
            for future in as_completed(futures):
                outcome = future.result()
                self.outcomes.append(outcome)
                self.summary.record(outcome.kind)
                pbar.update(1)

    def process_item(self, item: Dict[str, Any], number: int = 0) -> ItemOutcome:
        """Classify and handle one Likes playlist item.

        A malformed item is left in place instead of stopping the page.

        Args:
            item: playlistItems resource
            number: Position of the item in the run, for logging

        Returns:
            The item's outcome
        """
        item_id = item.get("id")
        result = apply_isolated(
            f"Failed to process Likes item {item_id}, left in place",
            lambda: self._handle_item(item, number),
        )
        if not result.ok:
            return ItemOutcome.left_in_place(item_id, result.error)
        return result.value

    def _handle_item(self, item: Dict[str, Any], number: int) -> ItemOutcome:
        snippet = item.get("snippet", {})
        title = snippet.get("title", "")
        video_id = snippet.get("resourceId", {}).get("videoId")
        item_id = item["id"]
        label = f"{title} ({video_id})"
        logger.info("%d) %s", number, label)

        if self.action is Action.PREVIEW:
            logger.info("Preview mode, %s skipped", label)
            return ItemOutcome.skipped(item_id)

        reason = UNAVAILABLE_TITLES.get(title)
        if reason is not None:
            return self._remove_unrated(item_id, label, reason)

        if self.action is Action.DELETE:
            api, rating = self.source.api, "none"
        else:
            api, rating = self.target.api, "like"

        result = apply_isolated(
            label, lambda: api.rate(video_id, rating), on_error=self._rating_error(label)
        )
        if not result.ok:
            if isinstance(result.error, RatingDisabledError):
                return self._remove_unrated(item_id, label, UnratedReason.RATING_DISABLED)
            return ItemOutcome.left_in_place(item_id, result.error)

        # Clearing the rating drops the video from the Likes playlist by itself
        if self.action is Action.DELETE:
            logger.info("Successfully cleared rating - %s", video_id)
            return ItemOutcome.rated_and_removed(item_id)

        self.rate_limiter.wait()
        removal = apply_isolated(
            f"Rated {label} but failed to remove it from the source, left in place",
            lambda: self.source.api.delete(self.collection, item_id),
        )
        if not removal.ok:
            return ItemOutcome.left_in_place(item_id, removal.error)

        logger.info("Successfully migrated - %s", video_id)
        return ItemOutcome.rated_and_removed(item_id)

    def _rating_error(self, label: str):
        def handle(error: Exception) -> None:
            if isinstance(error, RatingDisabledError):
                logger.info("Rating is disabled for %s", label)
            else:
                log_error(error, f"Failed to rate {label}, left in place")

        return handle

    def _remove_unrated(self, item_id: str, label: str, reason: UnratedReason) -> ItemOutcome:
        result = apply_isolated(
            f"Failed to remove {label} from the source, left in place",
            lambda: self.source.api.delete(self.collection, item_id),
        )
        if not result.ok:
            return ItemOutcome.left_in_place(item_id, result.error)

        logger.info("Removed %s without rating (%s)", label, reason.value)
        return ItemOutcome.removed_unrated(item_id, reason)
