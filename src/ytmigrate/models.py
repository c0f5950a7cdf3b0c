"""Actions, data kinds and item outcomes."""

from collections import Counter
from enum import Enum
from typing import Optional

from .config import MigrationConfig
from .endpoint import Endpoint


class Action(Enum):
    """What to do with the source account's data."""

    PREVIEW = "preview"
    MIGRATE = "migrate"
    DELETE = "delete"


class DataKind(Enum):
    """Kind of account data to operate on."""

    PLAYLISTS = "playlists"
    PLAYLIST_ITEMS = "playlist-items"
    SUBSCRIPTIONS = "subscriptions"
    LIKED_VIDEOS = "liked-videos"
    LIKED_VIDEOS_BULK = "liked-videos-bulk"
    DISLIKED_VIDEOS = "disliked-videos"
    WATCH_LATER = "watch-later"


class ItemStatus(Enum):
    """Result of one item in a standard transfer."""

    INSERTED = "inserted"
    DELETED = "deleted"
    RATED = "rated"
    SKIPPED = "skipped"
    FAILED = "failed"


class OutcomeKind(Enum):
    """Result of one item in the bulk rating pipeline."""

    RATED_AND_REMOVED = "rated_and_removed"
    REMOVED_UNRATED = "removed_unrated"
    LEFT_IN_PLACE = "left_in_place"
    SKIPPED = "skipped"


class UnratedReason(Enum):
    """Why an item was removed without being rated."""

    PRIVATE = "private"
    DELETED = "deleted"
    RATING_DISABLED = "rating_disabled"


class ItemOutcome:
    """Outcome of one bulk pipeline item."""

    def __init__(
        self,
        item_id: str,
        kind: OutcomeKind,
        reason: Optional[UnratedReason] = None,
        error: Optional[Exception] = None,
    ) -> None:
        if kind is OutcomeKind.REMOVED_UNRATED and reason is None:
            raise ValueError("REMOVED_UNRATED requires a reason")
        if kind is OutcomeKind.LEFT_IN_PLACE and error is None:
            raise ValueError("LEFT_IN_PLACE requires an error")
        self.item_id = item_id
        self.kind = kind
        self.reason = reason
        self.error = error

    @classmethod
    def rated_and_removed(cls, item_id: str) -> "ItemOutcome":
        return cls(item_id, OutcomeKind.RATED_AND_REMOVED)

    @classmethod
    def removed_unrated(cls, item_id: str, reason: UnratedReason) -> "ItemOutcome":
        return cls(item_id, OutcomeKind.REMOVED_UNRATED, reason=reason)

    @classmethod
    def left_in_place(cls, item_id: str, error: Exception) -> "ItemOutcome":
        return cls(item_id, OutcomeKind.LEFT_IN_PLACE, error=error)

    @classmethod
    def skipped(cls, item_id: str) -> "ItemOutcome":
        return cls(item_id, OutcomeKind.SKIPPED)

    @property
    def label(self) -> str:
        if self.reason is not None:
            return f"{self.kind.value}({self.reason.value})"
        return self.kind.value

    def __eq__(self, other) -> bool:
        if not isinstance(other, ItemOutcome):
            return NotImplemented
        return (self.item_id, self.kind, self.reason) == (other.item_id, other.kind, other.reason)

    def __hash__(self) -> int:
        return hash((self.item_id, self.kind, self.reason))

    def __repr__(self) -> str:
        return f"ItemOutcome({self.item_id!r}, {self.label})"


class TransferSummary:
    """Per-status item counts for one transfer."""

    def __init__(self, kind: DataKind) -> None:
        self.kind = kind
        self.counts: Counter = Counter()

    def record(self, status: Enum) -> None:
        self.counts[status] += 1

    def merge(self, other: "TransferSummary") -> None:
        self.counts.update(other.counts)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __getitem__(self, status: Enum) -> int:
        return self.counts[status]

    def __str__(self) -> str:
        parts = ", ".join(
            f"{status.value}={count}"
            for status, count in sorted(self.counts.items(), key=lambda kv: kv[0].value)
        )
        return f"{self.kind.value}: {self.total} item(s)" + (f" ({parts})" if parts else "")


class TransferContext:
    """Everything a strategy needs to run: action, endpoints and settings."""

    def __init__(
        self,
        action: Action,
        source: Endpoint,
        target: Optional[Endpoint] = None,
        config: Optional[MigrationConfig] = None,
    ) -> None:
        """Initialize context.

        Args:
            action: Action to perform
            source: Endpoint the data is read from
            target: Endpoint the data is written to, only for MIGRATE
            config: Run-time settings

        Raises:
            ValueError: If target presence does not match the action
        """
        if action is Action.MIGRATE and target is None:
            raise ValueError("Migrate requires a target account")
        if action is not Action.MIGRATE and target is not None:
            raise ValueError(f"{action.value.capitalize()} does not take a target account")
        self.action = action
        self.source = source
        self.target = target
        self.config = config or MigrationConfig()

    @property
    def preview(self) -> bool:
        return self.action is Action.PREVIEW
