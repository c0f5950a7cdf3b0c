"""Transfer strategies, one per kind of account data."""

from .base import IsolatedResult, TransferStrategy, apply_isolated
from .bulk_likes import BulkRatingPipeline
from .playlists import PlaylistItemStrategy, PlaylistStrategy, WatchLaterStrategy
from .ratings import RatedVideoStrategy
from .subscriptions import SubscriptionStrategy

__all__ = [
    "BulkRatingPipeline",
    "IsolatedResult",
    "PlaylistItemStrategy",
    "PlaylistStrategy",
    "RatedVideoStrategy",
    "SubscriptionStrategy",
    "TransferStrategy",
    "WatchLaterStrategy",
    "apply_isolated",
]
