"""Selects and runs the transfer for each kind of account data."""

from typing import Callable, Dict, List, Optional

from .config import MigrationConfig
from .endpoint import Endpoint
from .errors import MigrationAggregateError, YouTubeError
from .logging_config import get_logger
from .models import Action, DataKind, TransferContext, TransferSummary
from .strategies import (
    BulkRatingPipeline,
    PlaylistStrategy,
    RatedVideoStrategy,
    SubscriptionStrategy,
    TransferStrategy,
    WatchLaterStrategy,
)

logger = get_logger(__name__)

StrategyFactory = Callable[[TransferContext], TransferStrategy]

STRATEGIES: Dict[DataKind, StrategyFactory] = {
    DataKind.PLAYLISTS: lambda ctx: PlaylistStrategy(ctx),
    DataKind.PLAYLIST_ITEMS: lambda ctx: PlaylistStrategy(ctx, include_items=True),
    DataKind.SUBSCRIPTIONS: SubscriptionStrategy,
    DataKind.LIKED_VIDEOS: lambda ctx: RatedVideoStrategy(ctx, "like"),
    DataKind.LIKED_VIDEOS_BULK: BulkRatingPipeline,
    DataKind.DISLIKED_VIDEOS: lambda ctx: RatedVideoStrategy(ctx, "dislike"),
    DataKind.WATCH_LATER: WatchLaterStrategy,
}


class ActionDispatcher:
    """Runs one action over one or more kinds of data."""

    def __init__(
        self,
        action: Action,
        source: Endpoint,
        target: Optional[Endpoint] = None,
        config: Optional[MigrationConfig] = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            action: Action to perform
            source: Endpoint the data is read from
            target: Endpoint the data is written to, only for MIGRATE
            config: Run-time settings

        Raises:
            ValueError: If target presence does not match the action
        """
        self.context = TransferContext(action, source, target, config)

    @property
    def action(self) -> Action:
        return self.context.action

    def build(self, kind: DataKind) -> TransferStrategy:
        """Create the strategy for a data kind.

        Args:
            kind: Kind of data

        Returns:
            Strategy bound to this dispatcher's context
        """
        try:
            factory = STRATEGIES[kind]
        except KeyError:
            raise ValueError(f"Unsupported data kind: {kind}") from None
        return factory(self.context)

    def dispatch(self, *kinds: DataKind) -> List[TransferSummary]:
        """Run the action for each data kind in order.

        A kind whose listing fails is abandoned, the remaining kinds still
        run and the failures are raised together at the end.

        Args:
            *kinds: Kinds of data to process

        Returns:
            One summary per completed kind

        Raises:
            MigrationAggregateError: If one or more kinds could not be listed
        """
        summaries = []
        errors = []

        for kind in kinds:
            logger.info("%s %s", self.action.value.capitalize(), kind.value)
            strategy = self.build(kind)
            try:
                summary = strategy.run()
            except YouTubeError as e:
                logger.error("Aborted %s: %s", kind.value, str(e))
                errors.append(e)
                continue

            logger.info("Finished %s", summary)
            items_summary = getattr(strategy, "items_summary", None)
            if items_summary is not None and items_summary.total:
                logger.info("Finished %s", items_summary)
            summaries.append(summary)

        if errors:
            raise MigrationAggregateError(errors)
        return summaries
