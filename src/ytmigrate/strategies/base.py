"""Base transfer strategy and per-item failure isolation."""

import copy
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, TypeVar

from ..errors import log_error
from ..logging_config import get_logger
from ..models import Action, DataKind, ItemStatus, TransferContext, TransferSummary
from ..paginator import paginate

# Get logger for this module
logger = get_logger(__name__)

T = TypeVar("T")


class IsolatedResult(NamedTuple):
    """Result of an operation run through apply_isolated."""

    ok: bool
    value: Any = None
    error: Optional[Exception] = None


def apply_isolated(
    label: str,
    operation: Callable[[], T],
    on_error: Optional[Callable[[Exception], None]] = None,
) -> IsolatedResult:
    """Run one item's operation without letting its failure escape.

    Args:
        label: Context used when logging a failure
        operation: The fallible operation
        on_error: Called with the error instead of the default logging

    Returns:
        IsolatedResult with the operation's value or its error
    """
    try:
        return IsolatedResult(True, operation())
    except Exception as e:  # pylint: disable=broad-except
        if on_error is not None:
            on_error(e)
        else:
            log_error(e, label)
        return IsolatedResult(False, error=e)


def rewrite_channel(snippet: Dict[str, Any], channel_id: str) -> Dict[str, Any]:
    """Copy a snippet and point its owner channelId at the target channel.

    Nested channel IDs such as a subscription's resourceId name other
    channels and are left alone.

    Args:
        snippet: Snippet from the source resource
        channel_id: Target channel ID

    Returns:
        The rewritten copy
    """
    rewritten = copy.deepcopy(snippet)
    rewritten["channelId"] = channel_id
    return rewritten


class TransferStrategy:
    """Base class for transferring one kind of account data.

    Subclasses set kind and collection and implement fetch_page,
    describe and build_insert.
    """

    kind: DataKind
    collection: str = ""
    insert_part: str = "snippet"

    def __init__(self, context: TransferContext) -> None:
        """Initialize strategy.

        Args:
            context: Action, endpoints and settings for the run
        """
        self.context = context
        self._logger = logger
        self._validated = False
        self._current_item = 0
        self.summary = TransferSummary(self.kind)

    @property
    def action(self) -> Action:
        return self.context.action

    @property
    def source(self):
        return self.context.source

    @property
    def target(self):
        return self.context.target

    @property
    def config(self):
        return self.context.config

    def validate(self) -> None:
        """Validate strategy parameters.

        Raises:
            ValueError: If parameters are invalid
        """
        if not self.collection:
            raise ValueError(f"{type(self).__name__} has no collection")
        self._validated = True

    def run(self) -> TransferSummary:
        """Transfer every item of every page.

        Returns:
            Counts of item results

        Raises:
            YouTubeError: If a page cannot be fetched
        """
        if not self._validated:
            self.validate()
        self._run()
        return self.summary

    def _run(self) -> None:
        for items in paginate(self.fetch_page):
            self.process_page(items)

    def process_page(self, items: List[Dict[str, Any]]) -> None:
        """Process a page of items one after another."""
        for item in items:
            self.update_progress()
            self.summary.record(self.process(item))

    def update_progress(self) -> None:
        self._current_item += 1

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Fetch one page of source items."""
        raise NotImplementedError

    def describe(self, item: Dict[str, Any]) -> str:
        """Human readable label for an item."""
        return f"{item.get('snippet', {}).get('title', '')} ({item.get('id')})"

    def build_insert(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Build the body inserted at the target."""
        raise NotImplementedError

    def process(self, item: Dict[str, Any]) -> ItemStatus:
        """Apply the action to one item.

        Args:
            item: Source resource

        Returns:
            Status of the item
        """
        label = self.describe(item)
        self._logger.info("%d) %s", self._current_item, label)

        if self.action is Action.DELETE:
            return self.delete(item, label)
        if self.target is None:
            self._logger.info("Preview mode, %s skipped", label)
            return ItemStatus.SKIPPED
        return self.insert(item, label)[0]

    def delete(self, item: Dict[str, Any], label: str) -> ItemStatus:
        result = apply_isolated(
            f"Failed to delete {label}",
            lambda: self.source.api.delete(self.collection, item["id"]),
        )
        if not result.ok:
            return ItemStatus.FAILED
        self._logger.info("Successfully deleted - %s", item["id"])
        return ItemStatus.DELETED

    def insert(self, item: Dict[str, Any], label: str) -> Tuple[ItemStatus, Optional[str]]:
        """Insert the rewritten item at the target.

        Returns:
            Tuple of (status, ID of the created resource or None)
        """
        result = apply_isolated(
            f"Failed to insert {label}",
            lambda: self.target.api.insert(
                self.collection, self.build_insert(item), part=self.insert_part
            ),
        )
        if not result.ok:
            return ItemStatus.FAILED, None
        new_id = (result.value or {}).get("id")
        self._logger.info("Successfully inserted - %s", new_id)
        return ItemStatus.INSERTED, new_id

