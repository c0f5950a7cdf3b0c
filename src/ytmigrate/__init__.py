"""YouTube account migration tool."""

__version__ = "0.1.0"

# Import all public components
from .api import YouTubeAPI
from .config import MigrationConfig
from .dispatcher import ActionDispatcher
from .endpoint import Endpoint, resolve_endpoint
from .errors import (
    MigrationAggregateError,
    PlaylistNotFoundError,
    RatingDisabledError,
    YouTubeError,
)
from .logging_config import configure_logging, get_logger
from .models import Action, DataKind, ItemOutcome, ItemStatus, OutcomeKind, UnratedReason
from .paginator import iter_items, paginate
from .strategies import BulkRatingPipeline, apply_isolated
from .throttle import FixedIntervalRateLimiter

# Get logger for this module
logger = get_logger(__name__)
