"""Error handling utilities."""

import json
from typing import List, Optional

from googleapiclient.errors import HttpError

from .logging_config import get_logger

logger = get_logger(__name__)

# Structured reasons the API reports when a video's owner has disabled ratings
RATING_DISABLED_REASONS = ("videoRatingDisabled", "ratingDisabled")

# Fallback for error bodies without structured details
RATING_DISABLED_MARKERS = ("videoRatingDisabled", "ratingDisabled", "disabled ratings")


def log_error(error: Exception, context: Optional[str] = None) -> None:
    """Log an error with optional context.

    Args:
        error: The exception to log
        context: Optional context about where/why the error occurred
    """
    if context:
        logger.error("%s: %s", context, str(error))
    else:
        logger.error(str(error))


class YouTubeError(Exception):
    """Base class for YouTube API errors."""

    pass


class PlaylistNotFoundError(YouTubeError):
    """Error raised when a playlist is not found."""

    pass


class ChannelNotFoundError(YouTubeError):
    """Error raised when an account owns no channel."""

    pass


class RatingDisabledError(YouTubeError):
    """Error raised when the owner of a video has disabled ratings."""

    def __init__(self, video_id: str):
        """Initialize error.

        Args:
            video_id: ID of the video that cannot be rated
        """
        self.video_id = video_id
        super().__init__(f"Rating is disabled for video {video_id}")


class MigrationAggregateError(YouTubeError):
    """Error raised after a run when one or more data kinds aborted."""

    def __init__(self, errors: List[Exception]):
        """Initialize error.

        Args:
            errors: The errors that aborted each failed data kind
        """
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} operation(s) failed")


def _error_reasons(error: HttpError) -> List[str]:
    """Collect the structured reasons from an HttpError."""
    reasons = []
    details = getattr(error, "error_details", None)
    if isinstance(details, list):
        for detail in details:
            if isinstance(detail, dict) and detail.get("reason"):
                reasons.append(detail["reason"])

    # error_details is only populated for some payload shapes
    if not reasons and getattr(error, "content", None):
        try:
            payload = json.loads(error.content.decode("utf-8"))
        except (ValueError, UnicodeDecodeError, AttributeError):
            payload = None
        if isinstance(payload, dict):
            for detail in payload.get("error", {}).get("errors", []) or []:
                if isinstance(detail, dict) and detail.get("reason"):
                    reasons.append(detail["reason"])
    return reasons


def is_rating_disabled(error: Exception) -> bool:
    """Check whether an error means rating is disabled for the video.

    Structured reasons are checked first. A substring match on the raw
    error text is only a fallback, since the exact reason is not guaranteed.

    Args:
        error: Error raised by a rate call

    Returns:
        True if the error signals that rating is disabled
    """
    if isinstance(error, RatingDisabledError):
        return True

    if isinstance(error, HttpError):
        reasons = _error_reasons(error)
        if reasons:
            return any(reason in RATING_DISABLED_REASONS for reason in reasons)
        text = error.content.decode("utf-8", "replace") if error.content else str(error)
    else:
        text = str(error)

    return any(marker in text for marker in RATING_DISABLED_MARKERS)
