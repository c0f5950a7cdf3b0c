"""Command-line interface for YouTube account migration."""

import argparse
import sys
from typing import Any, Dict, List, Optional

from . import auth, config
from .api import YouTubeAPI
from .config import MigrationConfig
from .dispatcher import ActionDispatcher
from .endpoint import Endpoint, resolve_endpoint
from .errors import MigrationAggregateError, YouTubeError
from .logging_config import configure_logging, get_logger
from .models import Action, DataKind

logger = get_logger(__name__)

DATA_CHOICES = [
    DataKind.PLAYLISTS.value,
    DataKind.PLAYLIST_ITEMS.value,
    DataKind.SUBSCRIPTIONS.value,
    DataKind.LIKED_VIDEOS.value,
    DataKind.DISLIKED_VIDEOS.value,
    DataKind.WATCH_LATER.value,
]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Copy or delete YouTube account data between two accounts"
    )
    parser.add_argument(
        "action",
        choices=[action.value for action in Action],
        help="preview lists the data, migrate copies it to the target account, "
        "delete removes it from the source account",
    )
    parser.add_argument("data", choices=DATA_CHOICES, help="Kind of data to process")
    parser.add_argument(
        "--legacy-likes",
        action="store_true",
        help="List liked videos by rating instead of through the Likes playlist",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=config.BULK_CONCURRENCY,
        help="Parallel rating calls per page for liked videos",
    )
    parser.add_argument(
        "--rate-delay",
        type=float,
        default=config.RATE_DELAY_SECONDS,
        help="Minimum seconds between liked video migrations",
    )
    parser.add_argument("--log-dir", default=config.LOG_DIR, help="Directory for daily log files")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def data_kind(data: str, legacy_likes: bool = False) -> DataKind:
    """Map the data argument to a data kind.

    Args:
        data: Value of the data argument
        legacy_likes: Whether to use the rating-filtered listing for likes

    Returns:
        The data kind to dispatch
    """
    kind = DataKind(data)
    if kind is DataKind.LIKED_VIDEOS and not legacy_likes:
        return DataKind.LIKED_VIDEOS_BULK
    return kind


def prompt_channel_index(channels: List[Dict[str, Any]]) -> int:
    """Ask the operator which channel to use.

    Args:
        channels: Channels owned by the account

    Returns:
        Index of the selected channel
    """
    print("Select a channel:")
    for index, channel in enumerate(channels):
        title = channel.get("snippet", {}).get("title", "")
        print(f"  {index}) {title} ({channel['id']})")

    while True:
        answer = input("Channel number: ").strip()
        if answer.isdigit() and int(answer) < len(channels):
            return int(answer)
        print(f"Enter a number between 0 and {len(channels) - 1}")


def login(account: str, scopes: List[str]) -> Optional[Endpoint]:
    """Authenticate an account and resolve its channel.

    Args:
        account: Account label used for the token file
        scopes: OAuth scopes to request

    Returns:
        Endpoint, or None if authentication failed
    """
    youtube = auth.get_youtube_service(account, scopes)
    if not youtube:
        return None
    return resolve_endpoint(YouTubeAPI(youtube), prompt_channel_index)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        int: Exit code
    """
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv
    try:
        args = parser.parse_args(args=argv if argv else ["--help"])
    except SystemExit as e:
        return 1 if e.code == 2 else e.code

    configure_logging(debug=args.debug, log_dir=args.log_dir)

    try:
        run_config = MigrationConfig(
            bulk_concurrency=args.concurrency,
            rate_delay=args.rate_delay,
            show_progress=not args.no_progress,
        )
    except ValueError as e:
        logger.error("Invalid option: %s", str(e))
        return 1

    action = Action(args.action)
    kind = data_kind(args.data, args.legacy_likes)
    scopes = config.YOUTUBE_READONLY_SCOPES if action is Action.PREVIEW else config.YOUTUBE_SCOPES

    try:
        logger.info("Log in with the source account to %s the data from", action.value)
        source = login(config.SOURCE_ACCOUNT, scopes)
        if source is None:
            logger.error("Command failed: %s", "Failed to get YouTube service")
            return 1

        target = None
        if action is Action.MIGRATE:
            logger.info("Log in with the target account to migrate your data to")
            target = login(config.TARGET_ACCOUNT, config.YOUTUBE_SCOPES)
            if target is None:
                logger.error("Command failed: %s", "Failed to get YouTube service")
                return 1

        ActionDispatcher(action, source, target, run_config).dispatch(kind)
        return 0
    except MigrationAggregateError as e:
        for error in e.errors:
            logger.error("Error: %s", str(error))
        return 1
    except (YouTubeError, ValueError) as e:
        logger.error("Command failed: %s", str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
