"""Configuration and environment settings."""

import os

from dotenv import load_dotenv

# Force reload of environment variables
load_dotenv(override=True)

# Directory Settings
DATA_DIR = os.getenv("DATA_DIR", "data")
CREDENTIALS_DIR = os.getenv("CREDENTIALS_DIR", os.path.join(DATA_DIR, "credentials"))
LOG_DIR = os.getenv("LOG_DIR", os.path.join(DATA_DIR, "logs"))

# YouTube API Settings
YOUTUBE_READONLY_SCOPES = ["https://www.googleapis.com/auth/youtube.readonly"]
YOUTUBE_SCOPES = ["https://www.googleapis.com/auth/youtube.force-ssl"]
CLIENT_SECRETS_FILE = os.getenv("GOOGLE_CLIENT_SECRETS_FILE")

# Account labels, used to keep one token file per login
SOURCE_ACCOUNT = os.getenv("SOURCE_ACCOUNT", "source")
TARGET_ACCOUNT = os.getenv("TARGET_ACCOUNT", "target")

# Transfer Settings
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "50"))  # API maximum is 50
PLAYLIST_PAGE_SIZE = int(os.getenv("PLAYLIST_PAGE_SIZE", "15"))
BULK_CONCURRENCY = int(os.getenv("BULK_CONCURRENCY", "1"))
RATE_DELAY_SECONDS = float(os.getenv("RATE_DELAY_SECONDS", "1.0"))


def token_file(account: str) -> str:
    """Get the token file path for an account.

    Args:
        account: Account label

    Returns:
        Path to the pickled credentials for that account
    """
    return os.path.join(CREDENTIALS_DIR, f"token_{account}.pickle")


class MigrationConfig:
    """Run-time settings passed into the transfer engine."""

    def __init__(
        self,
        page_size: int = PAGE_SIZE,
        playlist_page_size: int = PLAYLIST_PAGE_SIZE,
        bulk_concurrency: int = BULK_CONCURRENCY,
        rate_delay: float = RATE_DELAY_SECONDS,
        show_progress: bool = True,
    ) -> None:
        """Initialize config.

        Args:
            page_size: Items requested per list call
            playlist_page_size: Playlists requested per list call
            bulk_concurrency: Workers per page in the bulk rating pipeline
            rate_delay: Minimum seconds between rating calls
            show_progress: Whether to show progress bars
        """
        if not 1 <= page_size <= 50:
            raise ValueError("page_size must be between 1 and 50")
        if not 1 <= playlist_page_size <= 50:
            raise ValueError("playlist_page_size must be between 1 and 50")
        if bulk_concurrency < 1:
            raise ValueError("bulk_concurrency must be at least 1")
        if rate_delay < 0:
            raise ValueError("rate_delay must not be negative")

        self.page_size = page_size
        self.playlist_page_size = playlist_page_size
        self.bulk_concurrency = bulk_concurrency
        self.rate_delay = rate_delay
        self.show_progress = show_progress

    def __repr__(self) -> str:
        return (
            f"MigrationConfig(page_size={self.page_size}, "
            f"playlist_page_size={self.playlist_page_size}, "
            f"bulk_concurrency={self.bulk_concurrency}, rate_delay={self.rate_delay})"
        )
