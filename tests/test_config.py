"""Tests for configuration."""

import os
from unittest.mock import patch

from src.ytmigrate import config
from src.ytmigrate.config import MigrationConfig


def test_token_file_per_account():
    with patch.object(config, "CREDENTIALS_DIR", os.path.join("data", "credentials")):
        assert config.token_file("source") == os.path.join(
            "data", "credentials", "token_source.pickle"
        )
        assert config.token_file("source") != config.token_file("target")


def test_migration_config_defaults():
    run_config = MigrationConfig()

    assert run_config.page_size == config.PAGE_SIZE
    assert run_config.playlist_page_size == config.PLAYLIST_PAGE_SIZE
    assert run_config.bulk_concurrency == config.BULK_CONCURRENCY
    assert run_config.rate_delay == config.RATE_DELAY_SECONDS
    assert run_config.show_progress


def test_migration_config_overrides():
    run_config = MigrationConfig(page_size=10, bulk_concurrency=4, rate_delay=0.5)

    assert run_config.page_size == 10
    assert run_config.bulk_concurrency == 4
    assert run_config.rate_delay == 0.5
    assert "bulk_concurrency=4" in repr(run_config)
