"""Tests for the action dispatcher."""

import pytest

from src.ytmigrate.dispatcher import STRATEGIES, ActionDispatcher
from src.ytmigrate.errors import MigrationAggregateError, YouTubeError
from src.ytmigrate.models import Action, DataKind, ItemStatus, OutcomeKind
from src.ytmigrate.strategies import (
    BulkRatingPipeline,
    PlaylistStrategy,
    RatedVideoStrategy,
    SubscriptionStrategy,
    WatchLaterStrategy,
)

from .conftest import playlist, playlist_item, subscription, video


def test_every_data_kind_has_a_strategy():
    assert set(STRATEGIES) == set(DataKind)


@pytest.mark.parametrize(
    "kind, strategy_class",
    [
        (DataKind.PLAYLISTS, PlaylistStrategy),
        (DataKind.PLAYLIST_ITEMS, PlaylistStrategy),
        (DataKind.SUBSCRIPTIONS, SubscriptionStrategy),
        (DataKind.LIKED_VIDEOS, RatedVideoStrategy),
        (DataKind.LIKED_VIDEOS_BULK, BulkRatingPipeline),
        (DataKind.DISLIKED_VIDEOS, RatedVideoStrategy),
        (DataKind.WATCH_LATER, WatchLaterStrategy),
    ],
)
def test_build_maps_kind_to_strategy(kind, strategy_class, source, target, run_config):
    dispatcher = ActionDispatcher(Action.MIGRATE, source, target, run_config)

    strategy = dispatcher.build(kind)

    assert isinstance(strategy, strategy_class)
    assert strategy.kind is kind
    assert strategy.context is dispatcher.context


def test_playlist_items_kind_includes_items(source, run_config):
    strategy = ActionDispatcher(Action.PREVIEW, source, config=run_config).build(
        DataKind.PLAYLIST_ITEMS
    )

    assert strategy.include_items


def test_rating_kinds(source, run_config):
    dispatcher = ActionDispatcher(Action.PREVIEW, source, config=run_config)

    assert dispatcher.build(DataKind.LIKED_VIDEOS).rating == "like"
    assert dispatcher.build(DataKind.DISLIKED_VIDEOS).rating == "dislike"


def test_target_must_match_action(source, target, run_config):
    with pytest.raises(ValueError):
        ActionDispatcher(Action.MIGRATE, source, None, run_config)
    with pytest.raises(ValueError):
        ActionDispatcher(Action.DELETE, source, target, run_config)


def test_dispatch_runs_kinds_in_order(source_api, target_api, source, target, run_config):
    source_api.pages["subscriptions"] = [[subscription("s1", "UC_a")]]
    source_api.pages[("videos", "dislike")] = [[video("v1")]]

    summaries = ActionDispatcher(Action.MIGRATE, source, target, run_config).dispatch(
        DataKind.SUBSCRIPTIONS, DataKind.DISLIKED_VIDEOS
    )

    assert [s.kind for s in summaries] == [DataKind.SUBSCRIPTIONS, DataKind.DISLIKED_VIDEOS]
    assert summaries[0][ItemStatus.INSERTED] == 1
    assert summaries[1][ItemStatus.RATED] == 1
    assert [key for key, _ in source_api.list_calls] == ["subscriptions", ("videos", "dislike")]


def test_dispatch_bulk_likes(source_api, target_api, source, target, run_config):
    source_api.pages[("playlistItems", "LL")] = [[playlist_item("i1", "v1", playlist_id="LL")]]

    [summary] = ActionDispatcher(Action.MIGRATE, source, target, run_config).dispatch(
        DataKind.LIKED_VIDEOS_BULK
    )

    assert summary[OutcomeKind.RATED_AND_REMOVED] == 1
    assert target_api.rated == [("v1", "like")]


def test_dispatch_preview_never_mutates(source_api, source, run_config):
    source_api.pages["playlists"] = [[playlist("PL1", "A")]]
    source_api.pages[("playlistItems", "PL1")] = [[playlist_item("i1", "v1")]]
    source_api.pages[("playlistItems", "LL")] = [[playlist_item("i2", "v2", playlist_id="LL")]]
    source_api.pages["subscriptions"] = [[subscription("s1", "UC_a")]]

    ActionDispatcher(Action.PREVIEW, source, config=run_config).dispatch(*DataKind)

    assert source_api.mutations == 0


def test_page_failure_is_aggregated(source_api, source, run_config):
    calls = []
    original = source_api.list_page

    def list_page(collection, **kwargs):
        calls.append(collection)
        if collection == "playlists":
            raise YouTubeError("playlists unavailable")
        if collection == "videos":
            raise YouTubeError("videos unavailable")
        return original(collection, **kwargs)

    source_api.list_page = list_page
    source_api.pages["subscriptions"] = [[subscription("s1", "UC_a")]]

    dispatcher = ActionDispatcher(Action.PREVIEW, source, config=run_config)
    with pytest.raises(MigrationAggregateError) as excinfo:
        dispatcher.dispatch(DataKind.PLAYLISTS, DataKind.SUBSCRIPTIONS, DataKind.LIKED_VIDEOS)

    assert [str(e) for e in excinfo.value.errors] == [
        "playlists unavailable",
        "videos unavailable",
    ]
    # Later kinds still ran after the first failure
    assert calls == ["playlists", "subscriptions", "videos"]
