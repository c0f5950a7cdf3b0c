"""Authenticated account endpoints."""

from typing import Any, Callable, Dict, List, Optional

from .api import YouTubeAPI
from .errors import ChannelNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

ChannelChooser = Callable[[List[Dict[str, Any]]], int]


class Endpoint:
    """An authenticated API bound to one resolved channel.

    Endpoints are created once per login and never change afterwards.
    """

    def __init__(self, api: YouTubeAPI, channel: Dict[str, Any]) -> None:
        """Initialize endpoint.

        Args:
            api: API wrapper authenticated as the account
            channel: Channel resource returned by channels.list
        """
        self._api = api
        self._channel = channel

    @property
    def api(self) -> YouTubeAPI:
        return self._api

    @property
    def channel(self) -> Dict[str, Any]:
        return self._channel

    @property
    def channel_id(self) -> str:
        return self._channel["id"]

    @property
    def title(self) -> str:
        return self._channel.get("snippet", {}).get("title", self.channel_id)

    def related_playlist(self, name: str) -> Optional[str]:
        """Get one of the channel's system playlists.

        Args:
            name: Related playlist key, e.g. "likes" or "watchLater"

        Returns:
            Playlist ID, or None if the channel does not expose it
        """
        related = self._channel.get("contentDetails", {}).get("relatedPlaylists", {})
        return related.get(name) or None

    def __repr__(self) -> str:
        return f"Endpoint({self.title!r}, {self.channel_id!r})"


def resolve_endpoint(api: YouTubeAPI, choose: Optional[ChannelChooser] = None) -> Endpoint:
    """Resolve the channel an account will operate on.

    A single channel is picked automatically. With several channels,
    choose is called with the list and must return an index.

    Args:
        api: API wrapper authenticated as the account
        choose: Callback picking a channel index

    Returns:
        Endpoint for the selected channel

    Raises:
        ChannelNotFoundError: If the account owns no channel
        ValueError: If several channels exist and no valid choice is made
    """
    channels = api.list_my_channels()
    if not channels:
        raise ChannelNotFoundError("No channel found for the authenticated account")

    if len(channels) == 1:
        channel = channels[0]
    else:
        if choose is None:
            raise ValueError(f"Account owns {len(channels)} channels, a choice is required")
        index = choose(channels)
        if not 0 <= index < len(channels):
            raise ValueError(f"Invalid channel index: {index}")
        channel = channels[index]

    endpoint = Endpoint(api, channel)
    logger.info("Using channel %s (%s)", endpoint.title, endpoint.channel_id)
    return endpoint
