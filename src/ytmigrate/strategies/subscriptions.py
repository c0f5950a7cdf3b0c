"""Subscription transfers."""

from typing import Any, Dict, List, Optional, Tuple

from ..models import DataKind
from .base import TransferStrategy, rewrite_channel


class SubscriptionStrategy(TransferStrategy):
    """Transfer the channels the account is subscribed to."""

    kind = DataKind.SUBSCRIPTIONS
    collection = "subscriptions"

    def fetch_page(self, cursor: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        return self.source.api.list_page(
            self.collection,
            part="id,snippet,contentDetails",
            page_token=cursor,
            page_size=self.config.page_size,
            mine=True,
        )

    def build_insert(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return {"snippet": rewrite_channel(item["snippet"], self.target.channel_id)}
