"""Webhook endpoints."""

from typing import Any, Dict, Mapping, Optional

from ..utils.query import build_query
from .base import ResourceHandler


class WebhooksHandler(ResourceHandler):
    """Register and remove webhooks for account events."""

    resource_name = "webhook"

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
        )
        path = "/webhooks"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(self, target_url: str, event: Mapping[str, Any]) -> Dict[str, Any]:
        """Register a webhook.

        :param target_url: URL the API will POST events to
        :param event: Event description, e.g. ``{"name": "subscriber.tag_add",
            "tag_id": 12}``
        :return: ``{"webhook": {...}}``
        """
        body = {"target_url": target_url, "event": dict(event)}
        path = "/webhooks"
        return self._expect_object(
            await self._api.post(path, body=self._encode(body)), path
        )

    async def delete(self, webhook_id: int) -> Optional[Dict[str, Any]]:
        path = f"/webhooks/{webhook_id}"
        return self._optional_object(await self._api.delete(path), path)
