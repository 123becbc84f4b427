"""Broadcast endpoints."""

from typing import Any, Dict, Mapping, Optional

from ..utils.query import build_query
from .base import ResourceHandler


class BroadcastsHandler(ResourceHandler):
    """Create, schedule and inspect one-off email broadcasts.

    Every operation on a single broadcast validates the id before
    dispatching, and returns ``None`` if the API reports it missing.
    """

    resource_name = "broadcast"

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Return a page of broadcasts.

        :param after: Cursor returned as ``pagination.end_cursor``
        :param before: Cursor returned as ``pagination.start_cursor``
        :param include_total_count: Ask the API to count all broadcasts
        :param per_page: Page size (API default 500)
        :return: ``{"broadcasts": [...], "pagination": {...}}``
        """
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
        )
        path = "/broadcasts"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a draft, scheduled or immediately published broadcast.

        :param params: Broadcast attributes (``subject``, ``content``,
            ``send_at``, ``subscriber_filter`` ...)
        :return: ``{"broadcast": {...}}``
        """
        path = "/broadcasts"
        return self._expect_object(
            await self._api.post(path, body=self._encode(params)), path
        )

    async def get_all_stats(self) -> Dict[str, Any]:
        path = "/broadcasts/stats"
        return self._expect_object(await self._api.get(path), path)

    async def get_link_clicks(self, broadcast_id: int) -> Optional[Dict[str, Any]]:
        """Return per-link click counts for a broadcast."""
        self._require_id(broadcast_id)
        path = f"/broadcasts/{broadcast_id}/clicks"
        return self._optional_object(await self._api.get(path), path)

    async def get_stats(self, broadcast_id: int) -> Optional[Dict[str, Any]]:
        self._require_id(broadcast_id)
        path = f"/broadcasts/{broadcast_id}/stats"
        return self._optional_object(await self._api.get(path), path)

    async def get(self, broadcast_id: int) -> Optional[Dict[str, Any]]:
        self._require_id(broadcast_id)
        path = f"/broadcasts/{broadcast_id}"
        return self._optional_object(await self._api.get(path), path)

    async def update(
        self, broadcast_id: int, params: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update a broadcast that has not been sent yet."""
        self._require_id(broadcast_id)
        path = f"/broadcasts/{broadcast_id}"
        return self._optional_object(
            await self._api.put(path, body=self._encode(params)), path
        )

    async def delete(self, broadcast_id: int) -> Optional[Dict[str, Any]]:
        """Delete a broadcast.

        :return: ``{}`` on success, ``None`` if the broadcast does not exist
        """
        self._require_id(broadcast_id)
        path = f"/broadcasts/{broadcast_id}"
        return self._optional_object(await self._api.delete(path), path)
