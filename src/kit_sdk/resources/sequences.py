"""Sequence endpoints."""

from typing import Any, Dict, Optional

from ..utils.dates import DateLike
from ..utils.query import build_query
from .base import ResourceHandler


class SequencesHandler(ResourceHandler):
    """List sequences and enrol subscribers in them."""

    resource_name = "sequence"

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
        path = "/sequences"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def list_subscribers(
        self,
        sequence_id: int,
        *,
        added_after: Optional[DateLike] = None,
        added_before: Optional[DateLike] = None,
        after: Optional[str] = None,
        before: Optional[str] = None,
        created_after: Optional[DateLike] = None,
        created_before: Optional[DateLike] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Return subscribers enrolled in a sequence.

        :return: A page of subscribers, or ``None`` if the sequence does not exist
        """
        query = build_query(
            added_after=added_after,
            added_before=added_before,
            after=after,
            before=before,
            created_after=created_after,
            created_before=created_before,
            include_total_count=include_total_count,
            per_page=per_page,
            status=status,
        )
        path = f"/sequences/{sequence_id}/subscribers"
        return self._optional_object(await self._api.get(path, query=query), path)

    async def add_subscriber_by_email(
        self, sequence_id: int, email_address: str
    ) -> Optional[Dict[str, Any]]:
        """Enrol an existing subscriber, looked up by email address."""
        path = f"/sequences/{sequence_id}/subscribers"
        payload = await self._api.post(
            path, body=self._encode({"email_address": email_address})
        )
        return self._optional_object(payload, path)

    async def add_subscriber(
        self, sequence_id: int, subscriber_id: int
    ) -> Optional[Dict[str, Any]]:
        path = f"/sequences/{sequence_id}/subscribers/{subscriber_id}"
        return self._optional_object(await self._api.post(path), path)
