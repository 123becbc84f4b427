"""Subscriber endpoints."""

from typing import Any, Dict, List, Mapping, Optional

from ..models import with_bulk_type
from ..utils.dates import DateLike
from ..utils.query import build_query
from .base import ResourceHandler


class SubscribersHandler(ResourceHandler):
    """Create, look up, update and unsubscribe subscribers."""

    resource_name = "subscriber"

    async def bulk_create(
        self,
        subscribers: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create or update subscribers in bulk.

        More than 100 subscribers are processed asynchronously; provide
        ``callback_url`` to learn the result.

        :param subscribers: Items with ``email_address`` and optionally
            ``first_name`` and ``state``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``
        """
        body: Dict[str, Any] = {"subscribers": list(subscribers)}
        if callback_url is not None:
            body["callback_url"] = callback_url

        path = "/bulk/subscribers"
        payload = await self._api.post(path, body=self._encode(body))
        return with_bulk_type(self._expect_object(payload, path), "subscribers")

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        created_after: Optional[DateLike] = None,
        created_before: Optional[DateLike] = None,
        email_address: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
        sort_field: Optional[str] = None,
        sort_order: Optional[str] = None,
        status: Optional[str] = None,
        updated_after: Optional[DateLike] = None,
        updated_before: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        """Return a page of subscribers matching the given filters.

        :param sort_field: ``id``, ``updated_at`` or ``cancelled_at``
        :param sort_order: ``asc`` or ``desc``
        :param status: Subscriber state, or ``all``
        :return: ``{"subscribers": [...], "pagination": {...}}``
        """
        query = build_query(
            after=after,
            before=before,
            created_after=created_after,
            created_before=created_before,
            email_address=email_address,
            include_total_count=include_total_count,
            per_page=per_page,
            sort_field=sort_field,
            sort_order=sort_order,
            status=status,
            updated_after=updated_after,
            updated_before=updated_before,
        )
        path = "/subscribers"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(
        self,
        email_address: str,
        *,
        first_name: Optional[str] = None,
        state: Optional[str] = None,
        fields: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Create a subscriber, or update the one with this email.

        :return: ``{"subscriber": {...}}``
        """
        body: Dict[str, Any] = {"email_address": email_address}
        if first_name is not None:
            body["first_name"] = first_name
        if state is not None:
            body["state"] = state
        if fields is not None:
            body["fields"] = dict(fields)

        path = "/subscribers"
        return self._expect_object(
            await self._api.post(path, body=self._encode(body)), path
        )

    async def get(self, subscriber_id: int) -> Optional[Dict[str, Any]]:
        """Return a subscriber by id, or ``None`` if none exists."""
        path = f"/subscribers/{subscriber_id}"
        return self._optional_object(await self._api.get(path), path)

    async def update(
        self,
        subscriber_id: int,
        *,
        email_address: Optional[str] = None,
        first_name: Optional[str] = None,
        fields: Optional[Mapping[str, str]] = None,
    ) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {}
        if email_address is not None:
            body["email_address"] = email_address
        if first_name is not None:
            body["first_name"] = first_name
        if fields is not None:
            body["fields"] = dict(fields)

        path = f"/subscribers/{subscriber_id}"
        payload = await self._api.put(path, body=self._encode(body))
        return self._optional_object(payload, path)

    async def unsubscribe(self, subscriber_id: int) -> Optional[Dict[str, Any]]:
        """Unsubscribe a subscriber from all emails.

        :return: ``{}`` on success, ``None`` if the subscriber does not exist
        """
        path = f"/subscribers/{subscriber_id}/unsubscribe"
        return self._optional_object(await self._api.post(path), path)

    async def get_tags(
        self,
        subscriber_id: int,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
        )
        path = f"/subscribers/{subscriber_id}/tags"
        return self._optional_object(await self._api.get(path, query=query), path)
