"""Form and landing page endpoints."""

from typing import Any, Dict, List, Mapping, Optional

from ..models import with_bulk_type
from ..utils.dates import DateLike
from ..utils.query import build_query
from .base import ResourceHandler


class FormsHandler(ResourceHandler):
    """List forms and landing pages and add subscribers to them."""

    resource_name = "form"

    async def bulk_add_subscribers(
        self,
        additions: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Add subscribers to forms in bulk.

        :param additions: Items of the form
            ``{"form_id": 1, "subscriber_id": 2, "referrer": "..."}``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``
        """
        body: Dict[str, Any] = {"additions": list(additions)}
        if callback_url is not None:
            body["callback_url"] = callback_url

        path = "/bulk/forms/subscribers"
        payload = await self._api.post(path, body=self._encode(body))
        return with_bulk_type(self._expect_object(payload, path), "subscribers")

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return a page of forms.

        :param status: ``active``, ``archived``, ``trashed`` or ``all``
        :param type: ``embed`` for forms or ``hosted`` for landing pages
        """
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
            status=status,
            type=type,
        )
        path = "/forms"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def list_subscribers(
        self,
        form_id: int,
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
        """Return subscribers who signed up through a form.

        :return: A page of subscribers, or ``None`` if the form does not exist
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
        path = f"/forms/{form_id}/subscribers"
        return self._optional_object(await self._api.get(path, query=query), path)

    async def add_subscriber_by_email(
        self,
        form_id: int,
        email_address: str,
        referrer: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {"email_address": email_address}
        if referrer:
            body["referrer"] = referrer

        path = f"/forms/{form_id}/subscribers"
        payload = await self._api.post(path, body=self._encode(body))
        return self._optional_object(payload, path)

    async def add_subscriber(
        self,
        form_id: int,
        subscriber_id: int,
        referrer: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Add an existing subscriber to a form by id.

        :param referrer: URL the subscriber signed up from; UTM
            parameters in it are recorded by the API
        :return: ``{"subscriber": {...}}`` or ``None`` if either id is unknown
        """
        path = f"/forms/{form_id}/subscribers/{subscriber_id}"
        payload = await self._api.post(path, body=self._encode({"referrer": referrer}))
        return self._optional_object(payload, path)
