"""Custom field endpoints."""

from typing import Any, Dict, List, Mapping, Optional

from ..models import with_bulk_type
from ..utils.query import build_query
from .base import ResourceHandler


class CustomFieldsHandler(ResourceHandler):
    """Manage the extra subscriber attributes an account defines."""

    resource_name = "custom field"

    async def bulk_create(
        self,
        custom_fields: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create several custom fields at once.

        Requires an OAuth token. Large batches run asynchronously and
        report to ``callback_url``.

        :param custom_fields: Items of the form ``{"label": "..."}``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``
        """
        body: Dict[str, Any] = {"custom_fields": list(custom_fields)}
        if callback_url is not None:
            body["callback_url"] = callback_url

        path = "/bulk/custom_fields"
        payload = await self._api.post(path, body=self._encode(body))
        return with_bulk_type(self._expect_object(payload, path), "custom_fields")

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
        path = "/custom_fields"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(self, label: str) -> Dict[str, Any]:
        """Create a custom field.

        :param label: Display label; the API derives the key from it
        :return: ``{"custom_field": {...}}``
        """
        path = "/custom_fields"
        return self._expect_object(
            await self._api.post(path, body=self._encode({"label": label})), path
        )

    async def update(self, field_id: int, label: str) -> Optional[Dict[str, Any]]:
        path = f"/custom_fields/{field_id}"
        payload = await self._api.put(path, body=self._encode({"label": label}))
        return self._optional_object(payload, path)

    async def delete(self, field_id: int) -> Optional[Dict[str, Any]]:
        """Delete a custom field and its value on every subscriber."""
        path = f"/custom_fields/{field_id}"
        return self._optional_object(await self._api.delete(path), path)
