"""Tag endpoints.

Bulk operations require an OAuth token. When more than 100 items are
sent the API queues the work and the response carries no results; set
``callback_url`` to be told when it completes.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..models import with_bulk_type
from ..utils.dates import DateLike
from ..utils.query import build_query
from .base import ResourceHandler


def _bulk_body(
    key: str, items: List[Mapping[str, Any]], callback_url: Optional[str]
) -> Dict[str, Any]:
    body: Dict[str, Any] = {key: list(items)}
    if callback_url is not None:
        body["callback_url"] = callback_url
    return body


class TagsHandler(ResourceHandler):
    """Manage tags and which subscribers carry them."""

    resource_name = "tag"

    async def bulk_create(
        self,
        tags: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create several tags at once.

        :param tags: Items of the form ``{"name": "..."}``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``; a
            synchronous response carries ``tags`` and ``failures``
        """
        path = "/bulk/tags"
        payload = await self._api.post(
            path, body=self._encode(_bulk_body("tags", tags, callback_url))
        )
        return with_bulk_type(self._expect_object(payload, path), "tags")

    async def bulk_tag(
        self,
        taggings: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Apply tags to subscribers in bulk.

        :param taggings: Items of the form ``{"tag_id": 1, "subscriber_id": 2}``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``
        """
        path = "/bulk/tags/subscribers"
        payload = await self._api.post(
            path, body=self._encode(_bulk_body("taggings", taggings, callback_url))
        )
        return with_bulk_type(self._expect_object(payload, path), "subscribers")

    async def bulk_remove(
        self,
        taggings: List[Mapping[str, Any]],
        callback_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Remove tags from subscribers in bulk.

        :param taggings: Items of the form ``{"tag_id": 1, "subscriber_id": 2}``
        :param callback_url: URL notified when an async batch finishes
        :return: Response tagged ``type: synchronous|asynchronous``; a
            synchronous response carries only ``failures``
        """
        path = "/bulk/tags/subscribers"
        payload = await self._api.delete(
            path, body=self._encode(_bulk_body("taggings", taggings, callback_url))
        )
        return with_bulk_type(self._expect_object(payload, path), "failures")

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Return a page of tags.

        :return: ``{"tags": [...], "pagination": {...}}``
        """
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
        )
        path = "/tags"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(self, name: str) -> Dict[str, Any]:
        path = "/tags"
        return self._expect_object(
            await self._api.post(path, body=self._encode({"name": name})), path
        )

    async def update(self, tag_id: int, name: str) -> Optional[Dict[str, Any]]:
        """Rename a tag.

        :return: ``{"tag": {...}}`` or ``None`` if the tag does not exist
        """
        path = f"/tags/{tag_id}"
        payload = await self._api.put(path, body=self._encode({"name": name}))
        return self._optional_object(payload, path)

    async def list_subscribers(
        self,
        tag_id: int,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        created_after: Optional[DateLike] = None,
        created_before: Optional[DateLike] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
        status: Optional[str] = None,
        tagged_after: Optional[DateLike] = None,
        tagged_before: Optional[DateLike] = None,
    ) -> Optional[Dict[str, Any]]:
        query = build_query(
            after=after,
            before=before,
            created_after=created_after,
            created_before=created_before,
            include_total_count=include_total_count,
            per_page=per_page,
            status=status,
            tagged_after=tagged_after,
            tagged_before=tagged_before,
        )
        path = f"/tags/{tag_id}/subscribers"
        return self._optional_object(await self._api.get(path, query=query), path)

    async def tag_subscriber(
        self, tag_id: int, subscriber_id: int
    ) -> Optional[Dict[str, Any]]:
        """Tag an existing subscriber by id.

        :return: ``{"subscriber": {...}}`` or ``None`` if either id is unknown
        """
        path = f"/tags/{tag_id}/subscribers/{subscriber_id}"
        return self._optional_object(await self._api.post(path), path)

    async def tag_subscriber_by_email(
        self, tag_id: int, email_address: str
    ) -> Optional[Dict[str, Any]]:
        path = f"/tags/{tag_id}/subscribers"
        payload = await self._api.post(
            path, body=self._encode({"email_address": email_address})
        )
        return self._optional_object(payload, path)

    async def remove_subscriber(
        self, tag_id: int, subscriber_id: int
    ) -> Optional[Dict[str, Any]]:
        """Remove a tag from a subscriber.

        :return: ``{}`` on success; ``None`` if the tag or subscriber is
            unknown or the subscriber was not tagged
        """
        path = f"/tags/{tag_id}/subscribers/{subscriber_id}"
        return self._optional_object(await self._api.delete(path), path)

    async def remove_subscriber_by_email(
        self, tag_id: int, email_address: str
    ) -> Optional[Dict[str, Any]]:
        path = f"/tags/{tag_id}/subscribers"
        payload = await self._api.delete(
            path, body=self._encode({"email_address": email_address})
        )
        return self._optional_object(payload, path)
