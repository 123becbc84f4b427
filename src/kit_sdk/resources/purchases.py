"""Purchase endpoints."""

from typing import Any, Dict, Mapping, Optional

from ..utils.query import build_query
from .base import ResourceHandler


class PurchasesHandler(ResourceHandler):
    """Record and read commerce purchases attributed to subscribers."""

    resource_name = "purchase"

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
        path = "/purchases"
        return self._expect_object(await self._api.get(path, query=query), path)

    async def create(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Record a purchase.

        :param params: ``{"purchase": {"email_address": ..., "transaction_id": ...,
            "products": [...], ...}}``
        :return: ``{"purchase": {...}}``
        """
        path = "/purchases"
        return self._expect_object(
            await self._api.post(path, body=self._encode(params)), path
        )

    async def get(self, purchase_id: int) -> Optional[Dict[str, Any]]:
        path = f"/purchases/{purchase_id}"
        return self._optional_object(await self._api.get(path), path)
