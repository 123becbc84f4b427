"""Email template endpoints."""

from typing import Any, Dict, Optional

from ..utils.query import build_query
from .base import ResourceHandler


class EmailTemplatesHandler(ResourceHandler):
    resource_name = "email template"

    async def list(
        self,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
        include_total_count: Optional[bool] = None,
        per_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Return a page of the account's email templates."""
        query = build_query(
            after=after,
            before=before,
            include_total_count=include_total_count,
            per_page=per_page,
        )
        path = "/email_templates"
        return self._expect_object(await self._api.get(path, query=query), path)
