"""Shared Pydantic models for Kit API responses.

The request engine returns untyped JSON. Handlers and callers use the
models here to read the envelopes that many endpoints share.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ..exceptions import UnexpectedResponseError


class Pagination(BaseModel):
    """Cursor pagination block returned by every list endpoint.

    Pass ``end_cursor`` back as ``after`` (or ``start_cursor`` as
    ``before``) to fetch the neighbouring page.

    :param has_previous_page: Whether a page exists before this one
    :type has_previous_page: bool
    :param has_next_page: Whether a page exists after this one
    :type has_next_page: bool
    :param start_cursor: Cursor of the first item on this page
    :type start_cursor: Optional[str]
    :param end_cursor: Cursor of the last item on this page
    :type end_cursor: Optional[str]
    :param per_page: Page size used for this page
    :type per_page: int
    :param total_count: Present when ``include_total_count`` was requested
    :type total_count: Optional[int]
    """

    model_config = ConfigDict(extra="allow")

    has_previous_page: bool
    has_next_page: bool
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None
    per_page: int
    total_count: Optional[int] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Pagination":
        """Read the ``pagination`` block from a list response.

        :param payload: Decoded list response
        :type payload: Mapping[str, Any]
        :return: Parsed pagination
        :rtype: Pagination
        :raises UnexpectedResponseError: If the block is missing
        """
        block = payload.get("pagination") if isinstance(payload, Mapping) else None
        if not isinstance(block, Mapping):
            raise UnexpectedResponseError("Response has no pagination block")
        return cls.model_validate(block)


class BulkOperationType(str, Enum):
    """How the API processed a bulk request.

    Small batches are processed inline and the response carries the
    results. Large batches are queued and the response is empty; the
    outcome is delivered to the request's ``callback_url``.
    """

    SYNCHRONOUS = "synchronous"
    ASYNCHRONOUS = "asynchronous"


def with_bulk_type(payload: Mapping[str, Any], result_key: str) -> Dict[str, Any]:
    """Tag a bulk response with how it was processed.

    The type is inferred from the response shape alone: if the key that
    only synchronous responses carry is present, the operation ran
    inline.

    :param payload: Decoded bulk response
    :type payload: Mapping[str, Any]
    :param result_key: Key present only in synchronous responses
    :type result_key: str
    :return: Copy of the payload with a ``type`` entry
    :rtype: Dict[str, Any]
    """
    bulk_type = (
        BulkOperationType.SYNCHRONOUS
        if result_key in payload
        else BulkOperationType.ASYNCHRONOUS
    )
    return {"type": bulk_type.value, **payload}
