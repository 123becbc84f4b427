"""Base class for Kit resource handlers.

A handler maps one API resource's operations onto the request engine:
it builds the path and query, JSON-encodes the body, and checks that
the decoded payload is the JSON object the endpoint documents. It owns
no retry, timing or error-translation logic.
"""

import json
from typing import Any, Dict, Mapping, Optional

from ..exceptions import UnexpectedResponseError, ValidationError
from ..utils.http import ApiClient


class ResourceHandler:
    """Common plumbing for resource handlers.

    :param api: Request engine shared by all handlers of a client
    :type api: ApiClient
    """

    resource_name = "resource"

    def __init__(self, api: ApiClient):
        self._api = api

    @staticmethod
    def _encode(body: Mapping[str, Any]) -> str:
        return json.dumps(dict(body))

    def _require_id(self, value: Any, name: str = "id") -> int:
        if not value:
            raise ValidationError(
                f"Please provide a valid {self.resource_name} {name}",
                field=name,
                value=value,
            )
        return value

    @staticmethod
    def _expect_object(payload: Any, path: str) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise UnexpectedResponseError(
                f"Expected a JSON object from {path}, got {type(payload).__name__}",
                path=path,
            )
        return payload

    @classmethod
    def _optional_object(cls, payload: Any, path: str) -> Optional[Dict[str, Any]]:
        # None is the engine's signal for a 404.
        if payload is None:
            return None
        return cls._expect_object(payload, path)
