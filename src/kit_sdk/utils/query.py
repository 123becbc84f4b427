"""Query string assembly for resource handlers."""

from datetime import date
from typing import Any, List, Tuple

from .dates import to_date_string

QueryPairs = List[Tuple[str, str]]


def _serialize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return to_date_string(value)
    return str(value)


def build_query(**params: Any) -> QueryPairs:
    """Build an ordered list of query pairs, skipping empty filters.

    Values that are falsy (``None``, ``""``, ``False``, ``0``) are left
    out, matching how the API treats absent filters. Booleans become
    ``true``, dates are normalized with :func:`to_date_string` and list
    values repeat the key once per item.

    :param params: Filter names and values, in the order they should appear
    :return: List of ``(key, value)`` string pairs
    :rtype: List[Tuple[str, str]]
    """
    pairs: QueryPairs = []
    for key, value in params.items():
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _serialize(item)) for item in value)
        else:
            pairs.append((key, _serialize(value)))
    return pairs
