"""Date normalization for query strings and request bodies."""

from datetime import date, datetime, timezone
from typing import Union

DateLike = Union[datetime, date, str]


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to already be in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_date_string(value: DateLike) -> str:
    """Convert a date into an ISO 8601 string the API accepts.

    Datetimes are rendered in UTC with millisecond precision and a ``Z``
    suffix (``2024-01-31T09:30:00.000Z``). Plain dates render as
    ``YYYY-MM-DD``. Strings are passed through untouched so callers can
    send values they formatted themselves.

    :param value: Datetime, date or pre-formatted string
    :type value: Union[datetime, date, str]
    :return: ISO 8601 representation
    :rtype: str
    """
    if isinstance(value, datetime):
        utc = _as_utc(value)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_date_only(value: DateLike) -> str:
    """Convert a date into ``YYYY-MM-DD``.

    :param value: Datetime, date or pre-formatted string
    :type value: Union[datetime, date, str]
    :return: Calendar date; datetimes use their UTC date
    :rtype: str
    """
    if isinstance(value, datetime):
        return _as_utc(value).date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value
