"""Conversion of method arguments into query parameters and request bodies.

Optional arguments that were not given are left out of the wire payload
entirely. Dates are sent either as Unix timestamps or as ISO 8601 strings,
depending on the endpoint.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

import httpx


def sparse_mapping(*fields: tuple[Any, ...]) -> dict[str, Any]:
    """Build a dict from ``(key, value)`` or ``(key, value, transform)`` tuples.

    Fields whose value is ``None`` are skipped, so an unset argument leaves no
    key behind. When a transform is given it is applied to the value before
    it is stored.

    Args:
        *fields: Tuples of wire key, value and optional transform callable.

    Returns:
        Dictionary containing only the fields that were set.
    """
    result: dict[str, Any] = {}
    for key, value, *rest in fields:
        if value is None:
            continue
        transform: Callable[[Any], Any] | None = rest[0] if rest else None
        result[key] = transform(value) if transform is not None else value
    return result


def _as_utc(date: datetime) -> datetime:
    # Naive datetimes are interpreted as UTC
    if date.tzinfo is None:
        return date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc)


def date_to_timestamp(date: datetime) -> int:
    """Convert a datetime to a Unix timestamp rounded to the nearest second."""
    return math.floor(_as_utc(date).timestamp() + 0.5)


def date_to_iso8601(date: datetime) -> str:
    """Convert a datetime to ISO 8601 in UTC, e.g. ``2017-04-22T16:30:00.000Z``."""
    return _as_utc(date).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def encode_query(params: Mapping[str, Any]) -> httpx.QueryParams:
    """Encode query parameters, repeating the key for every item of a collection.

    The API accepts some parameters multiple times, so ``{"channel": [1, 2]}``
    must become ``channel=1&channel=2`` rather than a bracketed or
    comma-joined value.

    Args:
        params: Mapping of parameter names to scalars or iterables of scalars.
            Strings and bytes count as scalars.

    Returns:
        Ordered query parameters ready to be passed to httpx.
    """
    items: list[tuple[str, Any]] = []
    for key, value in params.items():
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            items.extend((key, item) for item in value)
        else:
            items.append((key, value))
    return httpx.QueryParams(items)
