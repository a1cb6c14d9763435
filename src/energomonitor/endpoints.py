"""Endpoint paths of the Energomonitor API.

Each function maps resource identifiers to a path relative to the API base
URL. Identifiers are interpolated as given, e.g. ``feeds("abc")`` returns
``"/users/abc/feeds"``.
"""

from typing import Any


def authorizations() -> str:
    return "/authorizations"


def user(user_id: Any) -> str:
    return f"/users/{user_id}"


def feeds(user_id: Any) -> str:
    return f"/users/{user_id}/feeds"


def feed(feed_id: Any) -> str:
    return f"/feeds/{feed_id}"


def streams(feed_id: Any) -> str:
    return f"/feeds/{feed_id}/streams"


def stream(feed_id: Any, stream_id: Any) -> str:
    return f"/feeds/{feed_id}/streams/{stream_id}"


def stream_data(feed_id: Any, stream_id: Any) -> str:
    return f"/feeds/{feed_id}/streams/{stream_id}/data"


def related_streams(feed_id: Any) -> str:
    return f"/feeds/{feed_id}/related_streams"


def notifications(user_id: Any) -> str:
    return f"/users/{user_id}/notifications"


def notification(user_id: Any, notification_id: Any) -> str:
    return f"/users/{user_id}/notifications/{notification_id}"


def notification_count(user_id: Any) -> str:
    return f"/users/{user_id}/notification_count"
