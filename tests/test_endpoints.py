"""Tests for endpoint path resolution."""

import pytest

from energomonitor import endpoints


@pytest.mark.parametrize(
    ("resolve", "args", "expected"),
    [
        (endpoints.authorizations, (), "/authorizations"),
        (endpoints.user, ("abc",), "/users/abc"),
        (endpoints.feeds, ("abc",), "/users/abc/feeds"),
        (endpoints.feed, ("f1",), "/feeds/f1"),
        (endpoints.streams, ("f1",), "/feeds/f1/streams"),
        (endpoints.stream, ("f1", "s1"), "/feeds/f1/streams/s1"),
        (endpoints.stream_data, ("f1", "s1"), "/feeds/f1/streams/s1/data"),
        (endpoints.related_streams, ("f1",), "/feeds/f1/related_streams"),
        (endpoints.notifications, ("abc",), "/users/abc/notifications"),
        (endpoints.notification, ("abc", "n1"), "/users/abc/notifications/n1"),
        (endpoints.notification_count, ("abc",), "/users/abc/notification_count"),
    ],
)
def test_endpoint_paths(resolve, args, expected):
    """Each resolver fills its template with the given identifiers."""
    assert resolve(*args) == expected


def test_identifiers_are_not_validated():
    """Any value is interpolated as-is, including non-strings."""
    assert endpoints.stream(200242, None) == "/feeds/200242/streams/None"
