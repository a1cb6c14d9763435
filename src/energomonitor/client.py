"""Energomonitor API client.

Provides a session object holding the access token and the HTTP transport,
with one method per API endpoint. Every method except
:meth:`EnergomonitorClient.authorize` requires a token and fails locally,
without touching the network, when none is set.
"""

import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any, TypeVar

import httpx
import structlog

from . import endpoints
from .params import date_to_iso8601, date_to_timestamp, encode_query, sparse_mapping
from .types import Resource

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.energomonitor.com/v1"

DEFAULT_TIMEOUT = 30.0

NOT_AUTHORIZED_MESSAGE = (
    "Cannot call this method without setting the authorization token "
    "(in the constructor or using the authorize method)."
)

T = TypeVar("T")


class NotAuthorizedError(Exception):
    """Raised when an API method is called before a token is set."""

    def __init__(self, msg: str = NOT_AUTHORIZED_MESSAGE):
        super().__init__(msg)


def build_authorized_headers(token: str) -> dict[str, str]:
    """Build request headers carrying the bearer token."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


def authorized_request(token: str | None, func: Callable[[], T]) -> T:
    """Run ``func`` only when a token is set.

    Args:
        token: The current access token, or None if none was set.
        func: Zero-argument callable performing the request.

    Returns:
        Whatever ``func`` returns.

    Raises:
        NotAuthorizedError: If ``token`` is None. ``func`` is not called.
    """
    if token is None:
        raise NotAuthorizedError
    return func()


class EnergomonitorClient:
    """Interaction session with the Energomonitor API.

    Holds the access token and a single httpx.Client used for all requests.
    The token is either passed to the constructor or obtained with
    :meth:`authorize`, after which it is used by every other method.

    Can be used as a context manager; a transport created by the client is
    closed on exit, a transport passed in by the caller is left open.
    """

    def __init__(
        self,
        token: str | None = None,
        transport: httpx.Client | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            token: Access token generated earlier. When omitted, call
                :meth:`authorize` before any other method.
            transport: Custom httpx.Client for handling HTTP requests. When
                omitted, the client creates its own instance.
            api_url: Energomonitor API URL. Always set as the transport's
                base URL, even for a custom transport.
            timeout: Request timeout in seconds for a transport created by
                the client (default: 30.0).

        Raises:
            ValueError: If api_url is empty or timeout is not positive.
        """
        if not api_url:
            msg = "api_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.api_url = api_url
        self._set_token(token)

        self._owns_transport = transport is None
        if transport is None:
            transport = httpx.Client(base_url=api_url, timeout=timeout)
        else:
            transport.base_url = api_url
        self._transport = transport

    def _set_token(self, token: str | None) -> None:
        self._token = token
        self._authorized_headers = (
            build_authorized_headers(token) if token is not None else None
        )

    @property
    def authorized_headers(self) -> dict[str, str] | None:
        """Headers sent with authorized requests, or None without a token."""
        return self._authorized_headers

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self) -> None:
        """Close the transport if it was created by this client."""
        if self._owns_transport and not self._transport.is_closed:
            self._transport.close()

    def get_transport(self) -> httpx.Client:
        """Return the httpx.Client used by this client."""
        return self._transport

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and fail on a non-2xx response.

        Args:
            method: HTTP method.
            endpoint: API endpoint path (e.g., "/feeds/abc").
            params: Optional query parameters; lists are sent as repeated keys.
            **kwargs: Passed through to httpx.Client.request.

        Returns:
            The successful response.

        Raises:
            httpx.HTTPError: If the request fails or returns a non-2xx status.
        """
        start_time = time.time()
        params = params or {}

        try:
            logger.debug(
                "Making API request",
                method=method,
                endpoint=endpoint,
                params=params,
            )
            response = self._transport.request(
                method,
                endpoint,
                params=encode_query(params),
                **kwargs,
            )
            response.raise_for_status()
            duration = time.time() - start_time
            logger.debug(
                "API request completed",
                status_code=response.status_code,
                duration_seconds=round(duration, 3),
            )
            return response  # noqa: TRY300

        except httpx.HTTPError:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=method,
                endpoint=endpoint,
                duration_seconds=round(duration, 3),
            )
            raise

    def _get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        headers = self._authorized_headers
        return authorized_request(
            self._token,
            lambda: _decode(
                self._make_request("GET", endpoint, params=params, headers=headers)
            ),
        )

    def _patch(self, endpoint: str, data: Any) -> httpx.Response:
        headers = self._authorized_headers
        return authorized_request(
            self._token,
            lambda: self._make_request("PATCH", endpoint, json=data, headers=headers),
        )

    def authorize(
        self,
        username: str,
        password: str,
        note: str | None = None,
        resources: Sequence[Resource | Mapping[str, Any]] | None = None,
        valid_minutes: int | None = None,
    ) -> dict[str, Any]:
        """Create a new authorization for a user.

        The returned token is stored in the client and used by all other
        methods from then on.

        Args:
            username: Username used for HTTP Basic authentication.
            password: Password used for HTTP Basic authentication.
            note: User note for the created authorization.
            resources: Resources associated with the authorization. Default:
                all resources the user is authorized to access.
            valid_minutes: How long from now the authorization is valid.

        Returns:
            The authorization object, containing the ``token``.

        Raises:
            httpx.HTTPError: If the request fails.
        """
        data = sparse_mapping(
            ("note", note),
            ("resources", resources, _dump_resources),
            ("valid_minutes", valid_minutes),
        )
        response = self._make_request(
            "POST",
            endpoints.authorizations(),
            json=data,
            auth=(username, password),
        )
        authorization = response.json()
        self._set_token(authorization["token"])
        logger.info("Authorization created", valid_minutes=valid_minutes)
        return authorization

    def get_user(self, user_id: str) -> dict[str, Any]:
        """Retrieve a single user."""
        return self._get(endpoints.user(user_id))

    def get_feeds(self, user_id: str) -> list[dict[str, Any]]:
        """Retrieve a list of all user's feeds."""
        return self._get(endpoints.feeds(user_id))

    def get_feed(self, feed_id: str) -> dict[str, Any]:
        """Retrieve a single feed."""
        return self._get(endpoints.feed(feed_id))

    def get_streams(
        self,
        feed_id: str,
        types: str | Iterable[str] | None = None,
        channels: int | Iterable[int] | None = None,
        data_time_from: datetime | None = None,
        data_time_to: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Retrieve a list of streams belonging to a feed.

        Args:
            feed_id: Retrieve streams belonging to a feed with this ID.
            types: Only list streams of this type or types.
            channels: Only list streams with this channel or channels.
            data_time_from: Only list streams with data points measured at or
                after this time.
            data_time_to: Only list streams with data points measured at or
                before this time.

        Returns:
            List of stream objects.
        """
        params = sparse_mapping(
            ("type", types),
            ("channel", channels),
            ("data_time_from", data_time_from, date_to_timestamp),
            ("data_time_to", data_time_to, date_to_timestamp),
        )
        return self._get(endpoints.streams(feed_id), params)

    def get_stream(self, feed_id: str, stream_id: str) -> dict[str, Any]:
        """Retrieve a single stream."""
        return self._get(endpoints.stream(feed_id, stream_id))

    def get_stream_data(
        self,
        feed_id: str,
        stream_id: str,
        time_from: datetime | None = None,
        time_to: datetime | None = None,
        limit: int | None = None,
    ) -> list[list[int | float]]:
        """Retrieve a list of a stream's data points.

        Args:
            feed_id: ID of the feed the stream belongs to.
            stream_id: Retrieve data of a stream with this ID.
            time_from: Only list data points measured at or after this time.
            time_to: Only list data points measured at or before this time.
            limit: Maximum number of returned data points. When more points
                match, the newest ones are returned.

        Returns:
            List of ``[unix_timestamp, value]`` pairs.
        """
        params = sparse_mapping(
            ("limit", limit),
            ("time_from", time_from, date_to_timestamp),
            ("time_to", time_to, date_to_timestamp),
        )
        return self._get(endpoints.stream_data(feed_id, stream_id), params)

    def get_related_streams(self, feed_id: str) -> list[list[str]]:
        """Retrieve groups of related stream IDs of a feed."""
        return self._get(endpoints.related_streams(feed_id))

    def get_notifications(
        self,
        user_id: str,
        created_at_from: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Retrieve a list of user's notifications.

        Unlike the stream endpoints, ``created_at_from`` is sent as an
        ISO 8601 string rather than a Unix timestamp.
        """
        params = sparse_mapping(
            ("created_at_from", created_at_from, date_to_iso8601),
        )
        return self._get(endpoints.notifications(user_id), params)

    def get_notification(self, user_id: str, notification_id: str) -> dict[str, Any]:
        """Retrieve a single notification."""
        return self._get(endpoints.notification(user_id, notification_id))

    def update_notifications(
        self,
        user_id: str,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """Modify user's notifications, e.g. ``{"read": True}``.

        The response body is discarded.
        """
        self._patch(endpoints.notifications(user_id), data)

    def update_notification(
        self,
        user_id: str,
        notification_id: str,
        data: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Modify a single notification, e.g. ``{"read": True, "archived": False}``.

        Returns:
            The modified notification object.
        """
        response = self._patch(endpoints.notification(user_id, notification_id), data)
        return _decode(response)

    def get_notification_count(self, user_id: str) -> dict[str, int]:
        """Retrieve the ``read``, ``unread`` and ``total`` notification counts."""
        return self._get(endpoints.notification_count(user_id))


def _dump_resources(
    resources: Sequence[Resource | Mapping[str, Any]],
) -> list[dict[str, Any]]:
    return [
        resource.model_dump() if isinstance(resource, Resource) else dict(resource)
        for resource in resources
    ]


def _decode(response: httpx.Response) -> Any:
    # Empty 2xx bodies (e.g. 204 No Content) decode to None
    return response.json() if response.content else None
