"""Energomonitor API client.

Python client for the Energomonitor REST API: users, feeds, streams, stream
data and notifications, authenticated with an access token.

Exports:
    EnergomonitorClient: Session holding the token and the HTTP transport.
    NotAuthorizedError: Raised when a method is called without a token.
    NOT_AUTHORIZED_MESSAGE: Message carried by NotAuthorizedError.
    Resource: Pydantic model for authorization resources.
    DEFAULT_API_URL: Default Energomonitor API URL.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
"""

from .client import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    NOT_AUTHORIZED_MESSAGE,
    EnergomonitorClient,
    NotAuthorizedError,
)
from .types import Resource

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "NOT_AUTHORIZED_MESSAGE",
    "EnergomonitorClient",
    "NotAuthorizedError",
    "Resource",
]
