"""Validated configuration for building an Energomonitor client."""

import pydantic
import structlog

from .client import DEFAULT_API_URL, DEFAULT_TIMEOUT, EnergomonitorClient

logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for an Energomonitor API client."""

    api_url: str = pydantic.Field(
        DEFAULT_API_URL,
        description="Energomonitor API URL",
        min_length=1,
    )
    token: str | None = pydantic.Field(
        None,
        description="Access token generated earlier, if any",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )


def create_client(config: ClientConfig) -> EnergomonitorClient:
    """Construct a client from validated config."""
    client = EnergomonitorClient(
        token=config.token,
        api_url=config.api_url,
        timeout=config.timeout,
    )
    logger.debug(
        "Created Energomonitor client",
        api_url=config.api_url,
        has_token=config.token is not None,
    )
    return client
