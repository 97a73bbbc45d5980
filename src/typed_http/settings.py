"""Client settings read from environment variables.

Variables use the ``TYPED_HTTP_`` prefix by default:

    TYPED_HTTP_BASE_URL      Base URL for every request
    TYPED_HTTP_CREDENTIALS   omit, same-origin or include
    TYPED_HTTP_HEADERS       Comma-separated Name:Value items
    TYPED_HTTP_QUERY         Comma-separated key=value items
    TYPED_HTTP_LOG_LEVEL     loguru level name (default: WARNING)

Example:
    >>> settings = ClientSettings.from_env()
    >>> async with settings.create_client() as client:
    ...     result = await client.get(path="/health")
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .client import APIClient
from .errors import ConfigurationError
from .log import check_level
from .types import Credentials, DefaultOptions, Transport

DEFAULT_PREFIX = "TYPED_HTTP_"


def parse_header(item: str, key: str | None = None) -> tuple[str, str]:
    """Parse "Name:Value" into a header pair."""
    name, sep, value = item.partition(":")
    if not sep or not name.strip():
        raise ConfigurationError(f"Expected Name:Value header, got {item!r}", key=key)
    return name.strip(), value.strip()


def parse_query_item(item: str, key: str | None = None) -> tuple[str, str]:
    """Parse "key=value" into a query pair."""
    name, sep, value = item.partition("=")
    if not sep or not name.strip():
        raise ConfigurationError(f"Expected key=value query item, got {item!r}", key=key)
    return name.strip(), value.strip()


def _split_items(value: str) -> Iterable[str]:
    return (item for item in value.split(",") if item.strip())


class ClientSettings(BaseModel):
    """Settings for building an :class:`~typed_http.client.APIClient`.

    Attributes:
        base_url: Base URL for every request (default: "")
        credentials: Default credentials mode
        headers: Default headers, in order
        query: Default query parameters, in order
        log_level: Log level for the command line tool
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    credentials: Optional[Credentials] = None
    headers: tuple[tuple[str, str], ...] = ()
    query: dict[str, Any] = {}
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        return check_level(value)

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, environ: Mapping[str, str] | None = None
    ) -> ClientSettings:
        """Load settings from environment variables.

        Args:
            prefix: Prefix for environment variables
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ConfigurationError: If a variable is malformed
        """
        environ = os.environ if environ is None else environ
        prefix = prefix.upper()
        values: dict[str, Any] = {}

        if f"{prefix}BASE_URL" in environ:
            values["base_url"] = environ[f"{prefix}BASE_URL"]

        if environ.get(f"{prefix}CREDENTIALS"):
            values["credentials"] = environ[f"{prefix}CREDENTIALS"].strip().lower()

        headers_key = f"{prefix}HEADERS"
        if environ.get(headers_key):
            values["headers"] = tuple(
                parse_header(item, key=headers_key) for item in _split_items(environ[headers_key])
            )

        query_key = f"{prefix}QUERY"
        if environ.get(query_key):
            values["query"] = dict(
                parse_query_item(item, key=query_key) for item in _split_items(environ[query_key])
            )

        if environ.get(f"{prefix}LOG_LEVEL"):
            values["log_level"] = environ[f"{prefix}LOG_LEVEL"].strip().upper()

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client settings: {e}") from e

    def to_default_options(self) -> DefaultOptions:
        """Build the default options these settings describe."""
        return DefaultOptions(
            headers=self.headers,
            query=self.query or None,
            credentials=self.credentials,
        )

    def create_client(self, transport: Transport | None = None) -> APIClient:
        """Create a client from these settings."""
        return APIClient(self.base_url, self.to_default_options(), transport=transport)
