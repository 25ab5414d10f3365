"""Connector facade and the stable ``init_client`` / ``ping`` / ``close`` API."""

from collections.abc import Mapping
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from redisconn.commands import (
    ConnectionCommands,
    HashCommands,
    KeyCommands,
    ListCommands,
    SetCommands,
    SortedSetCommands,
    StringCommands,
)
from redisconn.config.models import EndpointConfig
from redisconn.datasource.source import DataSource
from redisconn.errors import ConfigurationError
from redisconn.redis.client import RedisClientFactory
from redisconn.redis.codec import resolve_codec


class RedisConnector(
    StringCommands,
    ListCommands,
    SetCommands,
    SortedSetCommands,
    HashCommands,
    KeyCommands,
    ConnectionCommands,
):
    """Every supported Redis command over one :class:`DataSource`.

    Safe to share between threads. Use as a context manager to close the
    data source on exit::

        with init_client({"host": "localhost:6379"}) as redis:
            redis.set("greeting", "hello")
    """

    def __init__(self, data_source: DataSource) -> None:
        super().__init__(data_source)

    def close(self) -> None:
        """Close the underlying data source."""
        self._data_source.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "RedisConnector":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def init_client(
    config: EndpointConfig | Mapping[str, Any],
    client_factory_class: type[RedisClientFactory] = RedisClientFactory,
) -> RedisConnector:
    """Create and initialize a connector for an endpoint.

    Args:
        config: Endpoint config, or a mapping with ``host``, ``password``,
            ``codec`` and ``options``.
        client_factory_class: Factory used to build redis-py clients.

    Returns:
        Initialized connector.

    Raises:
        ConfigurationError: If the config is invalid.
        UnsupportedCodecError: If the codec name is not supported.
    """
    if not isinstance(config, EndpointConfig):
        config = _endpoint_from_mapping(config)

    options = config.options
    data_source = DataSource(
        resolve_codec(config.codec),
        options.clustering_enabled,
        options.pooling_enabled,
        client_factory_class=client_factory_class,
    )
    data_source.init(config.host, config.password, options)
    return RedisConnector(data_source)


def _endpoint_from_mapping(config: Mapping[str, Any]) -> EndpointConfig:
    data = dict(config)
    if "codec" in data:
        # Unknown codec names get the dedicated error, not a validation error.
        data["codec"] = resolve_codec(data["codec"]).name
    try:
        return EndpointConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def ping(handle: RedisConnector) -> str:
    """Ping the endpoint behind ``handle``; returns ``"PONG"``."""
    return handle.ping()


def close(handle: RedisConnector) -> None:
    """Close the connector ``handle``."""
    handle.close()
