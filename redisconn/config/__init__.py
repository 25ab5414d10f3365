"""Configuration management for the Redis connector."""

from redisconn.config.loader import load_config
from redisconn.config.logging import configure_logging
from redisconn.config.models import (
    ClusterClientOptions,
    ConnectionPoolConfig,
    ConnectorOptions,
    EndpointConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "configure_logging",
    "EndpointConfig",
    "ConnectorOptions",
    "ConnectionPoolConfig",
    "ClusterClientOptions",
    "LoggingConfig",
]
