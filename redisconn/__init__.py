"""Redis connector with single-node and cluster support and optional pooling."""

from redisconn.connector import RedisConnector, close, init_client, ping
from redisconn.datasource import CommandFamily, DataSource, DataSourceState, HandlePool
from redisconn.errors import (
    AlreadyInitializedError,
    BadArgumentError,
    ConfigurationError,
    ConnectionFailedError,
    DataSourceClosedError,
    NotInitializedError,
    PoolClosedError,
    PoolExhaustedError,
    RedisConnectorError,
    ServerError,
    UnsupportedCodecError,
)
from redisconn.redis.codec import Codec, CodecName, resolve_codec

__version__ = "0.1.0"

__all__ = [
    "AlreadyInitializedError",
    "BadArgumentError",
    "Codec",
    "CodecName",
    "CommandFamily",
    "ConfigurationError",
    "ConnectionFailedError",
    "DataSource",
    "DataSourceClosedError",
    "DataSourceState",
    "HandlePool",
    "NotInitializedError",
    "PoolClosedError",
    "PoolExhaustedError",
    "RedisConnector",
    "RedisConnectorError",
    "ServerError",
    "UnsupportedCodecError",
    "close",
    "init_client",
    "ping",
    "resolve_codec",
]
