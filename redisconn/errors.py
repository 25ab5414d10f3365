"""Exceptions raised by the Redis connector.

All library errors share :class:`RedisConnectorError` so callers can catch
connector failures without reaching into redis-py's exception module.
"""

MUST_NOT_BE_NULL = "must not be null"


class RedisConnectorError(Exception):
    """Base error type for all connector exceptions."""


class BadArgumentError(RedisConnectorError, ValueError):
    """Raised when a required command argument is null or empty.

    The message names the argument class, e.g. ``"Key must not be null"``.
    """

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} {MUST_NOT_BE_NULL}")
        self.argument = argument


class UnsupportedCodecError(RedisConnectorError, ValueError):
    """Raised when a codec name is not one of the supported codecs."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Unsupported Codec: {name}")
        self.name = name


class ConfigurationError(RedisConnectorError, ValueError):
    """Raised when hosts, options or a config file cannot be used."""


class AlreadyInitializedError(RedisConnectorError):
    """Raised when ``init`` is called on a data source a second time."""


class NotInitializedError(RedisConnectorError):
    """Raised when commands are requested before the data source is initialized."""


class DataSourceClosedError(RedisConnectorError):
    """Raised when a closed data source is asked for a command handle."""


class PoolExhaustedError(RedisConnectorError):
    """Raised when no pooled handle became available within the wait limit."""


class PoolClosedError(RedisConnectorError):
    """Raised when borrowing from a pool that has been closed."""


class ConnectionFailedError(RedisConnectorError):
    """Raised when the transport to Redis fails or times out.

    The underlying redis-py exception is chained as ``__cause__``.
    """


class ServerError(RedisConnectorError):
    """Raised when Redis answers with an error reply.

    Covers ``WRONGTYPE``, redirections the client could not follow and
    authentication failures.
    """
