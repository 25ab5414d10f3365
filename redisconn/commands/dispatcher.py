"""Shared dispatch skeleton for every Redis command wrapper.

Each command borrows a handle from the data source, validates its arguments,
invokes the redis-py primitive, converts the reply and releases the handle on
every exit path. Wrappers differ only in the primitive, the converter and the
argument classes they check.
"""

from collections.abc import Mapping
from typing import Any, Callable, Protocol, TypeVar

import structlog
from redis import exceptions as redis_errors

from redisconn.datasource.source import CommandFamily
from redisconn.errors import (
    BadArgumentError,
    ConnectionFailedError,
    RedisConnectorError,
    ServerError,
)

logger = structlog.get_logger()

R = TypeVar("R")

KeyT = str | bytes
FieldT = str | bytes
EncodableT = str | bytes | int | float

# Argument classes named in "<class> must not be null" messages.
KEY = "Key"
KEYS = "Key(s)"
ARGUMENTS = "Arguments"
MEMBERS = "Members"
KEY_FIELD = "Key/field"
KEY_FIELDS = "Key/field(s)"
PASSWORD = "Password"
DESTINATION_SOURCE_KEYS = "Destination key/source key(s)"

STRING = CommandFamily.STRING
LIST = CommandFamily.LIST
SET = CommandFamily.SET
SORTED_SET = CommandFamily.SORTED_SET
HASH = CommandFamily.HASH
KEY_FAMILY = CommandFamily.KEY
CONNECTION = CommandFamily.CONNECTION

Check = tuple[str, Any]


class CommandSource(Protocol):
    """What the dispatcher needs from a data source."""

    client_timeout: int

    def lease(self, family: CommandFamily = ..., blocking: bool = ...) -> Any: ...


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, int, float)):
        return False
    if isinstance(value, Mapping):
        if not value:
            return True
        return any(k is None or v is None for k, v in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return not value or any(item is None for item in value)
    return False


def validate(checks: tuple[Check, ...]) -> None:
    """Raise :class:`BadArgumentError` for the first null or empty argument.

    Args:
        checks: ``(argument class, value)`` pairs in declaration order.
    """
    for argument, value in checks:
        if _is_missing(value):
            raise BadArgumentError(argument)


class CommandDispatcher:
    """Base for command families; owns the data source reference."""

    def __init__(self, data_source: CommandSource) -> None:
        """Initialize dispatcher.

        Args:
            data_source: Source of command handles.
        """
        self._data_source = data_source

    @property
    def data_source(self) -> CommandSource:
        """The data source commands are dispatched to."""
        return self._data_source

    def _execute(
        self,
        command: str,
        family: CommandFamily,
        invoke: Callable[[Any], Any],
        *checks: Check,
        convert: Callable[[Any], R] | None = None,
        blocking: bool = False,
    ) -> Any:
        """Run one command on a leased handle.

        Args:
            command: Redis command name, used in error messages.
            family: Command family of the handle.
            invoke: Calls the redis-py primitive on the handle.
            *checks: Arguments that must not be null or empty.
            convert: Maps the reply to the host-facing value.
            blocking: Whether the command blocks server-side.

        Returns:
            The converted reply.

        Raises:
            BadArgumentError: If a checked argument is null or empty, or
                redis-py rejects an argument.
            ServerError: If Redis replies with an error.
            ConnectionFailedError: If the connection fails or times out.
        """
        try:
            with self._data_source.lease(family, blocking=blocking) as commands:
                validate(checks)
                try:
                    result = invoke(commands)
                except redis_errors.DataError as e:
                    argument = checks[0][0] if checks else ARGUMENTS
                    logger.debug("command_argument_rejected", command=command, error=str(e))
                    raise BadArgumentError(argument) from e
                return result if convert is None else convert(result)
        except (redis_errors.ResponseError, redis_errors.AuthenticationError) as e:
            raise ServerError(f"{command} failed: {e}") from e
        except (redis_errors.ConnectionError, redis_errors.TimeoutError) as e:
            raise ConnectionFailedError(f"{command} failed: {e}") from e
        except (redis_errors.RedisError, redis_errors.RedisClusterException) as e:
            raise RedisConnectorError(f"{command} failed: {e}") from e
