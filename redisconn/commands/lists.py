"""List commands."""

from collections.abc import Sequence
from typing import Any

from redisconn.commands.conversions import as_args, pop_to_mapping, to_int, to_list, to_status
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    KEY,
    KEYS,
    LIST,
    CommandDispatcher,
    EncodableT,
    KeyT,
)
from redisconn.errors import BadArgumentError, ConfigurationError


class ListCommands(CommandDispatcher):
    """LPUSH, LRANGE, the blocking pops and the rest of the list family.

    BLPOP, BRPOP and BRPOPLPUSH hold their handle until an element arrives or
    the timeout expires. With pooling enabled that ties up one pooled handle;
    on a shared client it is logged as a warning.

    The blocking timeout must be positive and shorter than ``clientTimeout``:
    the socket read timeout also bounds how long a blocked reply may take.
    """

    def _blocking_timeout(self, command: str, timeout: float | None) -> float:
        if timeout is None:
            raise BadArgumentError(ARGUMENTS)
        limit = self._data_source.client_timeout / 1000.0
        if not 0 < timeout < limit:
            raise ConfigurationError(
                f"{command} timeout must be greater than 0 and below {limit:g} seconds; "
                "blocking reads are bounded by clientTimeout"
            )
        return timeout

    def lpush(self, key: KeyT, values: Sequence[EncodableT]) -> int:
        """Prepend ``values`` to the list and return its new length."""
        return self._execute(
            "LPUSH",
            LIST,
            lambda c: c.lpush(key, *as_args(values)),
            (KEY, key),
            (ARGUMENTS, values),
            convert=to_int,
        )

    def lpop(self, key: KeyT) -> Any:
        """Remove and return the first element, or None for an empty list."""
        return self._execute("LPOP", LIST, lambda c: c.lpop(key), (KEY, key))

    def lpushx(self, key: KeyT, values: Sequence[EncodableT]) -> int:
        """Prepend only if the list exists; returns the length (0 if it did not)."""
        return self._execute(
            "LPUSHX",
            LIST,
            lambda c: c.lpushx(key, *as_args(values)),
            (ARGUMENTS, key),
            (ARGUMENTS, values),
            convert=to_int,
        )

    def blpop(self, timeout: int, keys: Sequence[KeyT]) -> dict[Any, Any] | None:
        """Blocking pop from the head of the first non-empty list.

        Args:
            timeout: Seconds to wait, greater than 0 and below
                ``clientTimeout``.
            keys: Lists to pop from, checked in order.

        Returns:
            ``{key: value}`` for the popped element, or None on timeout.

        Raises:
            ConfigurationError: If ``timeout`` is outside the allowed range.
        """
        return self._execute(
            "BLPOP",
            LIST,
            lambda c: c.blpop(as_args(keys), timeout=self._blocking_timeout("BLPOP", timeout)),
            (KEYS, keys),
            convert=pop_to_mapping,
            blocking=True,
        )

    def brpop(self, timeout: int, keys: Sequence[KeyT]) -> dict[Any, Any] | None:
        """Blocking pop from the tail; see :meth:`blpop`."""
        return self._execute(
            "BRPOP",
            LIST,
            lambda c: c.brpop(as_args(keys), timeout=self._blocking_timeout("BRPOP", timeout)),
            (ARGUMENTS, keys),
            convert=pop_to_mapping,
            blocking=True,
        )

    def brpoplpush(self, source: KeyT, destination: KeyT, timeout: int) -> Any:
        """Blocking RPOPLPUSH; returns the moved element or None on timeout.

        ``timeout`` is bounded as for :meth:`blpop`.
        """
        return self._execute(
            "BRPOPLPUSH",
            LIST,
            lambda c: c.brpoplpush(
                source, destination, timeout=self._blocking_timeout("BRPOPLPUSH", timeout)
            ),
            (KEYS, source),
            (KEYS, destination),
            blocking=True,
        )

    def lindex(self, key: KeyT, index: int) -> Any:
        """Element at ``index``, or None when out of range."""
        return self._execute("LINDEX", LIST, lambda c: c.lindex(key, index), (KEY, key))

    def linsert(self, key: KeyT, before: bool, pivot: EncodableT, value: EncodableT) -> int:
        """Insert ``value`` before or after ``pivot``.

        Returns:
            The new length, -1 if ``pivot`` was not found, 0 if the key is missing.
        """
        where = "BEFORE" if before else "AFTER"
        return self._execute(
            "LINSERT",
            LIST,
            lambda c: c.linsert(key, where, pivot, value),
            (KEY, key),
            (ARGUMENTS, pivot),
            (ARGUMENTS, value),
            convert=to_int,
        )

    def llen(self, key: KeyT) -> int:
        """Length of the list."""
        return self._execute("LLEN", LIST, lambda c: c.llen(key), (KEY, key), convert=to_int)

    def lrange(self, key: KeyT, start: int, stop: int) -> list[Any]:
        """Elements between ``start`` and ``stop``, both inclusive."""
        return self._execute(
            "LRANGE", LIST, lambda c: c.lrange(key, start, stop), (KEY, key), convert=to_list
        )

    def lrem(self, key: KeyT, count: int, value: EncodableT) -> int:
        """Remove ``count`` occurrences of ``value``; 0 removes all."""
        return self._execute(
            "LREM",
            LIST,
            lambda c: c.lrem(key, count, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_int,
        )

    def lset(self, key: KeyT, index: int, value: EncodableT) -> str | None:
        """Replace the element at ``index``."""
        return self._execute(
            "LSET",
            LIST,
            lambda c: c.lset(key, index, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_status,
        )

    def ltrim(self, key: KeyT, start: int, stop: int) -> str | None:
        """Trim the list to the range ``start``..``stop``."""
        return self._execute(
            "LTRIM", LIST, lambda c: c.ltrim(key, start, stop), (KEY, key), convert=to_status
        )

    def rpop(self, key: KeyT) -> Any:
        """Remove and return the last element, or None for an empty list."""
        return self._execute("RPOP", LIST, lambda c: c.rpop(key), (KEY, key))

    def rpoplpush(self, source: KeyT, destination: KeyT) -> Any:
        """Move the tail of ``source`` to the head of ``destination``."""
        return self._execute(
            "RPOPLPUSH",
            LIST,
            lambda c: c.rpoplpush(source, destination),
            (ARGUMENTS, source),
            (ARGUMENTS, destination),
        )

    def rpush(self, key: KeyT, values: Sequence[EncodableT]) -> int:
        """Append ``values`` to the list and return its new length."""
        return self._execute(
            "RPUSH",
            LIST,
            lambda c: c.rpush(key, *as_args(values)),
            (KEY, key),
            (ARGUMENTS, values),
            convert=to_int,
        )

    def rpushx(self, key: KeyT, values: Sequence[EncodableT]) -> int:
        """Append only if the list exists; returns the length (0 if it did not)."""
        return self._execute(
            "RPUSHX",
            LIST,
            lambda c: c.rpushx(key, *as_args(values)),
            (ARGUMENTS, key),
            (ARGUMENTS, values),
            convert=to_int,
        )
