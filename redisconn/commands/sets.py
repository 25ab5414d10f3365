"""Set commands.

Set replies come back as lists in the server's iteration order; callers
should compare them as unordered collections.
"""

from collections.abc import Sequence
from typing import Any

from redisconn.commands.conversions import as_args, to_bool, to_int, to_list
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    KEY,
    KEYS,
    SET,
    CommandDispatcher,
    EncodableT,
    KeyT,
)


class SetCommands(CommandDispatcher):
    """SADD, SMEMBERS and the rest of the set family."""

    def sadd(self, key: KeyT, values: Sequence[EncodableT]) -> int:
        """Add members and return how many were not already present."""
        return self._execute(
            "SADD",
            SET,
            lambda c: c.sadd(key, *as_args(values)),
            (KEY, key),
            (ARGUMENTS, values),
            convert=to_int,
        )

    def scard(self, key: KeyT) -> int:
        """Number of members in the set."""
        return self._execute("SCARD", SET, lambda c: c.scard(key), (KEY, key), convert=to_int)

    def sdiff(self, keys: Sequence[KeyT]) -> list[Any]:
        """Members of the first set not in any of the others."""
        return self._execute(
            "SDIFF", SET, lambda c: c.sdiff(as_args(keys)), (ARGUMENTS, keys), convert=to_list
        )

    def sdiffstore(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """Store SDIFF of ``keys`` in ``destination``; returns its size."""
        return self._execute(
            "SDIFFSTORE",
            SET,
            lambda c: c.sdiffstore(destination, as_args(keys)),
            (ARGUMENTS, destination),
            (ARGUMENTS, keys),
            convert=to_int,
        )

    def sinter(self, keys: Sequence[KeyT]) -> list[Any]:
        """Members common to every set."""
        return self._execute(
            "SINTER", SET, lambda c: c.sinter(as_args(keys)), (ARGUMENTS, keys), convert=to_list
        )

    def sinterstore(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """Store SINTER of ``keys`` in ``destination``; returns its size."""
        return self._execute(
            "SINTERSTORE",
            SET,
            lambda c: c.sinterstore(destination, as_args(keys)),
            (ARGUMENTS, destination),
            (ARGUMENTS, keys),
            convert=to_int,
        )

    def sismember(self, key: KeyT, value: EncodableT) -> bool:
        """Whether ``value`` is a member of the set."""
        return self._execute(
            "SISMEMBER",
            SET,
            lambda c: c.sismember(key, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_bool,
        )

    def smembers(self, key: KeyT) -> list[Any]:
        """Every member of the set."""
        return self._execute(
            "SMEMBERS", SET, lambda c: c.smembers(key), (KEY, key), convert=to_list
        )

    def smove(self, source: KeyT, destination: KeyT, member: EncodableT) -> bool:
        """Move ``member`` between sets; False if it was not in ``source``."""
        return self._execute(
            "SMOVE",
            SET,
            lambda c: c.smove(source, destination, member),
            (KEYS, source),
            (KEYS, destination),
            (ARGUMENTS, member),
            convert=to_bool,
        )

    def spop(self, key: KeyT, count: int = 1) -> list[Any]:
        """Remove and return up to ``count`` random members."""
        return self._execute(
            "SPOP", SET, lambda c: c.spop(key, count), (KEY, key), convert=to_list
        )

    def srandmember(self, key: KeyT, count: int = 1) -> list[Any]:
        """Return up to ``count`` random members without removing them.

        A negative ``count`` may return the same member more than once.
        """
        return self._execute(
            "SRANDMEMBER", SET, lambda c: c.srandmember(key, count), (KEY, key), convert=to_list
        )

    def srem(self, key: KeyT, members: Sequence[EncodableT]) -> int:
        """Remove ``members``; returns how many were present."""
        return self._execute(
            "SREM",
            SET,
            lambda c: c.srem(key, *as_args(members)),
            (KEY, key),
            (ARGUMENTS, members),
            convert=to_int,
        )

    def sunion(self, keys: Sequence[KeyT]) -> list[Any]:
        """Members of any of the sets."""
        return self._execute(
            "SUNION", SET, lambda c: c.sunion(as_args(keys)), (KEYS, keys), convert=to_list
        )

    def sunionstore(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """Store SUNION of ``keys`` in ``destination``; returns its size."""
        return self._execute(
            "SUNIONSTORE",
            SET,
            lambda c: c.sunionstore(destination, as_args(keys)),
            (ARGUMENTS, destination),
            (ARGUMENTS, keys),
            convert=to_int,
        )
