"""Key commands.

TTL and PTTL keep Redis's sentinels: -1 for a key without expiry and -2 for
a missing key.
"""

from collections.abc import Sequence
from typing import Any

from redisconn.commands.conversions import as_args, to_bool, to_int, to_list, to_status
from redisconn.commands.dispatcher import (
    KEY,
    KEY_FAMILY,
    KEYS,
    CommandDispatcher,
    KeyT,
)


class KeyCommands(CommandDispatcher):
    """DEL, EXPIRE, TTL and the rest of the key family."""

    def delete(self, keys: Sequence[KeyT]) -> int:
        """DEL: remove keys and return how many existed."""
        return self._execute(
            "DEL", KEY_FAMILY, lambda c: c.delete(*as_args(keys)), (KEY, keys), convert=to_int
        )

    def dump(self, key: KeyT) -> bytes | None:
        """Serialized value of ``key`` as raw bytes, or None if missing."""
        return self._execute("DUMP", KEY_FAMILY, lambda c: c.dump(key), (KEY, key))

    def exists(self, keys: Sequence[KeyT]) -> int:
        """Number of the given keys that exist (repeats count repeatedly)."""
        return self._execute(
            "EXISTS", KEY_FAMILY, lambda c: c.exists(*as_args(keys)), (KEYS, keys), convert=to_int
        )

    def expire(self, key: KeyT, seconds: int) -> bool:
        """Set a TTL in seconds; False if the key does not exist."""
        return self._execute(
            "EXPIRE", KEY_FAMILY, lambda c: c.expire(key, seconds), (KEY, key), convert=to_bool
        )

    def keys(self, pattern: str) -> list[Any]:
        """Keys matching a glob-style ``pattern``."""
        return self._execute(
            "KEYS", KEY_FAMILY, lambda c: c.keys(pattern), (KEY, pattern), convert=to_list
        )

    def move(self, key: KeyT, database: int) -> bool:
        """Move ``key`` to another logical database (single-node only)."""
        return self._execute(
            "MOVE", KEY_FAMILY, lambda c: c.move(key, database), (KEY, key), convert=to_bool
        )

    def persist(self, key: KeyT) -> bool:
        """Remove the TTL; False if the key had none."""
        return self._execute(
            "PERSIST", KEY_FAMILY, lambda c: c.persist(key), (KEY, key), convert=to_bool
        )

    def pexpire(self, key: KeyT, millis: int) -> bool:
        """Set a TTL in milliseconds; False if the key does not exist."""
        return self._execute(
            "PEXPIRE", KEY_FAMILY, lambda c: c.pexpire(key, millis), (KEY, key), convert=to_bool
        )

    def pttl(self, key: KeyT) -> int:
        """Remaining TTL in milliseconds."""
        return self._execute("PTTL", KEY_FAMILY, lambda c: c.pttl(key), (KEY, key), convert=to_int)

    def randomkey(self) -> Any:
        """A random key, or None when the database is empty."""
        return self._execute("RANDOMKEY", KEY_FAMILY, lambda c: c.randomkey())

    def rename(self, key: KeyT, new_name: KeyT) -> str | None:
        """Rename ``key``; fails if it does not exist."""
        return self._execute(
            "RENAME",
            KEY_FAMILY,
            lambda c: c.rename(key, new_name),
            (KEY, key),
            (KEY, new_name),
            convert=to_status,
        )

    def renamenx(self, key: KeyT, new_name: KeyT) -> bool:
        """Rename ``key`` only if ``new_name`` does not exist."""
        return self._execute(
            "RENAMENX",
            KEY_FAMILY,
            lambda c: c.renamenx(key, new_name),
            (KEY, key),
            (KEY, new_name),
            convert=to_bool,
        )

    def sort(self, key: KeyT) -> list[Any]:
        """Elements of a list, set or sorted set sorted numerically."""
        return self._execute("SORT", KEY_FAMILY, lambda c: c.sort(key), (KEY, key), convert=to_list)

    def ttl(self, key: KeyT) -> int:
        """Remaining TTL in seconds."""
        return self._execute("TTL", KEY_FAMILY, lambda c: c.ttl(key), (KEY, key), convert=to_int)

    def type(self, key: KeyT) -> str | None:
        """Type name of the value at ``key``; ``"none"`` if missing."""
        return self._execute("TYPE", KEY_FAMILY, lambda c: c.type(key), (KEY, key), convert=to_status)
