"""Hash commands."""

from collections.abc import Mapping, Sequence
from typing import Any

from redisconn.commands.conversions import (
    OK,
    as_args,
    to_bool,
    to_float,
    to_int,
    to_list,
    to_mapping,
    zip_to_mapping,
)
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    HASH,
    KEY,
    KEY_FIELD,
    KEY_FIELDS,
    CommandDispatcher,
    EncodableT,
    FieldT,
    KeyT,
)


class HashCommands(CommandDispatcher):
    """HSET, HMGET and the rest of the hash family."""

    def hdel(self, key: KeyT, fields: Sequence[FieldT]) -> int:
        """Delete ``fields`` from the hash; returns how many existed."""
        return self._execute(
            "HDEL",
            HASH,
            lambda c: c.hdel(key, *as_args(fields)),
            (KEY_FIELDS, key),
            (KEY_FIELDS, fields),
            convert=to_int,
        )

    def hexists(self, key: KeyT, field: FieldT) -> bool:
        """Whether ``field`` exists in the hash."""
        return self._execute(
            "HEXISTS",
            HASH,
            lambda c: c.hexists(key, field),
            (KEY_FIELDS, key),
            (KEY_FIELDS, field),
            convert=to_bool,
        )

    def hget(self, key: KeyT, field: FieldT) -> Any:
        """Value of ``field``, or None when the field or hash is missing."""
        return self._execute(
            "HGET", HASH, lambda c: c.hget(key, field), (KEY_FIELDS, key), (KEY_FIELDS, field)
        )

    def hgetall(self, key: KeyT) -> dict[Any, Any]:
        """Every field and value of the hash as a dict."""
        return self._execute("HGETALL", HASH, lambda c: c.hgetall(key), (KEY, key), convert=to_mapping)

    def hincrby(self, key: KeyT, field: FieldT, amount: int) -> int:
        """Increment an integer field and return the new value."""
        return self._execute(
            "HINCRBY",
            HASH,
            lambda c: c.hincrby(key, field, amount),
            (KEY_FIELDS, key),
            (KEY_FIELDS, field),
            convert=to_int,
        )

    def hincrbyfloat(self, key: KeyT, field: FieldT, amount: float) -> float:
        """Increment a float field and return the new value."""
        return self._execute(
            "HINCRBYFLOAT",
            HASH,
            lambda c: c.hincrbyfloat(key, field, amount),
            (KEY_FIELD, key),
            (KEY_FIELD, field),
            convert=to_float,
        )

    def hkeys(self, key: KeyT) -> list[Any]:
        """Field names of the hash."""
        return self._execute("HKEYS", HASH, lambda c: c.hkeys(key), (KEY, key), convert=to_list)

    def hlen(self, key: KeyT) -> int:
        """Number of fields in the hash."""
        return self._execute("HLEN", HASH, lambda c: c.hlen(key), (KEY_FIELD, key), convert=to_int)

    def hmget(self, key: KeyT, fields: Sequence[FieldT]) -> dict[Any, Any]:
        """Get several fields at once.

        Returns:
            Mapping of each requested field to its value; missing fields map to None.
        """
        return self._execute(
            "HMGET",
            HASH,
            lambda c: c.hmget(key, as_args(fields)),
            (KEY_FIELDS, key),
            (KEY_FIELDS, fields),
            convert=lambda values: zip_to_mapping(as_args(fields), values),
        )

    def hmset(self, key: KeyT, mapping: Mapping[FieldT, EncodableT]) -> str:
        """Set several fields at once.

        Sent as a multi-field HSET, which replaces the deprecated HMSET.

        Returns:
            ``"OK"``.
        """
        return self._execute(
            "HMSET",
            HASH,
            lambda c: c.hset(key, mapping=dict(mapping)),
            (KEY_FIELD, key),
            (KEY_FIELD, mapping),
            convert=lambda _: OK,
        )

    def hset(self, key: KeyT, field: FieldT, value: EncodableT) -> bool:
        """Set one field.

        Returns:
            True if the field is new, False if an existing value was overwritten.
        """
        return self._execute(
            "HSET",
            HASH,
            lambda c: c.hset(key, field, value),
            (KEY_FIELD, key),
            (KEY_FIELD, field),
            (ARGUMENTS, value),
            convert=to_bool,
        )

    def hsetnx(self, key: KeyT, field: FieldT, value: EncodableT) -> bool:
        """Set ``field`` only if it does not exist yet."""
        return self._execute(
            "HSETNX",
            HASH,
            lambda c: c.hsetnx(key, field, value),
            (KEY_FIELD, key),
            (KEY_FIELD, field),
            (ARGUMENTS, value),
            convert=to_bool,
        )

    def hstrlen(self, key: KeyT, field: FieldT) -> int:
        """Length of the value stored at ``field``."""
        return self._execute(
            "HSTRLEN",
            HASH,
            lambda c: c.hstrlen(key, field),
            (KEY_FIELD, key),
            (KEY_FIELD, field),
            convert=to_int,
        )

    def hvals(self, key: KeyT) -> list[Any]:
        """Values of the hash."""
        return self._execute("HVALS", HASH, lambda c: c.hvals(key), (KEY, key), convert=to_list)
