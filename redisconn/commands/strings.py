"""String commands."""

from collections.abc import Mapping, Sequence
from typing import Any

from redisconn.commands.conversions import (
    as_args,
    to_bool,
    to_float,
    to_int,
    to_status,
    zip_to_mapping,
)
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    KEY,
    KEYS,
    STRING,
    CommandDispatcher,
    EncodableT,
    KeyT,
)


class StringCommands(CommandDispatcher):
    """SET, GET and the rest of the string family."""

    def set(self, key: KeyT, value: EncodableT) -> str | None:
        """Set ``key`` to ``value``.

        Returns:
            ``"OK"``.
        """
        return self._execute(
            "SET", STRING, lambda c: c.set(key, value), (KEY, key), (ARGUMENTS, value),
            convert=to_status,
        )

    def get(self, key: KeyT) -> Any:
        """Get the value of ``key``.

        Returns:
            The value, or None when the key does not exist.
        """
        return self._execute("GET", STRING, lambda c: c.get(key), (KEY, key))

    def append(self, key: KeyT, value: EncodableT) -> int:
        """Append ``value`` to ``key`` and return the new length."""
        return self._execute(
            "APPEND", STRING, lambda c: c.append(key, value), (KEY, key), (ARGUMENTS, value),
            convert=to_int,
        )

    def bitcount(self, key: KeyT) -> int:
        """Number of set bits in the value."""
        return self._execute("BITCOUNT", STRING, lambda c: c.bitcount(key), (KEY, key), convert=to_int)

    def _bitop(self, operation: str, destination: KeyT, keys: Sequence[KeyT]) -> int:
        return self._execute(
            "BITOP",
            STRING,
            lambda c: c.bitop(operation, destination, *as_args(keys)),
            (KEYS, destination),
            (KEYS, keys),
            convert=to_int,
        )

    def bitop_and(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """BITOP AND of ``keys`` into ``destination``; returns the result length."""
        return self._bitop("AND", destination, keys)

    def bitop_or(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """BITOP OR of ``keys`` into ``destination``; returns the result length."""
        return self._bitop("OR", destination, keys)

    def bitop_not(self, destination: KeyT, key: KeyT) -> int:
        """BITOP NOT of ``key`` into ``destination``; returns the result length."""
        return self._execute(
            "BITOP",
            STRING,
            lambda c: c.bitop("NOT", destination, key),
            (KEYS, destination),
            (KEYS, key),
            convert=to_int,
        )

    def bitop_xor(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """BITOP XOR of ``keys`` into ``destination``; returns the result length."""
        return self._bitop("XOR", destination, keys)

    def decr(self, key: KeyT) -> int:
        """Decrement by one and return the new value."""
        return self._execute("DECR", STRING, lambda c: c.decr(key), (KEY, key), convert=to_int)

    def decrby(self, key: KeyT, value: int) -> int:
        """Decrement by ``value`` and return the new value."""
        return self._execute(
            "DECRBY", STRING, lambda c: c.decrby(key, value), (KEY, key), convert=to_int
        )

    def getbit(self, key: KeyT, offset: int) -> int:
        """Bit at ``offset``."""
        return self._execute(
            "GETBIT", STRING, lambda c: c.getbit(key, offset), (KEY, key), convert=to_int
        )

    def getrange(self, key: KeyT, start: int, end: int) -> Any:
        """Substring of the value at ``key``; empty for a missing key."""
        return self._execute(
            "GETRANGE", STRING, lambda c: c.getrange(key, start, end), (KEY, key)
        )

    def getset(self, key: KeyT, value: EncodableT) -> Any:
        """Set ``key`` and return its previous value, or None if it had none."""
        return self._execute(
            "GETSET", STRING, lambda c: c.getset(key, value), (KEY, key), (ARGUMENTS, value)
        )

    def incr(self, key: KeyT) -> int:
        """Increment by one and return the new value."""
        return self._execute("INCR", STRING, lambda c: c.incr(key), (KEY, key), convert=to_int)

    def incrby(self, key: KeyT, value: int) -> int:
        """Increment by ``value`` and return the new value."""
        return self._execute(
            "INCRBY", STRING, lambda c: c.incrby(key, value), (KEY, key), convert=to_int
        )

    def incrbyfloat(self, key: KeyT, value: float) -> float:
        """Increment by a float and return the new value."""
        return self._execute(
            "INCRBYFLOAT", STRING, lambda c: c.incrbyfloat(key, value), (KEY, key),
            convert=to_float,
        )

    def mget(self, keys: Sequence[KeyT]) -> dict[Any, Any]:
        """Get several keys at once.

        Returns:
            Mapping of each requested key to its value (None when missing).
        """
        return self._execute(
            "MGET",
            STRING,
            lambda c: c.mget(as_args(keys)),
            (KEYS, keys),
            convert=lambda values: zip_to_mapping(as_args(keys), values),
        )

    def mset(self, mapping: Mapping[KeyT, EncodableT]) -> str | None:
        """Set several keys at once."""
        return self._execute(
            "MSET", STRING, lambda c: c.mset(dict(mapping)), (KEY, mapping), convert=to_status
        )

    def msetnx(self, mapping: Mapping[KeyT, EncodableT]) -> bool:
        """Set all keys only if none of them exist."""
        return self._execute(
            "MSETNX", STRING, lambda c: c.msetnx(dict(mapping)), (KEY, mapping), convert=to_bool
        )

    def psetex(self, key: KeyT, value: EncodableT, expiration_millis: int) -> str | None:
        """Set ``key`` with a TTL in milliseconds."""
        return self._execute(
            "PSETEX",
            STRING,
            lambda c: c.psetex(key, expiration_millis, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_status,
        )

    def setbit(self, key: KeyT, value: int, offset: int) -> int:
        """Set the bit at ``offset`` to ``value`` and return the previous bit."""
        return self._execute(
            "SETBIT", STRING, lambda c: c.setbit(key, offset, value), (KEY, key), convert=to_int
        )

    def setex(self, key: KeyT, value: EncodableT, expiration_seconds: int) -> str | None:
        """Set ``key`` with a TTL in seconds."""
        return self._execute(
            "SETEX",
            STRING,
            lambda c: c.setex(key, expiration_seconds, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_status,
        )

    def setnx(self, key: KeyT, value: EncodableT) -> bool:
        """Set ``key`` only if it does not exist."""
        return self._execute(
            "SETNX", STRING, lambda c: c.setnx(key, value), (KEY, key), (ARGUMENTS, value),
            convert=to_bool,
        )

    def setrange(self, key: KeyT, offset: int, value: EncodableT) -> int:
        """Overwrite part of the value at ``offset``; returns the new length."""
        return self._execute(
            "SETRANGE",
            STRING,
            lambda c: c.setrange(key, offset, value),
            (KEY, key),
            (ARGUMENTS, value),
            convert=to_int,
        )

    def strlen(self, key: KeyT) -> int:
        """Length of the value, 0 for a missing key."""
        return self._execute("STRLEN", STRING, lambda c: c.strlen(key), (KEY, key), convert=to_int)
