"""Conversions between redis-py replies and host-facing values."""

from collections.abc import Iterable, Mapping
from typing import Any

OK = "OK"
PONG = "PONG"


def to_int(value: Any) -> int:
    """Counts and lengths. Python ints never truncate."""
    return int(value)


def to_optional_int(value: Any) -> int | None:
    """Integer replies that may be nil."""
    return None if value is None else int(value)


def to_float(value: Any) -> float:
    """Float replies such as INCRBYFLOAT."""
    return float(value)


def to_optional_float(value: Any) -> float | None:
    """Float replies that may be nil, such as ZSCORE."""
    return None if value is None else float(value)


def to_bool(value: Any) -> bool:
    """Integer 0/1 replies as booleans."""
    return bool(value)


def to_status(value: Any) -> str | None:
    """Map redis-py's parsed status replies back to the Redis status text.

    redis-py turns ``+OK`` into ``True``; a ``None`` reply (e.g. a SET whose
    condition failed) passes through.
    """
    if value is None:
        return None
    if value is True:
        return OK
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def to_pong(value: Any) -> str:
    """PING reply as ``"PONG"``."""
    if value is True:
        return PONG
    return to_status(value) or PONG


def to_list(values: Iterable[Any] | None) -> list[Any]:
    """Ordered lists and sets alike become lists in iteration order."""
    if values is None:
        return []
    return list(values)


def to_mapping(mapping: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """Hash replies as a plain dict; nil becomes empty."""
    if mapping is None:
        return {}
    return dict(mapping)


def zip_to_mapping(keys: Iterable[Any], values: Iterable[Any] | None) -> dict[Any, Any]:
    """Pair requested keys with their values; missing values map to None.

    Args:
        keys: Keys or fields in request order.
        values: Values as returned by MGET/HMGET, aligned with ``keys``.

    Returns:
        Mapping of key to value.
    """
    values = list(values or [])
    return {key: values[i] if i < len(values) else None for i, key in enumerate(keys)}


def pop_to_mapping(item: Any) -> dict[Any, Any] | None:
    """Single-entry mapping from a BLPOP/BRPOP ``(key, value)`` reply."""
    if not item:
        return None
    key, value = item
    return {key: value}


def scored_pairs(members: Mapping[Any, float]) -> list[tuple[float, Any]]:
    """``(score, member)`` pairs in the mapping's iteration order."""
    return [(float(score), member) for member, score in members.items()]


def pairs_to_zadd_mapping(pairs: Iterable[tuple[float, Any]]) -> dict[Any, float]:
    """Member-to-score mapping as redis-py's ``zadd`` takes it."""
    return {member: score for score, member in pairs}


def lex_bound(value: Any) -> Any:
    """Inclusive lexicographic bound; ``-`` and ``+`` stay open-ended."""
    if value in ("-", "+", b"-", b"+"):
        return value
    if isinstance(value, bytes):
        return b"[" + value
    return f"[{value}"


def as_args(values: Any) -> list[Any]:
    """Variadic command arguments; a lone string or bytes is one argument."""
    if isinstance(values, (str, bytes)):
        return [values]
    return list(values)
