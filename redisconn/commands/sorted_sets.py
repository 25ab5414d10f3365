"""Sorted set commands.

Score ranges are inclusive on both ends. Lexicographic bounds are made
inclusive with a ``[`` prefix; ``-`` and ``+`` keep their open-ended meaning.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from redisconn.commands.conversions import (
    as_args,
    lex_bound,
    pairs_to_zadd_mapping,
    scored_pairs,
    to_float,
    to_int,
    to_list,
    to_optional_float,
    to_optional_int,
)
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    DESTINATION_SOURCE_KEYS,
    KEY,
    MEMBERS,
    SORTED_SET,
    CommandDispatcher,
    EncodableT,
    KeyT,
)


class SortedSetCommands(CommandDispatcher):
    """ZADD, ZRANGE and the rest of the sorted set family."""

    def zadd(self, key: KeyT, members: Mapping[EncodableT, float]) -> int:
        """Add members with scores.

        Args:
            key: Sorted set key.
            members: Mapping of member to score.

        Returns:
            Number of members newly added (score updates are not counted).
        """
        return self._execute(
            "ZADD",
            SORTED_SET,
            lambda c: c.zadd(key, pairs_to_zadd_mapping(scored_pairs(members))),
            (KEY, key),
            (MEMBERS, members),
            convert=to_int,
        )

    def zcard(self, key: KeyT) -> int:
        """Number of members in the sorted set."""
        return self._execute(
            "ZCARD", SORTED_SET, lambda c: c.zcard(key), (KEY, key), convert=to_int
        )

    def zcount(self, key: KeyT, min: float, max: float) -> int:
        """Number of members with a score in ``min``..``max``."""
        return self._execute(
            "ZCOUNT",
            SORTED_SET,
            lambda c: c.zcount(key, min, max),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_int,
        )

    def zincrby(self, key: KeyT, amount: float, member: EncodableT) -> float:
        """Increment a member's score and return the new score."""
        return self._execute(
            "ZINCRBY",
            SORTED_SET,
            lambda c: c.zincrby(key, amount, member),
            (KEY, key),
            (MEMBERS, member),
            convert=to_float,
        )

    def zinterstore(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """Store the intersection of ``keys`` with summed scores."""
        return self._execute(
            "ZINTERSTORE",
            SORTED_SET,
            lambda c: c.zinterstore(destination, as_args(keys)),
            (ARGUMENTS, destination),
            (ARGUMENTS, keys),
            convert=to_int,
        )

    def zlexcount(self, key: KeyT, min: EncodableT, max: EncodableT) -> int:
        """Number of members between two lexicographic bounds."""
        return self._execute(
            "ZLEXCOUNT",
            SORTED_SET,
            lambda c: c.zlexcount(key, lex_bound(min), lex_bound(max)),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_int,
        )

    def zrange(self, key: KeyT, start: int, stop: int) -> list[Any]:
        """Members by rank, lowest score first."""
        return self._execute(
            "ZRANGE", SORTED_SET, lambda c: c.zrange(key, start, stop), (KEY, key), convert=to_list
        )

    def zrangebylex(self, key: KeyT, min: EncodableT, max: EncodableT) -> list[Any]:
        """Members between two lexicographic bounds, ascending."""
        return self._execute(
            "ZRANGEBYLEX",
            SORTED_SET,
            lambda c: c.zrangebylex(key, lex_bound(min), lex_bound(max)),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_list,
        )

    def zrevrangebylex(self, key: KeyT, min: EncodableT, max: EncodableT) -> list[Any]:
        """Members between two lexicographic bounds, descending."""
        return self._execute(
            "ZREVRANGEBYLEX",
            SORTED_SET,
            lambda c: c.zrevrangebylex(key, lex_bound(max), lex_bound(min)),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_list,
        )

    def zrangebyscore(self, key: KeyT, min: float, max: float) -> list[Any]:
        """Members with a score in ``min``..``max``, ascending."""
        return self._execute(
            "ZRANGEBYSCORE",
            SORTED_SET,
            lambda c: c.zrangebyscore(key, min, max),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_list,
        )

    def zrank(self, key: KeyT, member: EncodableT) -> int | None:
        """Rank of ``member`` by ascending score, or None if absent."""
        return self._execute(
            "ZRANK",
            SORTED_SET,
            lambda c: c.zrank(key, member),
            (KEY, key),
            (MEMBERS, member),
            convert=to_optional_int,
        )

    def zrem(self, key: KeyT, members: Sequence[EncodableT]) -> int:
        """Remove ``members``; returns how many were present."""
        return self._execute(
            "ZREM",
            SORTED_SET,
            lambda c: c.zrem(key, *as_args(members)),
            (KEY, key),
            (MEMBERS, members),
            convert=to_int,
        )

    def zremrangebylex(self, key: KeyT, min: EncodableT, max: EncodableT) -> int:
        """Remove members between two lexicographic bounds."""
        return self._execute(
            "ZREMRANGEBYLEX",
            SORTED_SET,
            lambda c: c.zremrangebylex(key, lex_bound(min), lex_bound(max)),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_int,
        )

    def zremrangebyrank(self, key: KeyT, start: int, stop: int) -> int:
        """Remove members ranked ``start``..``stop``."""
        return self._execute(
            "ZREMRANGEBYRANK",
            SORTED_SET,
            lambda c: c.zremrangebyrank(key, start, stop),
            (KEY, key),
            convert=to_int,
        )

    def zremrangebyscore(self, key: KeyT, min: float, max: float) -> int:
        """Remove members with a score in ``min``..``max``."""
        return self._execute(
            "ZREMRANGEBYSCORE",
            SORTED_SET,
            lambda c: c.zremrangebyscore(key, min, max),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_int,
        )

    def zrevrange(self, key: KeyT, start: int, stop: int) -> list[Any]:
        """Members by rank, highest score first."""
        return self._execute(
            "ZREVRANGE",
            SORTED_SET,
            lambda c: c.zrevrange(key, start, stop),
            (KEY, key),
            convert=to_list,
        )

    def zrevrangebyscore(self, key: KeyT, min: float, max: float) -> list[Any]:
        """Members with a score in ``min``..``max``, descending."""
        return self._execute(
            "ZREVRANGEBYSCORE",
            SORTED_SET,
            lambda c: c.zrevrangebyscore(key, max, min),
            (ARGUMENTS, key),
            (ARGUMENTS, min),
            (ARGUMENTS, max),
            convert=to_list,
        )

    def zrevrank(self, key: KeyT, member: EncodableT) -> int | None:
        """Rank counted from the highest score, or None for a missing member."""
        return self._execute(
            "ZREVRANK",
            SORTED_SET,
            lambda c: c.zrevrank(key, member),
            (KEY, key),
            (MEMBERS, member),
            convert=to_optional_int,
        )

    def zscore(self, key: KeyT, member: EncodableT) -> float | None:
        """Score of ``member``, or None if absent."""
        return self._execute(
            "ZSCORE",
            SORTED_SET,
            lambda c: c.zscore(key, member),
            (KEY, key),
            (MEMBERS, member),
            convert=to_optional_float,
        )

    def zunionstore(self, destination: KeyT, keys: Sequence[KeyT]) -> int:
        """Store the union of ``keys`` with summed scores."""
        return self._execute(
            "ZUNIONSTORE",
            SORTED_SET,
            lambda c: c.zunionstore(destination, as_args(keys)),
            (DESTINATION_SOURCE_KEYS, destination),
            (DESTINATION_SOURCE_KEYS, keys),
            convert=to_int,
        )
