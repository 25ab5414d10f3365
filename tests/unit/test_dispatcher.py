"""Tests for command dispatch: handle accounting and argument validation."""

from contextlib import contextmanager
from typing import Any, Iterator
from unittest.mock import MagicMock

import fakeredis
import pytest
import redis

from redisconn.connector import RedisConnector
from redisconn.datasource import CommandFamily
from redisconn.errors import (
    BadArgumentError,
    ConnectionFailedError,
    RedisConnectorError,
    ServerError,
)

# One call per command: (method, args).
COMMANDS: list[tuple[str, tuple[Any, ...]]] = [
    # strings
    ("set", ("k", "v")),
    ("get", ("k",)),
    ("append", ("k", "v")),
    ("bitcount", ("k",)),
    ("bitop_and", ("dest", ["k", "k2"])),
    ("bitop_or", ("dest", ["k", "k2"])),
    ("bitop_not", ("dest", "k")),
    ("bitop_xor", ("dest", ["k", "k2"])),
    ("decr", ("n",)),
    ("decrby", ("n", 2)),
    ("getbit", ("k", 1)),
    ("getrange", ("k", 0, -1)),
    ("getset", ("k", "v2")),
    ("incr", ("n",)),
    ("incrby", ("n", 2)),
    ("incrbyfloat", ("n", 1.5)),
    ("mget", (["k", "n"],)),
    ("mset", ({"a": "1", "b": "2"},)),
    ("msetnx", ({"fresh": "1"},)),
    ("psetex", ("k", "v", 1000)),
    ("setbit", ("bits", 1, 3)),
    ("setex", ("k", "v", 10)),
    ("setnx", ("k", "v")),
    ("setrange", ("k", 0, "V")),
    ("strlen", ("k",)),
    # lists
    ("lpush", ("l", ["x"])),
    ("lpop", ("l",)),
    ("lpushx", ("l", ["x"])),
    ("blpop", (1, ["l"])),
    ("brpop", (1, ["l"])),
    ("brpoplpush", ("l", "l2", 1)),
    ("lindex", ("l", 0)),
    ("linsert", ("l", True, "a", "x")),
    ("llen", ("l",)),
    ("lrange", ("l", 0, -1)),
    ("lrem", ("l", 0, "a")),
    ("lset", ("l", 0, "x")),
    ("ltrim", ("l", 0, 1)),
    ("rpop", ("l",)),
    ("rpoplpush", ("l", "l2")),
    ("rpush", ("l", ["x"])),
    ("rpushx", ("l", ["x"])),
    # sets
    ("sadd", ("s", ["c"])),
    ("scard", ("s",)),
    ("sdiff", (["s", "s2"],)),
    ("sdiffstore", ("dest", ["s", "s2"])),
    ("sinter", (["s", "s2"],)),
    ("sinterstore", ("dest", ["s", "s2"])),
    ("sismember", ("s", "a")),
    ("smembers", ("s",)),
    ("smove", ("s", "s2", "a")),
    ("spop", ("s",)),
    ("srandmember", ("s",)),
    ("srem", ("s", ["a"])),
    ("sunion", (["s", "s2"],)),
    ("sunionstore", ("dest", ["s", "s2"])),
    # sorted sets
    ("zadd", ("z", {"c": 3.0})),
    ("zcard", ("z",)),
    ("zcount", ("z", 0, 10)),
    ("zincrby", ("z", 1.0, "a")),
    ("zinterstore", ("dest", ["z"])),
    ("zlexcount", ("z", "-", "+")),
    ("zrange", ("z", 0, -1)),
    ("zrangebylex", ("z", "-", "+")),
    ("zrevrangebylex", ("z", "-", "+")),
    ("zrangebyscore", ("z", 0, 10)),
    ("zrank", ("z", "a")),
    ("zrem", ("z", ["a"])),
    ("zremrangebylex", ("z", "a", "b")),
    ("zremrangebyrank", ("z", 0, 0)),
    ("zremrangebyscore", ("z", 0, 1)),
    ("zrevrange", ("z", 0, -1)),
    ("zrevrangebyscore", ("z", 0, 10)),
    ("zrevrank", ("z", "a")),
    ("zscore", ("z", "a")),
    ("zunionstore", ("dest", ["z"])),
    # hashes
    ("hdel", ("h", ["f"])),
    ("hexists", ("h", "f")),
    ("hget", ("h", "f")),
    ("hgetall", ("h",)),
    ("hincrby", ("h", "count", 1)),
    ("hincrbyfloat", ("h", "ratio", 0.5)),
    ("hkeys", ("h",)),
    ("hlen", ("h",)),
    ("hmget", ("h", ["f", "g"])),
    ("hmset", ("h", {"g": "1"})),
    ("hset", ("h", "g", "v")),
    ("hsetnx", ("h", "g", "v")),
    ("hstrlen", ("h", "f")),
    ("hvals", ("h",)),
    # keys
    ("delete", (["k"],)),
    ("dump", ("k",)),
    ("exists", (["k", "n"],)),
    ("expire", ("k", 10)),
    ("keys", ("*",)),
    ("move", ("k", 1)),
    ("persist", ("k",)),
    ("pexpire", ("k", 1000)),
    ("pttl", ("k",)),
    ("randomkey", ()),
    ("rename", ("k", "k2")),
    ("renamenx", ("n", "k3")),
    ("sort", ("nums",)),
    ("ttl", ("k",)),
    ("type", ("k",)),
    # connection
    ("echo", ("hello",)),
    ("ping", ()),
]

# Commands without a nullable first argument.
_NO_NULLABLE_FIRST = {"randomkey", "ping", "blpop", "brpop"}


class CountingSource:
    """Data source double that counts acquires and releases."""

    client_timeout = 60000

    def __init__(self, handle: Any) -> None:
        self.handle = handle
        self.acquired = 0
        self.released = 0
        self.families: list[CommandFamily] = []

    @contextmanager
    def lease(
        self, family: CommandFamily = CommandFamily.CONNECTION, blocking: bool = False
    ) -> Iterator[Any]:
        self.acquired += 1
        self.families.append(family)
        try:
            yield self.handle
        finally:
            self.released += 1


class FailingHandle:
    """Handle whose every command fails at the transport."""

    def __getattr__(self, name: str) -> Any:
        def fail(*args: Any, **kwargs: Any) -> Any:
            raise redis.exceptions.ConnectionError(f"{name}: connection reset")

        return fail


def _seeded_client() -> fakeredis.FakeRedis:
    client = fakeredis.FakeRedis(decode_responses=True)
    client.set("k", "value")
    client.set("n", "5")
    client.rpush("l", "a", "b", "c", "d", "e")
    client.rpush("nums", "3", "1", "2")
    client.sadd("s", "a", "b")
    client.sadd("s2", "b")
    client.zadd("z", {"a": 1.0, "b": 2.0})
    client.hset("h", mapping={"f": "v"})
    return client


def _assert_plain(value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _assert_plain(key)
            _assert_plain(item)
    elif isinstance(value, list):
        for item in value:
            _assert_plain(item)
    else:
        assert value is None or isinstance(value, (str, bytes, int, float, bool))


@pytest.mark.parametrize("method,args", COMMANDS, ids=[name for name, _ in COMMANDS])
def test_success_releases_handle_once(method: str, args: tuple[Any, ...]) -> None:
    """Test a successful dispatch acquires and releases exactly once."""
    source = CountingSource(_seeded_client())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    result = getattr(connector, method)(*args)

    assert source.acquired == 1
    assert source.released == 1
    _assert_plain(result)


@pytest.mark.parametrize("method,args", COMMANDS, ids=[name for name, _ in COMMANDS])
def test_failure_releases_handle_once(method: str, args: tuple[Any, ...]) -> None:
    """Test a dispatch that fails at the transport still releases exactly once."""
    source = CountingSource(FailingHandle())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    with pytest.raises(ConnectionFailedError) as exc_info:
        getattr(connector, method)(*args)

    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)
    assert source.acquired == 1
    assert source.released == 1


@pytest.mark.parametrize(
    "method,args",
    [(name, args) for name, args in COMMANDS if name not in _NO_NULLABLE_FIRST],
    ids=[name for name, _ in COMMANDS if name not in _NO_NULLABLE_FIRST],
)
def test_null_first_argument_is_bad_argument(method: str, args: tuple[Any, ...]) -> None:
    """Test a null key yields BadArgumentError and still releases the handle."""
    source = CountingSource(FailingHandle())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    with pytest.raises(BadArgumentError, match="must not be null"):
        getattr(connector, method)(None, *args[1:])

    assert source.acquired == 1
    assert source.released == 1


@pytest.mark.parametrize("method", ["blpop", "brpop"])
def test_null_blocking_keys_is_bad_argument(method: str) -> None:
    """Test blocking pops reject a null key list without blocking."""
    source = CountingSource(FailingHandle())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    with pytest.raises(BadArgumentError, match="must not be null"):
        getattr(connector, method)(1, None)

    assert source.released == 1


def test_get_null_key_message() -> None:
    """Test GET with a null key names the key."""
    connector = RedisConnector(CountingSource(FailingHandle()))  # type: ignore[arg-type]

    with pytest.raises(BadArgumentError) as exc_info:
        connector.get(None)  # type: ignore[arg-type]

    assert str(exc_info.value) == "Key must not be null"
    assert exc_info.value.argument == "Key"


def test_lpush_null_values_message() -> None:
    """Test LPUSH with null values names the arguments."""
    connector = RedisConnector(CountingSource(FailingHandle()))  # type: ignore[arg-type]

    with pytest.raises(BadArgumentError) as exc_info:
        connector.lpush("q", None)  # type: ignore[arg-type]

    assert str(exc_info.value) == "Arguments must not be null"


@pytest.mark.parametrize(
    "call",
    [
        lambda redis: redis.lpush("q", []),
        lambda redis: redis.lpush("q", ["a", None]),
        lambda redis: redis.mset({}),
        lambda redis: redis.hmset("h", {"f": None}),
        lambda redis: redis.zrem("z", None),
        lambda redis: redis.echo(None),
    ],
)
def test_empty_or_partial_arguments_are_bad(call: Any) -> None:
    """Test empty collections and embedded nulls are rejected uniformly."""
    source = CountingSource(FailingHandle())

    with pytest.raises(BadArgumentError):
        call(RedisConnector(source))  # type: ignore[arg-type]

    assert source.released == 1


def test_redis_data_error_is_bad_argument() -> None:
    """Test a value redis-py cannot encode is reported as a bad argument."""
    handle = MagicMock()
    handle.set.side_effect = redis.exceptions.DataError("Invalid input of type: 'dict'")
    source = CountingSource(handle)
    connector = RedisConnector(source)  # type: ignore[arg-type]

    with pytest.raises(BadArgumentError) as exc_info:
        connector.set("k", {"nested": "dict"})  # type: ignore[arg-type]

    assert str(exc_info.value) == "Key must not be null"
    assert source.released == 1


def test_wrong_type_is_server_error() -> None:
    """Test a Redis error reply becomes ServerError with the command name."""
    source = CountingSource(_seeded_client())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    with pytest.raises(ServerError, match="^LPUSH failed") as exc_info:
        connector.lpush("k", ["x"])

    assert isinstance(exc_info.value, RedisConnectorError)
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ResponseError)
    assert source.released == 1


def test_family_tags() -> None:
    """Test each family leases its handle with its own tag."""
    source = CountingSource(_seeded_client())
    connector = RedisConnector(source)  # type: ignore[arg-type]

    connector.get("k")
    connector.llen("l")
    connector.scard("s")
    connector.zcard("z")
    connector.hlen("h")
    connector.ttl("k")
    connector.ping()

    assert source.families == [
        CommandFamily.STRING,
        CommandFamily.LIST,
        CommandFamily.SET,
        CommandFamily.SORTED_SET,
        CommandFamily.HASH,
        CommandFamily.KEY,
        CommandFamily.CONNECTION,
    ]
