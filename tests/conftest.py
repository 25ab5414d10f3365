"""Shared fixtures: a fakeredis-backed client factory and ready connectors."""

from typing import Any, Iterator

import fakeredis
import pytest
import structlog

from redisconn.connector import RedisConnector, init_client
from redisconn.redis.client import RedisClientFactory


class FakeClientFactory(RedisClientFactory):
    """Client factory whose standalone clients talk to an in-process server."""

    server: fakeredis.FakeServer

    def _standalone_client(self, **kwargs: Any) -> fakeredis.FakeRedis:
        return fakeredis.FakeRedis(
            server=self.server,
            db=kwargs["db"],
            decode_responses=kwargs["decode_responses"],
        )


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    """Fresh in-process Redis server."""
    return fakeredis.FakeServer()


@pytest.fixture
def factory_class(fake_server: fakeredis.FakeServer) -> type[RedisClientFactory]:
    """Client factory class bound to the fake server."""
    return type("BoundFakeClientFactory", (FakeClientFactory,), {"server": fake_server})


@pytest.fixture
def connector(factory_class: type[RedisClientFactory]) -> Iterator[RedisConnector]:
    """Unpooled single-node connector."""
    redis = init_client({"host": "localhost:6379"}, client_factory_class=factory_class)
    yield redis
    redis.close()


@pytest.fixture
def pooled_connector(factory_class: type[RedisClientFactory]) -> Iterator[RedisConnector]:
    """Pooled single-node connector with up to four handles."""
    redis = init_client(
        {
            "host": "localhost:6379",
            "options": {"poolingEnabled": True, "connectionPoolConfig": {"maxTotal": 4}},
        },
        client_factory_class=factory_class,
    )
    yield redis
    redis.close()
