"""Redis client factory for standalone and cluster endpoints."""

from typing import Any

import redis
import structlog
from redis.cluster import ClusterNode, RedisCluster

from redisconn.config.models import ConnectorOptions
from redisconn.redis.codec import Codec
from redisconn.redis.hosts import HostPort

logger = structlog.get_logger()

# RedisCluster rebuilds its slot map after this many redirections.
_DEFAULT_REINITIALIZE_STEPS = 5


class RedisClientFactory:
    """Factory for redis-py clients bound to one configured endpoint."""

    def __init__(
        self,
        nodes: list[HostPort],
        password: str | None,
        codec: Codec,
        options: ConnectorOptions,
        cluster: bool,
    ) -> None:
        """Initialize Redis client factory.

        Args:
            nodes: Seed nodes; single-node mode uses the first one.
            password: AUTH password, or None to skip AUTH.
            codec: Key/value codec.
            options: Connector options.
            cluster: Whether to build cluster clients.
        """
        if not nodes:
            raise ValueError("At least one node is required")
        self._nodes = list(nodes)
        self._password = password or None
        self._codec = codec
        self._options = options
        self._cluster = cluster
        self.logger = logger.bind(component="redis_client_factory")

        if cluster and options.database:
            self.logger.warning("database_ignored_in_cluster_mode", database=options.database)

    @property
    def cluster(self) -> bool:
        """Whether this factory builds cluster clients."""
        return self._cluster

    @property
    def nodes(self) -> list[HostPort]:
        """Configured seed nodes."""
        return list(self._nodes)

    def _common_kwargs(self) -> dict[str, Any]:
        timeout = self._options.client_timeout / 1000.0
        return {
            "password": self._password,
            "ssl": self._options.ssl,
            "socket_timeout": timeout,
            "socket_connect_timeout": timeout,
            **self._codec.client_kwargs(),
        }

    def create_client(self, dedicated: bool = False) -> redis.Redis:  # type: ignore[type-arg]
        """Create a new client for the endpoint.

        Args:
            dedicated: Bind a standalone client to a single connection it owns
                for its whole life. Used for pooled handles; cluster clients
                always manage their own per-node connections.

        Returns:
            ``redis.Redis`` or ``RedisCluster`` instance.
        """
        kwargs = self._common_kwargs()
        if self._cluster:
            refresh = self._options.cluster_client_options
            kwargs["startup_nodes"] = [ClusterNode(node.host, node.port) for node in self._nodes]
            kwargs["reinitialize_steps"] = (
                1 if refresh.adaptive_refresh else _DEFAULT_REINITIALIZE_STEPS
            )
            self.logger.debug("creating_cluster_client", seeds=len(self._nodes))
            return self._cluster_client(**kwargs)

        node = self._nodes[0]
        kwargs.update(
            host=node.host,
            port=node.port,
            db=self._options.database,
            single_connection_client=dedicated,
        )
        self.logger.debug(
            "creating_standalone_client", host=node.host, port=node.port, dedicated=dedicated
        )
        return self._standalone_client(**kwargs)

    def _standalone_client(self, **kwargs: Any) -> redis.Redis:  # type: ignore[type-arg]
        return redis.Redis(**kwargs)

    def _cluster_client(self, **kwargs: Any) -> RedisCluster:
        return RedisCluster(**kwargs)
