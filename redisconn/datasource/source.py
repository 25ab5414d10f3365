"""Data source lifecycle: topology selection, pooling and handle leasing."""

import threading
from collections.abc import Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator

import redis
import structlog
from pydantic import ValidationError
from redis.exceptions import RedisClusterException

from redisconn.config.models import ConnectorOptions
from redisconn.datasource.pool import HandlePool
from redisconn.errors import (
    AlreadyInitializedError,
    ConfigurationError,
    ConnectionFailedError,
    DataSourceClosedError,
    NotInitializedError,
)
from redisconn.redis.client import RedisClientFactory
from redisconn.redis.codec import Codec
from redisconn.redis.hosts import parse_hosts

logger = structlog.get_logger()


class CommandFamily(str, Enum):
    """Redis command families served by a command handle."""

    STRING = "string"
    LIST = "list"
    SET = "set"
    SORTED_SET = "sorted_set"
    HASH = "hash"
    KEY = "key"
    CONNECTION = "connection"


class DataSourceState(str, Enum):
    """Data source lifecycle state."""

    CREATED = "created"
    READY = "ready"
    CLOSED = "closed"


def _ping(handle: Any) -> bool:
    return bool(handle.ping())


def _close_client(handle: Any) -> None:
    handle.close()


class SharedClient:
    """One long-lived client shared by every caller.

    redis-py clients are thread-safe: each command runs on a connection taken
    from the client's own connection pool for the duration of the call.
    """

    pooled = False

    def __init__(self, client: Any, cluster: bool) -> None:
        self.client = client
        self.cluster = cluster

    def acquire(self) -> Any:
        return self.client

    def release(self, handle: Any) -> None:
        pass

    def close(self) -> None:
        if not self.cluster:
            try:
                self.client.execute_command("QUIT")
            except redis.RedisError as e:
                logger.debug("quit_failed", error=str(e))
        self.client.close()


class PooledClients:
    """Handles borrowed from a :class:`HandlePool` for each command."""

    pooled = True

    def __init__(self, pool: HandlePool[Any]) -> None:
        self.pool = pool

    def acquire(self) -> Any:
        return self.pool.borrow()

    def release(self, handle: Any) -> None:
        self.pool.give_back(handle)

    def close(self) -> None:
        self.pool.close()


class _TopologyRefresher(threading.Thread):
    """Periodically rebuilds a cluster client's slot map."""

    def __init__(self, client: Any, interval_millis: int) -> None:
        super().__init__(name="redisconn-topology-refresh", daemon=True)
        self._client = client
        self._interval = interval_millis / 1000.0
        self._stopped = threading.Event()
        self.logger = logger.bind(component="topology_refresher")

    def run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._client.nodes_manager.initialize()
            except redis.RedisError as e:
                self.logger.warning("topology_refresh_failed", error=str(e))
            else:
                self.logger.debug("topology_refreshed")

    def stop(self) -> None:
        self._stopped.set()


class DataSource:
    """A configured Redis endpoint that hands out command handles.

    A data source is either cluster-mode or single-node, and either pooled or
    backed by one shared client. Both choices are fixed by :meth:`init`. The
    lifecycle is ``CREATED -> READY -> CLOSED``; transitions out of order are
    refused.

    Typical use pairs every handle with a release through :meth:`lease`::

        with data_source.lease(CommandFamily.STRING) as commands:
            commands.get("key")
    """

    def __init__(
        self,
        codec: Codec,
        clustering_enabled: bool,
        pooling_enabled: bool,
        client_factory_class: type[RedisClientFactory] = RedisClientFactory,
    ) -> None:
        """Initialize data source.

        Args:
            codec: Key/value codec.
            clustering_enabled: Connect to a Redis cluster.
            pooling_enabled: Borrow a pooled handle per command.
            client_factory_class: Factory used to build redis-py clients.
        """
        self.codec = codec
        self._clustering_enabled = clustering_enabled
        self._pooling_enabled = pooling_enabled
        self._client_factory_class = client_factory_class
        self._state = DataSourceState.CREATED
        self._lock = threading.Lock()
        self._provider: SharedClient | PooledClients | None = None
        self._refresher: _TopologyRefresher | None = None
        self._client_timeout = ConnectorOptions().client_timeout
        self._blocking_warned = False
        self.logger = logger.bind(component="data_source")

    @property
    def state(self) -> DataSourceState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_cluster(self) -> bool:
        """Whether commands go to a Redis cluster."""
        return self._clustering_enabled

    @property
    def is_pooled(self) -> bool:
        """Whether each command borrows its own pooled handle."""
        return self._pooling_enabled

    @property
    def client_timeout(self) -> int:
        """Socket read timeout in milliseconds; bounds blocking commands."""
        return self._client_timeout

    @property
    def pool(self) -> HandlePool[Any] | None:
        """The handle pool, when pooling is enabled and the source is initialized."""
        if isinstance(self._provider, PooledClients):
            return self._provider.pool
        return None

    def init(
        self,
        hosts: str,
        password: str | None = None,
        options: ConnectorOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """Connect the data source to its endpoint.

        Args:
            hosts: Comma-separated ``host[:port]`` list.
            password: AUTH password; None or empty sends no AUTH.
            options: Connector options or a mapping of them.

        Raises:
            AlreadyInitializedError: If the data source was already initialized.
            DataSourceClosedError: If the data source was closed.
            ConfigurationError: If hosts or options are invalid.
        """
        options = _coerce_options(options)
        nodes = parse_hosts(hosts)

        with self._lock:
            if self._state is DataSourceState.READY:
                raise AlreadyInitializedError("Data source is already initialized")
            if self._state is DataSourceState.CLOSED:
                raise DataSourceClosedError("Data source is closed")

            self._apply_mode_flags(options)
            self._client_timeout = options.client_timeout
            factory = self._client_factory_class(
                nodes, password, self.codec, options, cluster=self._clustering_enabled
            )
            try:
                self._provider = self._build_provider(factory, options)
            except (redis.RedisError, RedisClusterException) as e:
                raise ConnectionFailedError(f"Failed to connect to {hosts}: {e}") from e
            self._state = DataSourceState.READY

        self.logger.info(
            "datasource_initialized",
            cluster=self._clustering_enabled,
            pooled=self._pooling_enabled,
            nodes=len(nodes),
            codec=self.codec.name.value,
        )

    def _build_provider(
        self, factory: RedisClientFactory, options: ConnectorOptions
    ) -> SharedClient | PooledClients:
        interval = options.cluster_client_options.cluster_topology_refresh_interval

        if self._pooling_enabled:
            pool: HandlePool[Any] = HandlePool(
                create=lambda: factory.create_client(dedicated=True),
                destroy=_close_client,
                validate=_ping,
                config=options.connection_pool_config,
                name="cluster" if self._clustering_enabled else "standalone",
            )
            try:
                pool.prepare()
            except Exception:
                pool.close()
                raise
            if self._clustering_enabled and interval > 0:
                self.logger.info("periodic_refresh_not_applied_to_pooled_clients")
            return PooledClients(pool)

        shared = factory.create_client()
        if self._clustering_enabled and interval > 0:
            self._refresher = _TopologyRefresher(shared, interval)
            self._refresher.start()
        return SharedClient(shared, cluster=self._clustering_enabled)

    def _apply_mode_flags(self, options: ConnectorOptions) -> None:
        for name, attr in (
            ("clustering_enabled", "_clustering_enabled"),
            ("pooling_enabled", "_pooling_enabled"),
        ):
            flag = options.explicit_flag(name)
            if flag is None:
                continue
            if flag != getattr(self, attr):
                self.logger.warning(
                    "mode_flag_overridden_by_options",
                    option=name,
                    constructor=getattr(self, attr),
                    options=flag,
                )
            setattr(self, attr, flag)

    def _ready_provider(self) -> SharedClient | PooledClients:
        state = self._state
        if state is DataSourceState.CLOSED:
            raise DataSourceClosedError("Data source is closed")
        if state is DataSourceState.CREATED or self._provider is None:
            raise NotInitializedError("Data source is not initialized")
        return self._provider

    def acquire_commands(self) -> Any:
        """Acquire a synchronous command handle.

        Returns:
            A redis-py client. Pair with :meth:`release`.

        Raises:
            NotInitializedError: Before :meth:`init`.
            DataSourceClosedError: After :meth:`close`.
            PoolExhaustedError: If the pool had no handle within the wait limit.
        """
        return self._ready_provider().acquire()

    def release(self, handle: Any) -> None:
        """Release a handle from :meth:`acquire_commands`.

        A no-op for shared clients and for ``None``.

        Args:
            handle: Handle to release.
        """
        if handle is None or self._provider is None:
            return
        self._provider.release(handle)

    @contextmanager
    def lease(
        self,
        family: CommandFamily = CommandFamily.CONNECTION,
        blocking: bool = False,
    ) -> Iterator[Any]:
        """Hold a command handle for the duration of a ``with`` block.

        Args:
            family: Command family the handle is used for.
            blocking: Whether the command blocks server-side (BLPOP and friends).

        Yields:
            A redis-py client, released on every exit path.
        """
        if blocking and not self._pooling_enabled and not self._blocking_warned:
            self._blocking_warned = True
            self.logger.warning("blocking_command_on_shared_client", family=family.value)
        handle = self.acquire_commands()
        try:
            yield handle
        finally:
            self.release(handle)

    def close(self) -> None:
        """Close the pool or shared client. Safe to call more than once."""
        with self._lock:
            if self._state is DataSourceState.CLOSED:
                return
            self._state = DataSourceState.CLOSED
            provider = self._provider
            refresher = self._refresher
            self._refresher = None

        if refresher is not None:
            refresher.stop()
        if provider is not None:
            provider.close()
        self.logger.info("datasource_closed", pooled=self._pooling_enabled)


def _coerce_options(options: ConnectorOptions | Mapping[str, Any] | None) -> ConnectorOptions:
    if options is None:
        return ConnectorOptions()
    if isinstance(options, ConnectorOptions):
        return options
    try:
        return ConnectorOptions.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e
