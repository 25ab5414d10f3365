"""Pydantic models for connector configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from redisconn.redis.codec import CodecName


class _Options(BaseModel):
    """Base for option models: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ConnectionPoolConfig(_Options):
    """Bounds and checks for the handle pool."""

    max_total: int = Field(default=8, ge=1, alias="maxTotal")
    max_idle: int = Field(default=8, ge=0, alias="maxIdle")
    min_idle: int = Field(default=0, ge=0, alias="minIdle")
    max_wait_millis: int = Field(
        default=-1,
        alias="maxWaitMillis",
        description="Borrow timeout in milliseconds; negative waits indefinitely",
    )
    test_on_borrow: bool = Field(default=False, alias="testOnBorrow")
    test_on_return: bool = Field(default=False, alias="testOnReturn")
    block_when_exhausted: bool = Field(default=True, alias="blockWhenExhausted")


class ClusterClientOptions(_Options):
    """Cluster topology refresh behaviour."""

    cluster_topology_refresh_interval: int = Field(
        default=0,
        ge=0,
        alias="clusterTopologyRefreshInterval",
        description="Periodic topology refresh in milliseconds; 0 disables it",
    )
    adaptive_refresh: bool = Field(default=False, alias="adaptiveRefresh")


class ConnectorOptions(_Options):
    """Options read once when a data source is initialized."""

    clustering_enabled: bool = Field(default=False, alias="clusteringEnabled")
    pooling_enabled: bool = Field(default=False, alias="poolingEnabled")
    connection_pool_config: ConnectionPoolConfig = Field(
        default_factory=ConnectionPoolConfig, alias="connectionPoolConfig"
    )
    client_timeout: int = Field(
        default=60000,
        ge=1,
        alias="clientTimeout",
        description="Per-command socket timeout in milliseconds",
    )
    cluster_client_options: ClusterClientOptions = Field(
        default_factory=ClusterClientOptions, alias="clusterClientOptions"
    )
    ssl: bool = False
    database: int = Field(default=0, ge=0)

    def explicit_flag(self, name: str) -> bool | None:
        """Return a mode flag only when it was given explicitly.

        Args:
            name: ``clustering_enabled`` or ``pooling_enabled``.

        Returns:
            The flag value, or None when the option was not supplied.
        """
        if name in self.model_fields_set:
            return bool(getattr(self, name))
        return None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: Literal["json", "text"] = "text"
    output: Literal["stdout", "stderr"] = "stderr"


class EndpointConfig(_Options):
    """A Redis endpoint as passed to ``init_client``."""

    host: str = Field(min_length=1, description="Comma-separated host[:port] list")
    password: str | None = None
    codec: CodecName = CodecName.STRING_CODEC
    options: ConnectorOptions = Field(default_factory=ConnectorOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
