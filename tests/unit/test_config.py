"""Tests for configuration system."""

import tempfile
from pathlib import Path

import pytest

from redisconn.config.loader import load_config
from redisconn.config.logging import configure_logging
from redisconn.config.models import (
    ClusterClientOptions,
    ConnectionPoolConfig,
    ConnectorOptions,
    EndpointConfig,
    LoggingConfig,
)
from redisconn.errors import ConfigurationError
from redisconn.redis.codec import CodecName


def test_connection_pool_config_defaults() -> None:
    """Test ConnectionPoolConfig with default values."""
    config = ConnectionPoolConfig()
    assert config.max_total == 8
    assert config.max_idle == 8
    assert config.min_idle == 0
    assert config.max_wait_millis == -1
    assert config.test_on_borrow is False
    assert config.test_on_return is False
    assert config.block_when_exhausted is True


def test_connection_pool_config_validation() -> None:
    """Test ConnectionPoolConfig bounds."""
    with pytest.raises(Exception):
        ConnectionPoolConfig(maxTotal=0)

    with pytest.raises(Exception):
        ConnectionPoolConfig(minIdle=-1)


def test_connector_options_defaults() -> None:
    """Test ConnectorOptions defaults."""
    options = ConnectorOptions()
    assert options.clustering_enabled is False
    assert options.pooling_enabled is False
    assert options.client_timeout == 60000
    assert options.cluster_client_options == ClusterClientOptions()
    assert options.cluster_client_options.cluster_topology_refresh_interval == 0
    assert options.cluster_client_options.adaptive_refresh is False
    assert options.ssl is False
    assert options.database == 0


def test_connector_options_camel_case_aliases() -> None:
    """Test options accept the camelCase keys and ignore unknown ones."""
    options = ConnectorOptions.model_validate(
        {
            "poolingEnabled": True,
            "clientTimeout": 2500,
            "connectionPoolConfig": {"maxTotal": 2, "maxWaitMillis": 100},
            "clusterClientOptions": {
                "clusterTopologyRefreshInterval": 30000,
                "adaptiveRefresh": True,
            },
            "somethingElse": 1,
        }
    )
    assert options.pooling_enabled is True
    assert options.client_timeout == 2500
    assert options.connection_pool_config.max_total == 2
    assert options.connection_pool_config.max_wait_millis == 100
    assert options.cluster_client_options.cluster_topology_refresh_interval == 30000
    assert options.cluster_client_options.adaptive_refresh is True


def test_connector_options_field_names() -> None:
    """Test options also accept snake_case field names."""
    options = ConnectorOptions(pooling_enabled=True, database=3)
    assert options.pooling_enabled is True
    assert options.database == 3


def test_explicit_flag() -> None:
    """Test mode flags are reported only when given explicitly."""
    assert ConnectorOptions().explicit_flag("pooling_enabled") is None

    options = ConnectorOptions.model_validate({"clusteringEnabled": False})
    assert options.explicit_flag("clustering_enabled") is False
    assert options.explicit_flag("pooling_enabled") is None


def test_endpoint_config_defaults() -> None:
    """Test EndpointConfig defaults."""
    config = EndpointConfig(host="localhost:6379")
    assert config.password is None
    assert config.codec is CodecName.STRING_CODEC
    assert config.options == ConnectorOptions()
    assert config.logging == LoggingConfig()


def test_endpoint_config_requires_host() -> None:
    """Test host must be present and non-empty."""
    with pytest.raises(Exception):
        EndpointConfig.model_validate({})

    with pytest.raises(Exception):
        EndpointConfig(host="")


def test_logging_config_validation() -> None:
    """Test LoggingConfig rejects unknown levels and formats."""
    with pytest.raises(Exception):
        LoggingConfig(level="VERBOSE")

    with pytest.raises(Exception):
        LoggingConfig(format="xml")


def test_configure_logging_json() -> None:
    """Test configure_logging accepts json output."""
    configure_logging(LoggingConfig(level="DEBUG", format="json", output="stdout"))


def test_load_config_file_not_found() -> None:
    """Test load_config with non-existent file."""
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/redisconn.yaml")


def test_load_config_empty_file() -> None:
    """Test load_config with empty file."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("")
        temp_path = f.name

    try:
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(temp_path)
    finally:
        Path(temp_path).unlink()


def test_load_config_valid() -> None:
    """Test load_config with valid YAML."""
    config_yaml = """
host: "redis-1:7000,redis-2:7001"
password: secret
codec: UTF8_STRING_CODEC
options:
  clusteringEnabled: true
  poolingEnabled: true
  connectionPoolConfig:
    maxTotal: 16
    maxWaitMillis: 500
  clusterClientOptions:
    clusterTopologyRefreshInterval: 60000
logging:
  level: DEBUG
  format: json
"""

    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(config_yaml)
        temp_path = f.name

    try:
        config = load_config(temp_path)
        assert config.host == "redis-1:7000,redis-2:7001"
        assert config.password == "secret"
        assert config.codec is CodecName.UTF8_STRING_CODEC
        assert config.options.clustering_enabled is True
        assert config.options.connection_pool_config.max_total == 16
        assert config.options.connection_pool_config.max_wait_millis == 500
        assert config.options.cluster_client_options.cluster_topology_refresh_interval == 60000
        assert config.logging.format == "json"
    finally:
        Path(temp_path).unlink()


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test load_config falls back to REDISCONN_CONFIG."""
    path = tmp_path / "endpoint.yaml"
    path.write_text("host: localhost\n")
    monkeypatch.setenv("REDISCONN_CONFIG", str(path))

    config = load_config()
    assert config.host == "localhost"


def test_load_config_invalid() -> None:
    """Test load_config wraps validation and YAML errors."""
    for content in ("host: localhost\ncodec: NOPE\n", "host: [unclosed\n"):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(content)
            temp_path = f.name

        try:
            with pytest.raises(ConfigurationError):
                load_config(temp_path)
        finally:
            Path(temp_path).unlink()
