"""Configuration loader for the Redis connector."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from redisconn.config.models import EndpointConfig
from redisconn.errors import ConfigurationError


def load_config(config_path: str | Path | None = None) -> EndpointConfig:
    """Load an endpoint configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, uses REDISCONN_CONFIG env var.

    Returns:
        Validated EndpointConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If config is empty or invalid.
    """
    if config_path is None:
        config_path = os.environ.get("REDISCONN_CONFIG", "redisconn.yaml")

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Config file is not valid YAML: {config_path}") from e

    if config_data is None:
        raise ConfigurationError(f"Config file is empty: {config_path}")

    try:
        return EndpointConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
