"""YAML configuration with defaults from config/config.yaml.example."""

from status_gateway.config.settings import (
    get_client_config,
    get_server_config,
    get_status_config,
    read_config,
)

__all__ = ["get_client_config", "get_server_config", "get_status_config", "read_config"]
