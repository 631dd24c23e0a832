"""Configuration loading and validation."""

from jsonrpc_http.config.loader import load_config
from jsonrpc_http.config.schema import ClientConfig, LoggingConfig

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "load_config",
]
