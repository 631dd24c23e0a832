"""Core constants and paths for jsonrpc_http.

Single source of truth for the protocol version and global paths. All modules
should import from here instead of hardcoding paths like
`Path.home() / ".jsonrpc_http"`.
"""

from pathlib import Path

JSONRPC_VERSION = "2.0"

CLIENT_NAME = "jsonrpc-http"

CONFIG_DIR_NAME = ".jsonrpc_http"

API_KEY_FILE_NAME = "api.key"


def get_client_version() -> str:
    """Get the installed package version, or 0.0.0 for source checkouts."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("jsonrpc-http")
    except PackageNotFoundError:
        return "0.0.0"


def get_default_user_agent() -> str:
    """Get the User-Agent sent when none is configured."""
    return f"{CLIENT_NAME}/{get_client_version()}"


def get_config_dir() -> Path:
    """Get ~/.jsonrpc_http (global config directory)."""
    return Path.home() / CONFIG_DIR_NAME


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_config_dir() / "config.json"


def get_api_key_path(config_dir: Path | None = None) -> Path:
    """Get the API key file path inside a config directory."""
    return (config_dir or get_config_dir()) / API_KEY_FILE_NAME
