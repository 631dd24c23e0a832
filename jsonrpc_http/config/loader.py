"""Configuration loading with fail-fast behavior and layered merging.

Layers, later ones overriding earlier ones by deep merge:
1. Global user (~/.jsonrpc_http/config.json)
2. Project local (cwd/.jsonrpc_http/config.json)

With no config files at all, Pydantic defaults are used. An explicit path
(``--config``) replaces both layers.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jsonrpc_http.config.schema import ClientConfig
from jsonrpc_http.core.constants import CONFIG_DIR_NAME, get_config_dir
from jsonrpc_http.core.errors import ConfigError
from jsonrpc_http.core.utils import deep_merge

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


@dataclass(frozen=True)
class ConfigLayer:
    """Settings read from one config file, before validation."""

    source: Path
    data: dict[str, Any]


def read_layer(path: Path) -> ConfigLayer:
    """Read one config file as a JSON object.

    A UTF-8 BOM is tolerated and an empty file is an empty layer.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid JSON,
            or holds something other than an object.
    """
    try:
        text = path.read_text(encoding="utf-8-sig").strip()
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if not text:
        return ConfigLayer(path, {})

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must hold a JSON object, got {type(data).__name__}"
        )
    return ConfigLayer(path, data)


def validate_layers(layers: list[ConfigLayer]) -> ClientConfig:
    """Deep-merge layers in order and validate the result.

    Raises:
        ConfigError: Naming every source file if validation fails.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer.data)

    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(layer.source) for layer in layers) or "defaults"
        raise ConfigError(f"Config validation failed ({sources}): {e}") from e


def load_config(path: Path | None = None, cwd: Path | None = None) -> ClientConfig:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for local lookup. Defaults to Path.cwd().

    Returns:
        Validated ClientConfig object.

    Raises:
        ConfigError: If any config file contains invalid JSON or merged config
            fails validation.
    """
    if path is not None:
        return validate_layers([read_layer(path)])

    global_path = get_config_dir() / CONFIG_FILE_NAME
    local_path = (cwd or Path.cwd()) / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    candidates = [global_path]
    # Avoid loading the same file twice when cwd is the home directory
    if local_path.resolve() != global_path.resolve():
        candidates.append(local_path)

    layers = []
    for candidate in candidates:
        if candidate.is_file():
            layers.append(read_layer(candidate))
        else:
            logger.debug("Config file not found: %s", candidate)

    if not layers:
        logger.debug("No config files found, using Pydantic defaults")
        return ClientConfig()

    logger.info("Config loaded from: %s", [str(layer.source) for layer in layers])
    return validate_layers(layers)


def with_overrides(config: ClientConfig, **overrides: Any) -> ClientConfig:
    """Return a copy of config with overrides applied and re-validated.

    Overrides set to None are ignored.

    Raises:
        ConfigError: If an override violates a field constraint.
    """
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return config
    try:
        return ClientConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e
