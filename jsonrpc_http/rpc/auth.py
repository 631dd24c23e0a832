"""API key handling for outbound JSON-RPC requests.

The key is an arbitrary header name/value pair chosen by the caller (for
example ``X-API-KEY: abcdef123456``). It has no relation to the JSON-RPC
envelope; the dispatcher just attaches it to the HTTP request.

Keys can also be discovered, in order:
1. The environment variable named by ``env_var`` (default JSONRPC_HTTP_API_KEY)
2. ~/.jsonrpc_http/api.key

SECURITY: Key files readable by group or others are skipped on POSIX systems.
"""

from __future__ import annotations

import logging
import os
import re
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

from jsonrpc_http.core.constants import get_api_key_path
from jsonrpc_http.core.errors import InvalidRequestError

logger = logging.getLogger(__name__)

DEFAULT_API_KEY_HEADER = "X-API-KEY"
DEFAULT_API_KEY_ENV = "JSONRPC_HTTP_API_KEY"

# RFC 7230 token characters
_HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


@dataclass(frozen=True)
class ApiKey:
    """API key container.

    Stores a key name and value and renders them as an HTTP header, a query
    string pair or a cookie header.

    Example:
        key = ApiKey("API-KEY", "abcdef12345")
        key.as_header()     # "API-KEY: abcdef12345"
        key.as_query_str()  # "API-KEY=abcdef12345"
    """

    name: str
    value: str

    def __post_init__(self) -> None:
        if not _HEADER_NAME_PATTERN.match(self.name or ""):
            raise InvalidRequestError(f"Invalid API key header name: {self.name!r}")
        if "\r" in self.value or "\n" in self.value:
            raise InvalidRequestError("API key value must not contain line breaks")
        # httpx encodes header values as ASCII
        if not self.value.isascii():
            raise InvalidRequestError("API key value must be ASCII")

    def as_header(self) -> str:
        return f"{self.name}: {self.value}"

    def as_query_str(self) -> str:
        return f"{self.name}={self.value}"

    def as_cookie(self) -> str:
        return f"Cookie: {self.name}={self.value}"

    def header_items(self) -> dict[str, str]:
        """Return the key as a one-entry header mapping."""
        return {self.name: self.value}

    def __repr__(self) -> str:
        # Never leak the value through repr/logging
        return f"ApiKey(name={self.name!r}, value='***')"


def _is_private_file(path: Path) -> bool:
    """Check that a key file is not readable by group or others."""
    if sys.platform == "win32":
        return True
    mode = path.stat().st_mode
    return not (mode & (stat.S_IRWXG | stat.S_IRWXO))


def discover_api_key(
    header_name: str = DEFAULT_API_KEY_HEADER,
    env_var: str = DEFAULT_API_KEY_ENV,
    config_dir: Path | None = None,
) -> ApiKey | None:
    """Discover an API key from the environment or the key file.

    Args:
        header_name: Header the key is sent under.
        env_var: Environment variable checked first.
        config_dir: Directory holding api.key. Defaults to ~/.jsonrpc_http.

    Returns:
        The discovered ApiKey, or None if no key was found.
    """
    env_value = os.environ.get(env_var, "").strip()
    if env_value:
        logger.debug("Using API key from $%s", env_var)
        return ApiKey(header_name, env_value)

    key_path = get_api_key_path(config_dir)
    if not key_path.is_file():
        return None

    try:
        if not _is_private_file(key_path):
            logger.warning(
                "Skipping API key file %s: readable by group/others (chmod 600 it)",
                key_path,
            )
            return None
        value = key_path.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug("Failed to read API key file %s: %s", key_path, e)
        return None

    if not value:
        return None
    logger.debug("Using API key from %s", key_path)
    return ApiKey(header_name, value)
