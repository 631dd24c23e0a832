"""Pydantic models for jsonrpc_http configuration validation."""

import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jsonrpc_http.core.constants import get_default_user_agent
from jsonrpc_http.rpc.auth import DEFAULT_API_KEY_ENV, DEFAULT_API_KEY_HEADER
from jsonrpc_http.rpc.diagnostics import TRACE

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Console logging settings for the jsonrpc_http logger namespace."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"
    """Minimum level printed to stderr."""

    trace: bool = False
    """Print full rendered requests (implies level TRACE)."""

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    def effective_level(self) -> int:
        """Resolve the configured level to a logging level number."""
        if self.trace or self.level == "TRACE":
            return TRACE
        return logging.getLevelName(self.level)


class ClientConfig(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "default_url": "http://127.0.0.1:8082/api",
            "timeout": 10,
            "api_key_header": "X-API-KEY",
            "logging": {"level": "INFO"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    user_agent: str = Field(default_factory=get_default_user_agent, min_length=1)
    """User-Agent header sent with every request."""

    timeout: float = Field(default=30.0, gt=0)
    """Transport timeout in seconds."""

    verify_tls: bool = True
    """Verify TLS certificates (only relevant to transports that use TLS)."""

    api_key_header: str = DEFAULT_API_KEY_HEADER
    """Header name used for discovered API keys."""

    api_key_env: str = DEFAULT_API_KEY_ENV
    """Environment variable checked for an API key."""

    default_url: str | None = None
    """Endpoint used when the caller gives none."""

    logging: LoggingConfig = LoggingConfig()

    @field_validator("user_agent")
    @classmethod
    def single_line_user_agent(cls, v: str) -> str:
        if "\r" in v or "\n" in v:
            raise ValueError("user_agent must be a single line")
        if not v.isascii():
            raise ValueError("user_agent must be ASCII")
        return v
