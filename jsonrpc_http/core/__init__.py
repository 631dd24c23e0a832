"""Core errors and constants shared across jsonrpc_http."""

from jsonrpc_http.core.errors import (
    ConfigError,
    EncodingError,
    InvalidRequestError,
    MalformedResponseError,
    ResponseIdMismatchError,
    RpcClientError,
    RpcResponseError,
    TransportError,
)

__all__ = [
    "RpcClientError",
    "InvalidRequestError",
    "EncodingError",
    "TransportError",
    "MalformedResponseError",
    "ConfigError",
    "RpcResponseError",
    "ResponseIdMismatchError",
]
