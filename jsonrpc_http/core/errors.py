"""Typed exception hierarchy for jsonrpc_http."""

from __future__ import annotations

from typing import Any


class RpcClientError(Exception):
    """Base class for all jsonrpc_http errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(RpcClientError):
    """Raised for malformed caller input before any network activity."""


class EncodingError(RpcClientError):
    """Raised when a request envelope cannot be serialized to JSON."""


class TransportError(RpcClientError):
    """Raised when the HTTP exchange cannot be established or completed.

    Connection refused, timeouts, broken pipes and TLS failures all collapse
    into this one kind. The underlying exception is kept on ``cause``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class MalformedResponseError(RpcClientError):
    """Raised when the response body is not valid JSON."""

    def __init__(
        self, message: str, status: int | None = None, body: bytes = b""
    ) -> None:
        self.status = status
        self.body = body
        super().__init__(message)


class ConfigError(RpcClientError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


# === Caller-side response errors ===
# Never raised by Dispatcher.send; only by RpcClient.result_of.


class RpcResponseError(RpcClientError):
    """The server answered with a JSON-RPC ``error`` object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.data = data
        super().__init__(f"RPC error {code}: {message}")
        # Keep the server's own message rather than the formatted one
        self.message = message


class ResponseIdMismatchError(RpcClientError):
    """The response id does not match the id that was sent."""

    def __init__(self, expected: Any, received: Any) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Response id mismatch: expected {expected!r}, got {received!r}"
        )
