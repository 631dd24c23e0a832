"""JSON-RPC 2.0 over HTTP: envelope model, transport and dispatcher.

Example usage:
    from jsonrpc_http.rpc import Dispatcher, Request, ServiceAddress

    doc = await Dispatcher().send(
        Request("add", [10.5, 20.5], 0),
        ServiceAddress("127.0.0.1:8082", "/api"),
    )
"""

from jsonrpc_http.rpc.auth import (
    DEFAULT_API_KEY_ENV,
    DEFAULT_API_KEY_HEADER,
    ApiKey,
    discover_api_key,
)
from jsonrpc_http.rpc.diagnostics import (
    TRACE,
    DiagnosticSink,
    LoggingSink,
    NullSink,
    RecordingSink,
)
from jsonrpc_http.rpc.dispatcher import Dispatcher, build_headers
from jsonrpc_http.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    describe_error,
    parse_response,
    serialize_request,
)
from jsonrpc_http.rpc.transport import HttpxTransport, Transport, TransportResponse
from jsonrpc_http.rpc.types import (
    Identifier,
    NumericId,
    Params,
    Request,
    RequestId,
    ResponseDocument,
    ServiceAddress,
    StringId,
)

__all__ = [
    # Types
    "Identifier",
    "NumericId",
    "StringId",
    "RequestId",
    "Params",
    "Request",
    "ResponseDocument",
    "ServiceAddress",
    # Protocol
    "serialize_request",
    "parse_response",
    "describe_error",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    # Authentication
    "ApiKey",
    "DEFAULT_API_KEY_HEADER",
    "DEFAULT_API_KEY_ENV",
    "discover_api_key",
    # Diagnostics
    "TRACE",
    "DiagnosticSink",
    "LoggingSink",
    "NullSink",
    "RecordingSink",
    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    # Dispatcher
    "Dispatcher",
    "build_headers",
]
