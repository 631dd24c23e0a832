"""jsonrpc_http: JSON-RPC 2.0 client over HTTP.

Example usage:
    from jsonrpc_http import ApiKey, Dispatcher, Request, ServiceAddress

    dispatcher = Dispatcher()
    doc = await dispatcher.send(
        Request("add", [10.5, 20.5], 0),
        ServiceAddress("127.0.0.1:8082", "/api"),
        api_key=ApiKey("X-API-KEY", "abcdef123456"),
    )
    if doc.is_error:
        ...
    else:
        print(doc["result"])
"""

from jsonrpc_http.client import RpcClient, result_of
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
from jsonrpc_http.rpc import (
    ApiKey,
    Dispatcher,
    HttpxTransport,
    Identifier,
    NumericId,
    Params,
    Request,
    ResponseDocument,
    ServiceAddress,
    StringId,
    Transport,
    TransportResponse,
)

__all__ = [
    "ApiKey",
    "Dispatcher",
    "HttpxTransport",
    "Identifier",
    "NumericId",
    "Params",
    "Request",
    "ResponseDocument",
    "RpcClient",
    "ServiceAddress",
    "StringId",
    "Transport",
    "TransportResponse",
    "result_of",
    # Errors
    "RpcClientError",
    "InvalidRequestError",
    "EncodingError",
    "TransportError",
    "MalformedResponseError",
    "ConfigError",
    "RpcResponseError",
    "ResponseIdMismatchError",
]
