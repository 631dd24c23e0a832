"""JSON-RPC 2.0 serialization and parsing for the HTTP client."""

import json
from typing import Any

from jsonrpc_http.core.errors import EncodingError, MalformedResponseError
from jsonrpc_http.rpc.types import Request, ResponseDocument

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Server error range: -32000 to -32099

_ERROR_NAMES = {
    PARSE_ERROR: "Parse error",
    INVALID_REQUEST: "Invalid Request",
    METHOD_NOT_FOUND: "Method not found",
    INVALID_PARAMS: "Invalid params",
    INTERNAL_ERROR: "Internal error",
}


def serialize_request(request: Request) -> bytes:
    """Serialize a Request to compact UTF-8 JSON.

    All four fields (jsonrpc, method, params, id) are always present. Floats
    use Python's shortest round-trip repr, so IEEE-754 doubles survive intact.

    Args:
        request: The Request to serialize.

    Returns:
        The request body as bytes.

    Raises:
        EncodingError: If params hold a value JSON cannot represent
            (non-finite floats, arbitrary objects).
    """
    try:
        text = json.dumps(
            request.to_dict(),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Cannot encode request {request.method!r}: {e}") from e
    return text.encode("utf-8")


def parse_response(body: bytes | str) -> ResponseDocument:
    """Parse a response body into a ResponseDocument.

    Any well-formed JSON is accepted; result/error/id are not validated here.

    Args:
        body: Raw response bytes (UTF-8, BOM tolerated) or already-decoded text.

    Returns:
        The parsed document.

    Raises:
        MalformedResponseError: If the body is not valid UTF-8 JSON.
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedResponseError(f"Response is not UTF-8: {e}", body=body) from e
    else:
        text = body

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raw = body if isinstance(body, bytes) else body.encode("utf-8", "replace")
        raise MalformedResponseError(f"Invalid JSON: {e}", body=raw) from e

    return ResponseDocument(data)


def describe_error(error: Any) -> str:
    """Render a server error object for humans.

    Args:
        error: The ``error`` member of a response (normally a dict with
            ``code`` and ``message``).

    Returns:
        A string like "RPC error -32601: Method not found".
    """
    if not isinstance(error, dict):
        return f"RPC error: {error!r}"
    code = error.get("code", -1)
    message = error.get("message") or _ERROR_NAMES.get(code, "Unknown error")
    return f"RPC error {code}: {message}"
