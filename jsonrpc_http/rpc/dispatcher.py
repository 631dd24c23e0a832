"""JSON-RPC request dispatcher: one HTTP round trip per send.

Each send is independent: serialize, POST, wait for the whole body, parse,
return. Nothing is retained between calls, so one Dispatcher can serve many
concurrent tasks.

    dispatcher = Dispatcher()
    doc = await dispatcher.send(
        Request("add", [10.5, 20.5], 0),
        ServiceAddress("127.0.0.1:8082", "/api"),
        api_key=ApiKey("X-API-KEY", "abcdef123456"),
    )
    doc["result"]  # 31.0
"""

from __future__ import annotations

import asyncio
import logging

from jsonrpc_http.core.constants import get_default_user_agent
from jsonrpc_http.core.errors import (
    InvalidRequestError,
    MalformedResponseError,
    TransportError,
)
from jsonrpc_http.rpc.auth import ApiKey
from jsonrpc_http.rpc.diagnostics import (
    INFO,
    TRACE,
    DiagnosticSink,
    LoggingSink,
    safe_emit,
)
from jsonrpc_http.rpc.protocol import parse_response, serialize_request
from jsonrpc_http.rpc.transport import HttpxTransport, Transport
from jsonrpc_http.rpc.types import Request, ResponseDocument, ServiceAddress

logger = logging.getLogger(__name__)

HTTP_METHOD = "POST"
REDACTED = "***"


def build_headers(
    body: bytes, user_agent: str, api_key: ApiKey | None = None
) -> dict[str, str]:
    """Build the HTTP headers for a serialized request.

    A key named like one of the standard headers replaces it, so the request
    still carries exactly one value for that name.
    """
    headers = {
        "Content-Type": "application/json",
        "User-Agent": user_agent,
        "Accept": "application/json",
        "Content-Length": str(len(body)),
    }
    if api_key is not None:
        for existing in list(headers):
            if existing.lower() == api_key.name.lower():
                del headers[existing]
        headers[api_key.name] = api_key.value
    return headers


def render_request(
    address: ServiceAddress,
    headers: dict[str, str],
    body: bytes,
    api_key: ApiKey | None = None,
) -> str:
    """Render a request as HTTP/1.1 text for trace output, key redacted."""
    lines = [f"{HTTP_METHOD} {address.path} HTTP/1.1", f"Host: {address.host_port}"]
    for name, value in headers.items():
        if api_key is not None and name == api_key.name:
            value = REDACTED
        lines.append(f"{name}: {value}")
    lines.append("")
    lines.append(body.decode("utf-8", errors="replace"))
    return "\r\n".join(lines)


class Dispatcher:
    """Sends JSON-RPC requests over HTTP and returns parsed documents.

    Attributes:
        transport: Byte channel used for the exchange.
        diagnostics: Sink receiving trace/info diagnostics.
        user_agent: Value of the User-Agent header.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        diagnostics: DiagnosticSink | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.transport = transport if transport is not None else HttpxTransport()
        self.diagnostics = diagnostics if diagnostics is not None else LoggingSink()
        self.user_agent = user_agent or get_default_user_agent()
        if not self.user_agent.isascii() or any(c in self.user_agent for c in "\r\n"):
            raise InvalidRequestError(f"Invalid User-Agent: {self.user_agent!r}")

    def _emit(self, level: int, message: str) -> None:
        safe_emit(self.diagnostics, level, message)

    async def send(
        self,
        request: Request,
        address: ServiceAddress,
        api_key: ApiKey | None = None,
    ) -> ResponseDocument:
        """Send one request and return the parsed response document.

        The document is returned whatever it contains; checking result/error
        and the id is up to the caller.

        Args:
            request: The envelope to send.
            address: Target endpoint.
            api_key: Optional key attached as an extra header.

        Returns:
            The parsed response body.

        Raises:
            EncodingError: If the request cannot be serialized.
            TransportError: If the HTTP exchange fails.
            MalformedResponseError: If the body is not valid JSON.
        """
        self._emit(INFO, f"Building request: method={request.method} id={request.id.to_json()!r}")
        body = serialize_request(request)
        headers = build_headers(body, self.user_agent, api_key)
        url = address.url

        self._emit(TRACE, render_request(address, headers, body, api_key))
        self._emit(INFO, f"Sending request to {url}")

        try:
            response = await self.transport.transmit(HTTP_METHOD, url, headers, body)
        except TransportError:
            raise
        except Exception as e:
            # Custom transports may leak their own exception types
            raise TransportError(f"Transport failed: {e}", cause=e) from e

        self._emit(INFO, f"Response received: HTTP {response.status}")
        if not 200 <= response.status < 300:
            logger.info("Non-2xx status %d from %s", response.status, url)

        self._emit(TRACE, "Reading response body")
        self._emit(TRACE, f"Read {len(response.body)} bytes")

        self._emit(TRACE, "Parsing response")
        try:
            return parse_response(response.body)
        except MalformedResponseError as e:
            e.status = response.status
            raise

    def send_blocking(
        self,
        request: Request,
        address: ServiceAddress,
        api_key: ApiKey | None = None,
    ) -> ResponseDocument:
        """Run send() to completion on a fresh event loop.

        Raises:
            RuntimeError: If called from inside a running event loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.send(request, address, api_key))
        raise RuntimeError("send_blocking() cannot run inside an event loop; await send()")
