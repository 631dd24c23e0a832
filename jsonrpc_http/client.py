"""High-level JSON-RPC client bound to one endpoint."""

import logging
from typing import Any

from jsonrpc_http.config.schema import ClientConfig
from jsonrpc_http.core.errors import (
    InvalidRequestError,
    ResponseIdMismatchError,
    RpcResponseError,
)
from jsonrpc_http.rpc.auth import ApiKey
from jsonrpc_http.rpc.diagnostics import DiagnosticSink
from jsonrpc_http.rpc.dispatcher import Dispatcher
from jsonrpc_http.rpc.transport import HttpxTransport, Transport
from jsonrpc_http.rpc.types import Identifier, Request, ResponseDocument, ServiceAddress

logger = logging.getLogger(__name__)


def result_of(doc: ResponseDocument, expected_id: Any = None) -> Any:
    """Extract the result from a response or raise on error.

    Args:
        doc: A document returned by send().
        expected_id: If given, the id that was sent; a different response id
            raises ResponseIdMismatchError.

    Returns:
        The ``result`` member (None if the server omitted it).

    Raises:
        RpcResponseError: If the response contains an error object.
        ResponseIdMismatchError: If expected_id is given and does not match.
    """
    error = doc.get("error")
    if error is not None:
        if isinstance(error, dict):
            code = error.get("code", -1)
            message = error.get("message", "Unknown error")
            data = error.get("data")
        else:
            code, message, data = -1, str(error), None
        logger.warning("RPC error %s: %s", code, message)
        raise RpcResponseError(code, message, data)

    if expected_id is not None and not doc.id_matches(expected_id):
        expected = Identifier.of(expected_id).to_json()
        raise ResponseIdMismatchError(expected, doc.get("id"))

    return doc.get("result")


class RpcClient:
    """JSON-RPC client for one service address.

    Usage:
        client = RpcClient("http://127.0.0.1:8082/api", api_key=ApiKey("X-API-KEY", "abc"))
        doc = await client.call("add", [10.5, 20.5], id=0)
        print(client.result_of(doc, expected_id=0))

    Ids are always chosen by the caller; the client never generates one.
    """

    def __init__(
        self,
        address: ServiceAddress | str | None = None,
        api_key: ApiKey | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            address: Target endpoint or http:// URL. Falls back to
                config.default_url.
            api_key: Optional key sent as an extra header on every call.
            config: Client settings. Defaults to ClientConfig().
            transport: Transport override (default HttpxTransport from config).
            diagnostics: Diagnostic sink override.

        Raises:
            InvalidRequestError: If no address is given and none is configured,
                or the URL is not a valid http:// URL.
        """
        self._config = config or ClientConfig()

        if address is None:
            address = self._config.default_url
        if address is None:
            raise InvalidRequestError("No service address given and no default_url configured")
        if isinstance(address, str):
            address = ServiceAddress.from_url(address)

        self._address = address
        self._api_key = api_key
        self._dispatcher = Dispatcher(
            transport=transport
            or HttpxTransport(timeout=self._config.timeout, verify=self._config.verify_tls),
            diagnostics=diagnostics,
            user_agent=self._config.user_agent,
        )
        logger.debug("RpcClient initialized: url=%s", address.url)

    @property
    def address(self) -> ServiceAddress:
        return self._address

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def call(self, method: str, params: Any, id: Any) -> ResponseDocument:
        """Build a request and send it to the bound address."""
        request = Request(method, params, id)
        return await self._dispatcher.send(request, self._address, self._api_key)

    def call_blocking(self, method: str, params: Any, id: Any) -> ResponseDocument:
        """Synchronous variant of call() for code without an event loop."""
        request = Request(method, params, id)
        return self._dispatcher.send_blocking(request, self._address, self._api_key)

    result_of = staticmethod(result_of)
