"""HTTP transport layer.

Provides the byte-level channel the dispatcher sends requests through:
- Transport: abstract interface, ``transmit(method, url, headers, body)``
- HttpxTransport: one httpx.AsyncClient per call, no connection reuse

Framing (Content-Length, chunked encoding), TLS, redirects and timeouts are
the transport's business. Every failure surfaces as TransportError with the
underlying exception attached.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from jsonrpc_http.core.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0

# Headers httpx computes itself from the body; passing them through would
# duplicate or contradict the framing it writes.
_FRAMING_HEADERS = frozenset({"content-length", "transfer-encoding"})


@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and complete body of one HTTP exchange."""

    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


class Transport(ABC):
    """Abstract byte channel for one HTTP request/response."""

    @abstractmethod
    async def transmit(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        """Send one request and wait for the full response.

        Raises:
            TransportError: On any failure to complete the exchange.
        """
        ...


class HttpxTransport(Transport):
    """Transport backed by httpx.

    Attributes:
        timeout: Per-request timeout in seconds (connect, read, write, pool).
        verify: TLS verification setting passed to httpx.
        follow_redirects: Whether httpx follows 3xx responses.
    """

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        verify: bool = True,
        follow_redirects: bool = False,
        mock_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HttpxTransport.

        Args:
            timeout: Request timeout in seconds, or None for no timeout.
            verify: Verify TLS certificates.
            follow_redirects: Follow HTTP redirects.
            mock_transport: Optional httpx transport (e.g. httpx.MockTransport)
                used instead of the network.
        """
        self.timeout = timeout
        self.verify = verify
        self.follow_redirects = follow_redirects
        self._mock_transport = mock_transport

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            verify=self.verify,
            follow_redirects=self.follow_redirects,
            transport=self._mock_transport,
        )

    async def transmit(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        send_headers = {
            k: v for k, v in headers.items() if k.lower() not in _FRAMING_HEADERS
        }
        try:
            async with self._new_client() as client:
                response = await client.request(
                    method, url, headers=send_headers, content=body
                )
                content = await response.aread()
        except httpx.TimeoutException as e:
            logger.debug("HTTP %s %s timed out after %ss", method, url, self.timeout)
            raise TransportError(f"Request timed out: {e}", cause=e) from e
        except httpx.ConnectError as e:
            logger.debug("Connection to %s failed: %s", url, e)
            raise TransportError(f"Connection failed: {e}", cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e
        except OSError as e:
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e

        return TransportResponse(
            status=response.status_code,
            body=content,
            headers=dict(response.headers),
        )
