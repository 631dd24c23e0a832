"""JSON-RPC 2.0 envelope types for the HTTP client."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union
from urllib.parse import urlsplit

from jsonrpc_http.core.constants import JSONRPC_VERSION
from jsonrpc_http.core.errors import InvalidRequestError


# === Identifier ===


@dataclass(frozen=True)
class NumericId:
    """Integer correlation id, serialized as a JSON number."""

    value: int

    def to_json(self) -> int:
        return self.value

    def matches(self, raw: Any) -> bool:
        """Check a raw response id against this one (kind and value)."""
        return type(raw) is int and raw == self.value


@dataclass(frozen=True)
class StringId:
    """String correlation id, serialized as a JSON string."""

    value: str

    def to_json(self) -> str:
        return self.value

    def matches(self, raw: Any) -> bool:
        """Check a raw response id against this one (kind and value)."""
        return isinstance(raw, str) and raw == self.value


class Identifier:
    """Namespace for building the two id variants from raw values."""

    @staticmethod
    def of(raw: Any) -> NumericId | StringId:
        """Wrap a raw int or str, keeping its kind.

        Raises:
            InvalidRequestError: For bool, float, None or any other type.
        """
        if isinstance(raw, (NumericId, StringId)):
            return raw
        # bool is an int subclass but is not a valid JSON-RPC id
        if type(raw) is int:
            return NumericId(raw)
        if isinstance(raw, str):
            return StringId(raw)
        raise InvalidRequestError(
            f"id must be an integer or string, got: {type(raw).__name__}"
        )


RequestId = Union[NumericId, StringId]


# === Params ===


@dataclass(frozen=True)
class Params:
    """Positional (or named) parameters for a request.

    The usual shape is a list of numbers, e.g. ``Params([10.5, 20.5])``. Any
    JSON-serializable value is accepted: tuples become arrays, dicts become
    named params, scalars are sent as-is.
    """

    value: Any = field(default_factory=list)

    # Unhashable: values are usually lists or dicts
    __hash__ = None  # type: ignore[assignment]

    def to_json(self) -> Any:
        if isinstance(self.value, tuple):
            return list(self.value)
        return self.value

    def __len__(self) -> int:
        if isinstance(self.value, (list, tuple, dict)):
            return len(self.value)
        return 1


# === Request ===


@dataclass(frozen=True, init=False)
class Request:
    """JSON-RPC 2.0 request envelope.

    Attributes:
        method: Name of the remote method. Must be a non-empty string; any
            further validation is left to the server.
        params: Parameters for the method.
        id: Correlation id, numeric or string. Set once here.
        jsonrpc: Always "2.0".
    """

    method: str
    params: Params
    id: RequestId
    jsonrpc: str

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, method: str, params: Any, id: Any) -> None:
        if not isinstance(method, str) or not method:
            raise InvalidRequestError("method must be a non-empty string")
        if not isinstance(params, Params):
            params = Params(params)
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "id", Identifier.of(id))
        object.__setattr__(self, "jsonrpc", JSONRPC_VERSION)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire-shaped dict with all four fields."""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params.to_json(),
            "id": self.id.to_json(),
        }


# === Response ===


_MISSING = object()


class ResponseDocument(Mapping[str, Any]):
    """Parsed response body with key access and no fixed schema.

    JSON-RPC answers carry either ``result`` or ``error`` plus ``id``; the
    server decides which. Callers branch on what is present:

        doc = await dispatcher.send(request, address)
        if doc.is_error:
            print(doc["error"]["message"])
        else:
            print(doc["result"])

    A body that is not a JSON object still parses; it behaves as an empty
    mapping and the value is available on ``raw``.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Any) -> None:
        self._raw = raw

    @property
    def raw(self) -> Any:
        """The full parsed JSON value."""
        return self._raw

    def _fields(self) -> dict[str, Any]:
        return self._raw if isinstance(self._raw, dict) else {}

    def __getitem__(self, key: str) -> Any:
        fields = self._fields()
        value = fields.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields())

    def __len__(self) -> int:
        return len(self._fields())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResponseDocument):
            return self._raw == other._raw
        return self._raw == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResponseDocument({self._raw!r})"

    @property
    def is_success(self) -> bool:
        """True if a result is present and no error is."""
        fields = self._fields()
        return "result" in fields and fields.get("error") is None

    @property
    def is_error(self) -> bool:
        """True if the server sent a non-null error object."""
        return self._fields().get("error") is not None

    def id_matches(self, identifier: Any) -> bool:
        """Check the response id against the one that was sent."""
        return Identifier.of(identifier).matches(self._fields().get("id"))


# === Addressing ===


@dataclass(frozen=True)
class ServiceAddress:
    """Remote endpoint: ``host:port`` plus a URL path.

    Example:
        ServiceAddress("127.0.0.1:8082", "/api").url
        # http://127.0.0.1:8082/api
    """

    host_port: str
    path: str = "/"

    def __post_init__(self) -> None:
        if not self.host_port or any(c in self.host_port for c in "/ \r\n"):
            raise InvalidRequestError(f"Invalid host:port: {self.host_port!r}")
        try:
            parts = urlsplit(f"//{self.host_port}")
            parts.port  # raises ValueError for a non-numeric or out-of-range port
        except ValueError as e:
            raise InvalidRequestError(f"Invalid host:port: {self.host_port!r} ({e})") from e
        if not parts.hostname:
            raise InvalidRequestError(f"Invalid host:port: {self.host_port!r} (no host)")
        path = self.path or "/"
        if any(c in path for c in " \r\n"):
            raise InvalidRequestError(f"Invalid path: {self.path!r}")
        if not path.startswith("/"):
            path = "/" + path
        object.__setattr__(self, "path", path)

    @property
    def url(self) -> str:
        return f"http://{self.host_port}{self.path}"

    @classmethod
    def from_url(cls, url: str) -> ServiceAddress:
        """Parse ``http://host:port/path`` into an address.

        Raises:
            InvalidRequestError: If the scheme is not http or the host is missing.
        """
        parts = urlsplit(url)
        if parts.scheme.lower() != "http":
            raise InvalidRequestError(
                f"Only http:// URLs are supported, got: {url!r}"
            )
        if not parts.netloc or not parts.hostname:
            raise InvalidRequestError(f"URL has no host: {url!r}")
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return cls(host_port=parts.netloc, path=path)

    def __str__(self) -> str:
        return self.url
