"""Unit tests for jsonrpc_http.rpc.types module."""

import pytest

from jsonrpc_http.core.errors import InvalidRequestError
from jsonrpc_http.rpc.types import (
    Identifier,
    NumericId,
    Params,
    Request,
    ResponseDocument,
    ServiceAddress,
    StringId,
)


class TestIdentifier:
    """Tests for the NumericId/StringId union."""

    def test_int_becomes_numeric_id(self):
        """Raw int is wrapped as NumericId."""
        assert Identifier.of(7) == NumericId(7)

    def test_str_becomes_string_id(self):
        """Raw str is wrapped as StringId, even if it looks numeric."""
        assert Identifier.of("0") == StringId("0")

    def test_existing_identifier_passes_through(self):
        """Already-wrapped ids are returned unchanged."""
        ident = StringId("abc")
        assert Identifier.of(ident) is ident

    @pytest.mark.parametrize("raw", [True, 1.5, None, [1], {"id": 1}])
    def test_rejects_other_types(self, raw):
        """bool, float, None and containers are not valid ids."""
        with pytest.raises(InvalidRequestError):
            Identifier.of(raw)

    def test_numeric_does_not_match_string(self):
        """NumericId(0) never matches the string "0"."""
        assert NumericId(0).matches(0)
        assert not NumericId(0).matches("0")

    def test_string_does_not_match_number(self):
        """StringId("0") never matches the number 0."""
        assert StringId("0").matches("0")
        assert not StringId("0").matches(0)

    def test_bool_never_matches_numeric(self):
        """True is not the same id as 1."""
        assert not NumericId(1).matches(True)

    def test_to_json_keeps_kind(self):
        """to_json returns the raw value in its own kind."""
        assert NumericId(5).to_json() == 5
        assert StringId("5").to_json() == "5"


class TestParams:
    """Tests for Params wrapper."""

    def test_tuple_becomes_list(self):
        """Tuples serialize as JSON arrays."""
        assert Params((1.0, 2.0)).to_json() == [1.0, 2.0]

    def test_scalar_params(self):
        """Scalars are kept as-is."""
        assert Params("hello").to_json() == "hello"
        assert Params(3.14).to_json() == 3.14

    def test_len_of_list(self):
        """len() reports the number of positional params."""
        assert len(Params([10.5, 20.5])) == 2

    def test_default_is_empty_list(self):
        """Params() means no arguments."""
        assert Params().to_json() == []


    def test_unhashable(self):
        """Params may hold mutable JSON containers."""
        with pytest.raises(TypeError):
            hash(Params([1, 2]))


class TestRequest:
    """Tests for Request envelope construction."""

    def test_jsonrpc_is_fixed(self):
        """jsonrpc is always 2.0."""
        request = Request("add", [1, 2], 0)
        assert request.jsonrpc == "2.0"

    def test_wraps_raw_params_and_id(self):
        """Raw params and ids are wrapped on construction."""
        request = Request("add", [10.5, 20.5], 0)
        assert request.params == Params([10.5, 20.5])
        assert request.id == NumericId(0)

    def test_accepts_params_instance(self):
        """An existing Params object is used directly."""
        params = Params([1])
        assert Request("m", params, "x").params is params

    def test_empty_method_rejected(self):
        """Empty method name raises InvalidRequestError."""
        with pytest.raises(InvalidRequestError, match="method"):
            Request("", [], 0)

    def test_non_string_method_rejected(self):
        """Non-string method raises InvalidRequestError."""
        with pytest.raises(InvalidRequestError):
            Request(None, [], 0)  # type: ignore[arg-type]

    def test_any_non_empty_method_accepted(self):
        """Semantic validation is left to the server."""
        assert Request("rpc.weird/name", [], 1).method == "rpc.weird/name"

    def test_id_is_immutable(self):
        """id cannot be reassigned after construction."""
        request = Request("add", [], 0)
        with pytest.raises(AttributeError):
            request.id = NumericId(1)  # type: ignore[misc]

    def test_unhashable(self):
        """Requests are compared by value but cannot be hashed."""
        request = Request("add", [1, 2], 0)
        assert request == Request("add", [1, 2], 0)
        with pytest.raises(TypeError):
            hash(request)

    def test_to_dict_has_all_four_fields(self):
        """to_dict always includes jsonrpc, method, params and id."""
        data = Request("ping", [], "a").to_dict()
        assert data == {"jsonrpc": "2.0", "method": "ping", "params": [], "id": "a"}


class TestResponseDocument:
    """Tests for ResponseDocument key access."""

    def test_success_document(self):
        """Result documents expose result and id."""
        doc = ResponseDocument({"jsonrpc": "2.0", "result": 31.0, "id": 0})
        assert doc["result"] == 31.0
        assert doc.get("error") is None
        assert doc.is_success
        assert not doc.is_error

    def test_error_document(self):
        """Error documents expose the error object."""
        doc = ResponseDocument(
            {"jsonrpc": "2.0", "error": {"code": -32601, "message": "nope"}, "id": 1}
        )
        assert doc["error"]["code"] == -32601
        assert doc.is_error
        assert not doc.is_success

    def test_missing_key_raises_key_error(self):
        """Indexing an absent key raises KeyError."""
        doc = ResponseDocument({"id": 1})
        with pytest.raises(KeyError):
            doc["result"]

    def test_null_id_is_present(self):
        """A null id is a present key with value None."""
        doc = ResponseDocument({"jsonrpc": "2.0", "error": {"code": -32700}, "id": None})
        assert "id" in doc
        assert doc["id"] is None

    def test_non_object_body(self):
        """Non-object JSON parses but has no keys."""
        doc = ResponseDocument([1, 2, 3])
        assert doc.raw == [1, 2, 3]
        assert len(doc) == 0
        assert doc.get("result") is None
        with pytest.raises(KeyError):
            doc["result"]

    def test_unexpected_shape_is_tolerated(self):
        """Both result and error present is not rejected."""
        doc = ResponseDocument({"result": 1, "error": {"code": 1}, "id": 1})
        assert doc["result"] == 1
        assert doc.is_error

    def test_id_matches(self):
        """id_matches compares kind and value."""
        doc = ResponseDocument({"result": 1, "id": "0"})
        assert doc.id_matches("0")
        assert doc.id_matches(StringId("0"))
        assert not doc.id_matches(0)

    def test_equality_with_dict(self):
        """Documents compare equal to their raw value."""
        assert ResponseDocument({"id": 1}) == {"id": 1}
        assert ResponseDocument({"id": 1}) == ResponseDocument({"id": 1})

    def test_iteration_yields_keys(self):
        """Iterating gives the object keys."""
        doc = ResponseDocument({"jsonrpc": "2.0", "result": None, "id": 3})
        assert set(doc) == {"jsonrpc", "result", "id"}


class TestServiceAddress:
    """Tests for ServiceAddress."""

    def test_url(self):
        """url renders http://host:port/path."""
        address = ServiceAddress("127.0.0.1:8082", "/api")
        assert address.url == "http://127.0.0.1:8082/api"

    def test_default_path(self):
        """Path defaults to /."""
        assert ServiceAddress("localhost:80").url == "http://localhost:80/"

    def test_path_gets_leading_slash(self):
        """Paths without a leading slash are normalized."""
        assert ServiceAddress("h:1", "api").path == "/api"

    def test_is_frozen(self):
        """Addresses are immutable."""
        address = ServiceAddress("h:1", "/")
        with pytest.raises(AttributeError):
            address.path = "/other"  # type: ignore[misc]

    @pytest.mark.parametrize("host_port", ["", "host/x", "ho st:1", "h:1\r\n"])
    def test_rejects_bad_host_port(self, host_port):
        """host_port must be a bare host[:port]."""
        with pytest.raises(InvalidRequestError):
            ServiceAddress(host_port, "/")

    @pytest.mark.parametrize("host_port", ["127.0.0.1:notaport", "h:99999", ":8080"])
    def test_rejects_bad_port_or_missing_host(self, host_port):
        """Unusable ports and empty hosts fail before any request is made."""
        with pytest.raises(InvalidRequestError):
            ServiceAddress(host_port, "/api")

    def test_accepts_ipv6_and_portless_hosts(self):
        """Bracketed IPv6 literals and bare hosts are valid."""
        assert ServiceAddress("[::1]:8082", "/api").url == "http://[::1]:8082/api"
        assert ServiceAddress("localhost").url == "http://localhost/"

    def test_from_url(self):
        """from_url splits host:port and path."""
        address = ServiceAddress.from_url("http://localhost:8082/math-api")
        assert address == ServiceAddress("localhost:8082", "/math-api")

    def test_from_url_without_path(self):
        """Missing path becomes /."""
        assert ServiceAddress.from_url("http://localhost:8082").path == "/"

    def test_from_url_keeps_query(self):
        """Query strings stay part of the path."""
        assert ServiceAddress.from_url("http://h:1/rpc?v=2").path == "/rpc?v=2"

    @pytest.mark.parametrize("url", ["https://h:1/", "ftp://h/", "h:1/api", "http:///path"])
    def test_from_url_rejects(self, url):
        """Only http:// URLs with a host are accepted."""
        with pytest.raises(InvalidRequestError):
            ServiceAddress.from_url(url)
