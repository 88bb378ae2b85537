import httpx
import pytest

from tests.helpers import API_KEY, json_response

QUOTE_PAYLOAD = {
    "c": 189.5,
    "d": 1.25,
    "dp": 0.664,
    "h": 190.1,
    "l": 187.3,
    "o": 188.0,
    "pc": 188.25,
    "t": 1700000000,
}


def test_quote_uppercases_symbol(make_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=QUOTE_PAYLOAD)

    client = make_client(handler)
    resp = client.get("/api/quote/aApl")

    assert resp.status_code == 200
    body = resp.json()
    assert body["symbol"] == "AAPL"
    assert body["c"] == 189.5
    assert body["pc"] == 188.25
    assert "t" not in body
    assert seen["path"] == "/api/v1/quote"
    assert seen["params"] == {"symbol": "AAPL", "token": API_KEY}


def test_quote_overwrites_upstream_symbol(make_client):
    client = make_client(json_response(200, {**QUOTE_PAYLOAD, "symbol": "WRONG"}))
    resp = client.get("/api/quote/msft")
    assert resp.json()["symbol"] == "MSFT"


def test_quote_null_fields_default_to_zero(make_client):
    client = make_client(json_response(200, {"c": 0, "d": None, "dp": None}))
    body = client.get("/api/quote/zzzz").json()
    assert body["d"] == 0
    assert body["dp"] == 0
    assert body["h"] == 0


@pytest.mark.parametrize(
    ("status_code", "message"),
    [
        (401, "API key invalid or expired"),
        (403, "API access forbidden - check your plan limits"),
        (429, "Rate limit exceeded"),
    ],
)
def test_quote_classified_errors(make_client, status_code, message):
    client = make_client(json_response(status_code, {"error": "upstream"}))
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == status_code
    assert resp.json() == {"error": "API Error", "message": message, "code": status_code}


def test_quote_unclassified_status_is_surfaced(make_client):
    client = make_client(json_response(503, {}))
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 503
    assert resp.json() == {
        "error": "API Error",
        "message": "Failed to fetch data from Finnhub",
        "code": 503,
    }


def test_quote_non_error_status_becomes_bad_gateway(make_client):
    client = make_client(lambda request: httpx.Response(204))
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 502
    assert resp.json()["code"] == 502


@pytest.mark.parametrize("content", [b"{not json", b"", b"[1, 2, 3]"])
def test_quote_malformed_body(make_client, content):
    client = make_client(lambda request: httpx.Response(200, content=content))
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 500
    assert resp.json() == {"error": "API Error", "message": "Failed to parse data", "code": 500}


def test_quote_transport_failure(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to fetch data"


def test_quote_timeout(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to fetch data"


def test_quote_only_uppercases_symbol(make_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["symbol"] = request.url.params["symbol"]
        return httpx.Response(200, json=QUOTE_PAYLOAD)

    resp = make_client(handler).get("/api/quote/%20aapl")

    assert resp.status_code == 200
    assert resp.json()["symbol"] == " AAPL"
    assert seen["symbol"] == " AAPL"


def test_quote_numeric_string_is_parse_failure(make_client):
    client = make_client(json_response(200, {**QUOTE_PAYLOAD, "c": "189.5"}))
    resp = client.get("/api/quote/AAPL")

    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to parse data"
