# tests/test_price_api.py
import pytest
import requests

from cryptoconv.services.errors import FetchError
from cryptoconv.services.price_api import PriceFetcher, extract_usd_price
from tests.conftest import FakeResponse


@pytest.mark.parametrize("body, expected", [
    ({"usd_price": 1.5}, 1.5),
    ({"data": {"usd_price": 2}}, 2.0),
    ({"data": {"price": {"usd_price": 0.03}}}, 0.03),
    ({"data": 4.25}, 4.25),
    ({"usd_price": 1.0, "data": {"usd_price": 9.0}}, 1.0),
    ({"usd_price": True, "data": {"usd_price": 3.0}}, 3.0),
    ({"usd_price": "1.5"}, None),
    ({"data": {"price": {}}}, None),
    ([], None),
    (None, None),
])
def test_extract_usd_price(body, expected):
    assert extract_usd_price(body) == expected


def test_fetch_builds_url_and_caches(price_api_stub, fetcher, cache):
    price_api_stub.set_price("bitcoin", 65000.0, shape="nested")
    assert fetcher.price_url("bitcoin") == "https://prices.test/price/v1/token-price/bitcoin"

    assert fetcher.fetch("bitcoin") == 65000.0
    assert fetcher.fetch("bitcoin") == 65000.0
    assert price_api_stub.calls == ["bitcoin"]
    assert cache.get("bitcoin") == 65000.0


def test_fetch_goes_back_to_api_after_expiry(price_api_stub, fetcher, clock):
    price_api_stub.set_price("dogecoin", 0.1)
    fetcher.fetch("dogecoin")
    clock.advance(61)
    price_api_stub.set_price("dogecoin", 0.2)
    assert fetcher.fetch("dogecoin") == 0.2
    assert price_api_stub.calls == ["dogecoin", "dogecoin"]


def test_http_error_raises_fetch_error(price_api_stub, fetcher, cache):
    price_api_stub.set_response("bitcoin", FakeResponse(503, {"error": "down"}))
    with pytest.raises(FetchError) as exc:
        fetcher.fetch("bitcoin")
    assert exc.value.currency_id == "bitcoin"
    assert isinstance(exc.value.cause, requests.exceptions.HTTPError)
    assert cache.get("bitcoin") is None


def test_transport_error_raises_fetch_error(price_api_stub, fetcher):
    price_api_stub.set_response("bitcoin", requests.exceptions.ConnectionError("boom"))
    with pytest.raises(FetchError):
        fetcher.fetch("bitcoin")


def test_non_json_body_raises_fetch_error(price_api_stub, fetcher):
    price_api_stub.set_response("bitcoin", FakeResponse(200, None, text="<html>"))
    with pytest.raises(FetchError):
        fetcher.fetch("bitcoin")


@pytest.mark.parametrize("body", [{"price": 12}, {"usd_price": 0}, {"usd_price": -3.0}])
def test_unusable_body_raises_fetch_error(price_api_stub, fetcher, body):
    price_api_stub.set_response("bitcoin", FakeResponse(200, body))
    with pytest.raises(FetchError):
        fetcher.fetch("bitcoin")


def test_fetcher_without_cache_always_calls_api(price_api_stub):
    price_api_stub.set_price("ravencoin", 0.02)
    fetcher = PriceFetcher(base_url="https://prices.test/")
    fetcher.fetch("ravencoin")
    fetcher.fetch("ravencoin")
    assert price_api_stub.calls == ["ravencoin", "ravencoin"]
