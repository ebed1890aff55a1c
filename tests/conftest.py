# tests/conftest.py
import pytest
import requests

from cryptoconv.services import price_api
from cryptoconv.services.conversion import ConverterController
from cryptoconv.services.converter_view import PanelView
from cryptoconv.services.price_api import PriceFetcher
from cryptoconv.services.price_cache import PriceCache


class FakeClock:
    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else str(body)

    def raise_for_status(self):
        if not 200 <= self.status_code < 300:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakePriceApi:
    """Stands in for requests.get; answers by coin id and records calls."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def set_price(self, coin_id, price, shape="flat"):
        bodies = {
            "flat": {"usd_price": price},
            "data": {"data": {"usd_price": price}},
            "nested": {"data": {"price": {"usd_price": price}}},
            "bare": {"data": price},
        }
        self.responses[coin_id] = FakeResponse(200, bodies[shape])

    def set_response(self, coin_id, response):
        self.responses[coin_id] = response

    def __call__(self, url, timeout=None, **kwargs):
        coin_id = url.rsplit("/", 1)[-1]
        self.calls.append(coin_id)
        resp = self.responses.get(coin_id)
        if resp is None:
            return FakeResponse(404, {"error": "not found"})
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def price_api_stub(monkeypatch):
    stub = FakePriceApi()
    monkeypatch.setattr(price_api.requests, "get", stub)
    return stub


@pytest.fixture
def cache(clock):
    return PriceCache(clock=clock)


@pytest.fixture
def fetcher(cache):
    return PriceFetcher(cache=cache, base_url="https://prices.test")


@pytest.fixture
def view():
    return PanelView()


@pytest.fixture
def controller(fetcher, view):
    return ConverterController(fetcher=fetcher, view=view)
