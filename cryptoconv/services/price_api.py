# cryptoconv/services/price_api.py
"""
USD price lookups against the crypto.com token-price endpoint.

The endpoint has answered with a few different body shapes over time:
  {"usd_price": 1.23}
  {"data": {"usd_price": 1.23}}
  {"data": {"price": {"usd_price": 1.23}}}
  {"data": 1.23}
Each shape gets its own extractor, tried in that order.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Callable, Optional, Tuple

import requests

from cryptoconv.config import settings
from cryptoconv.services.errors import FetchError
from cryptoconv.services.price_cache import PriceCache


def _as_price(value: Any) -> Optional[float]:
    # bool is an int subclass, never a price
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return float(value)


def _section(body: Any, key: str) -> Any:
    return body.get(key) if isinstance(body, dict) else None


def from_flat(body: Any) -> Optional[float]:
    return _as_price(_section(body, "usd_price"))


def from_data(body: Any) -> Optional[float]:
    return _as_price(_section(_section(body, "data"), "usd_price"))


def from_data_price(body: Any) -> Optional[float]:
    return _as_price(_section(_section(_section(body, "data"), "price"), "usd_price"))


def from_bare_data(body: Any) -> Optional[float]:
    return _as_price(_section(body, "data"))


EXTRACTORS: Tuple[Callable[[Any], Optional[float]], ...] = (
    from_flat,
    from_data,
    from_data_price,
    from_bare_data,
)


def extract_usd_price(body: Any) -> Optional[float]:
    """First extractor that finds a number wins."""
    for extractor in EXTRACTORS:
        price = extractor(body)
        if price is not None:
            return price
    return None


class PriceFetcher:
    def __init__(
        self,
        cache: Optional[PriceCache] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.cache = cache
        self.base_url = (base_url or settings.PRICE_API_BASE).rstrip("/")
        self.timeout = timeout or settings.PRICE_API_TIMEOUT_SECS

    def price_url(self, coin_id: str) -> str:
        return f"{self.base_url}/price/v1/token-price/{coin_id}"

    def fetch(self, coin_id: str) -> float:
        """Return the USD price for coin_id, from cache when still fresh."""
        if self.cache is not None:
            cached = self.cache.get(coin_id)
            if cached is not None:
                print(f"[PriceFeed] Using cached price for {coin_id}: ${cached}")
                return cached

        print(f"[PriceFeed] Fetching fresh price for {coin_id}...")
        try:
            r = requests.get(self.price_url(coin_id), timeout=self.timeout)
            r.raise_for_status()
            body = r.json()
        except requests.exceptions.RequestException as e:
            raise FetchError(coin_id, e) from e
        except ValueError as e:
            raise FetchError(coin_id, f"non-JSON response ({e})") from e

        price = extract_usd_price(body)
        if price is None:
            raise FetchError(coin_id, "Unable to read usd_price from response")
        if not math.isfinite(price) or price <= 0:
            raise FetchError(coin_id, f"unusable usd_price {price!r}")

        if self.cache is not None:
            self.cache.put(coin_id, price)
        return price
