# cryptoconv/services/quote.py
"""
Quick quote: price one coin in USD and multiply by an amount.
Standalone from the converter; always hits the API, no cache.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from cryptoconv.services.errors import FetchError
from cryptoconv.services.price_api import PriceFetcher


@dataclass(frozen=True)
class Quote:
    coin_id: str
    amount: float
    price: Optional[float] = None
    total: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def message(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return f"Price: ${self.price:.6f} | Amount: {_plain(self.amount)} => USD {self.total:.6f}"


def _plain(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def _amount(raw: Any) -> float:
    # blank means zero
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        raise ValueError(f"invalid amount {raw!r}")
    return value


def quote(coin_id: str, amount: Any, fetcher: Optional[PriceFetcher] = None) -> Quote:
    fetcher = fetcher or PriceFetcher()
    try:
        value = _amount(amount)
    except ValueError as e:
        return Quote(coin_id=coin_id, amount=0.0, error=str(e))

    try:
        price = fetcher.fetch(coin_id)
    except FetchError as e:
        print(f"[ERROR] Quote failed for {coin_id}: {e}")
        return Quote(coin_id=coin_id, amount=value, error=str(e.cause))

    return Quote(coin_id=coin_id, amount=value, price=price, total=value * price)
