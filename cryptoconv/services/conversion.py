# cryptoconv/services/conversion.py
"""
Converter flow: validate -> fetch both USD prices -> convert via USD -> render.

One ConverterController is built at startup and owns the price cache (through
its fetcher). While a conversion is in flight any further request is dropped,
not queued.
"""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from cryptoconv.config import settings
from cryptoconv.services.currencies import display_name, format_usd
from cryptoconv.services.errors import ConverterError, FetchError, ValidationError
from cryptoconv.services.price_api import PriceFetcher
from cryptoconv.services.price_cache import PriceCache

FETCH_ERROR_MESSAGE = "Error fetching prices. Please try again later."
PRICE_UNAVAILABLE = "Price unavailable"
PRICE_LOADING = "Loading..."


class FlowState(Enum):
    IDLE = "idle"
    CONVERTING = "converting"


@dataclass(frozen=True)
class ConversionRequest:
    from_currency: str
    to_currency: str
    amount: Any


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    from_currency: str
    to_currency: str
    from_price: float
    to_price: float
    usd_amount: float
    converted_amount: float

    def message(self) -> str:
        return (
            f"{self.amount:.4f} {display_name(self.from_currency)} = "
            f"{self.converted_amount:.8f} {display_name(self.to_currency)} "
            f"(via USD: ${self.usd_amount:.6f})"
        )


@dataclass(frozen=True)
class ConversionOutcome:
    result: Optional[ConversionResult] = None
    error: Optional[ConverterError] = None
    dropped: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None


def parse_amount(raw: Any) -> Optional[float]:
    """Finite float from user input, or None."""
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def validate(request: ConversionRequest) -> float:
    """Return the parsed amount or raise ValidationError."""
    if request.from_currency == request.to_currency:
        raise ValidationError(
            ValidationError.SAME_CURRENCY,
            "Please select different cryptocurrencies for conversion.",
        )
    amount = parse_amount(request.amount)
    if amount is None or amount <= 0:
        raise ValidationError(
            ValidationError.INVALID_AMOUNT,
            f"Please enter a valid {display_name(request.from_currency)} amount.",
        )
    return amount


def convert_via_usd(amount: float, from_price: float, to_price: float) -> Tuple[float, float]:
    usd_amount = amount * from_price
    return usd_amount, usd_amount / to_price


def fetch_pair(fetcher: PriceFetcher, first: str, second: str, max_workers: int = 2) -> Tuple[float, float]:
    """
    Fetch two prices side by side. The first failure is raised; the
    executor still waits for the other call to finish.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(fetcher.fetch, first): 0, executor.submit(fetcher.fetch, second): 1}
        prices = [0.0, 0.0]
        for fut in as_completed(futures):
            prices[futures[fut]] = fut.result()
    return prices[0], prices[1]


class ConverterController:
    """
    Process-wide converter. Owns the price cache through its fetcher and
    renders into whichever view the action came from; `view` is only the
    fallback for callers that drive the controller directly.
    """

    def __init__(self, fetcher: Optional[PriceFetcher] = None, max_workers: Optional[int] = None, view=None):
        self.fetcher = fetcher or PriceFetcher(cache=PriceCache())
        self.max_workers = max_workers or settings.FETCH_MAX_WORKERS
        self.state = FlowState.IDLE
        self.view = view
        self._busy = threading.Lock()
        if view is not None:
            self.bind(view)

    @property
    def cache(self) -> Optional[PriceCache]:
        return self.fetcher.cache

    def bind(self, view) -> None:
        """Register this controller's handlers on view; results render back into it."""
        view.on_submit(lambda f, t, amount: self.submit(f, t, amount, view=view))
        view.on_selection_change(lambda f, t: self.on_selection_change(f, t, view=view))

    def _target(self, view):
        view = view if view is not None else self.view
        if view is None:
            raise RuntimeError("no view to render into; pass view= or bind one first")
        return view

    def submit(self, from_currency: str, to_currency: str, amount: Any, view=None) -> ConversionOutcome:
        return self.convert(ConversionRequest(from_currency, to_currency, amount), view=view)

    def convert(self, request: ConversionRequest, view=None) -> ConversionOutcome:
        view = self._target(view)
        if not self._busy.acquire(blocking=False):
            print(f"[WARN] Conversion already running; dropped {request.from_currency}->{request.to_currency}")
            return ConversionOutcome(dropped=True)

        self.state = FlowState.CONVERTING
        view.clear_messages()
        view.set_loading(True)
        try:
            try:
                amount = validate(request)
            except ValidationError as e:
                view.show_error(e.message)
                return ConversionOutcome(error=e)

            try:
                from_price, to_price = fetch_pair(
                    self.fetcher, request.from_currency, request.to_currency, self.max_workers
                )
            except FetchError as e:
                print(f"[ERROR] Conversion error: {e}")
                view.show_error(FETCH_ERROR_MESSAGE)
                return ConversionOutcome(error=e)

            usd_amount, converted = convert_via_usd(amount, from_price, to_price)
            result = ConversionResult(
                amount=amount,
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                from_price=from_price,
                to_price=to_price,
                usd_amount=usd_amount,
                converted_amount=converted,
            )
            view.show_result(result.message())
            return ConversionOutcome(result=result)
        finally:
            self.state = FlowState.IDLE
            view.set_loading(False)
            self._busy.release()

    # ---- price board ----
    def update_amount_label(self, from_currency: str, view=None) -> None:
        self._target(view).set_amount_label(f"Enter {display_name(from_currency)} Amount:")

    def price_line(self, coin_id: str, price: float) -> str:
        line = f"{display_name(coin_id)}: {format_usd(price)}"
        ttl = self.cache.remaining_ttl(coin_id) if self.cache is not None else None
        # 0s left reads as stale, so no marker
        if ttl:
            line += f" (cached {ttl}s)"
        return line

    def update_prices(self, from_currency: str, to_currency: str, view=None) -> bool:
        view = self._target(view)
        if self.cache is not None:
            self.cache.sweep()
        view.show_prices(PRICE_LOADING, PRICE_LOADING)
        try:
            from_price, to_price = fetch_pair(self.fetcher, from_currency, to_currency, self.max_workers)
        except FetchError as e:
            print(f"[ERROR] Price board refresh failed: {e}")
            view.show_prices(PRICE_UNAVAILABLE, PRICE_UNAVAILABLE)
            return False
        view.show_prices(
            self.price_line(from_currency, from_price),
            self.price_line(to_currency, to_price),
        )
        return True

    def on_selection_change(self, from_currency: str, to_currency: str, view=None) -> bool:
        view = self._target(view)
        self.update_amount_label(from_currency, view=view)
        return self.update_prices(from_currency, to_currency, view=view)
