# cryptoconv/services/errors.py
"""
Error types for the converter.

- ValidationError: bad user input, caught before any network call
- FetchError: the price API could not give us a usable USD price
"""

from __future__ import annotations

from typing import Optional


class ConverterError(Exception):
    """Base class for everything the converter raises on purpose."""


class ValidationError(ConverterError):
    SAME_CURRENCY = "same currency"
    INVALID_AMOUNT = "invalid amount"

    def __init__(self, reason: str, message: str):
        super().__init__(reason)
        self.reason = reason
        self.message = message


class FetchError(ConverterError):
    def __init__(self, currency_id: str, cause: object):
        super().__init__(f"price fetch failed for {currency_id}: {cause}")
        self.currency_id = currency_id
        self.cause: Optional[object] = cause
