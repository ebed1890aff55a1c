# tests/test_currencies.py
import pytest

from cryptoconv.services.currencies import display_name, format_usd, list_currencies


def test_display_name():
    assert display_name("pepepow") == "PEPEW"
    assert display_name("solana") == "SOLANA"


def test_list_currencies():
    coins = list_currencies()
    assert {"id": "bitcoin", "symbol": "BTC"} in coins
    assert len(coins) == 9


@pytest.mark.parametrize("price, text", [
    (1234.5, "$1,234.50"),
    (1.0, "$1.00"),
    (2.12345678, "$2.123457"),
    (0.5, "$0.500000"),
    (0.000123456789, "$0.0001234568"),
])
def test_format_usd(price, text):
    assert format_usd(price) == text
