# cryptoconv/services/currencies.py
"""Coins offered in the converter and how their prices are shown."""

# price-api id -> ticker shown to the user
CRYPTO_NAMES = {
    "pepepow": "PEPEW",
    "ravencoin": "RVN",
    "bitcoin": "BTC",
    "ethereum": "ETH",
    "dogecoin": "DOGE",
    "litecoin": "LTC",
    "cardano": "ADA",
    "polkadot": "DOT",
    "digibyte": "DGB",
}


def display_name(coin_id: str) -> str:
    return CRYPTO_NAMES.get(coin_id, coin_id.upper())


def list_currencies():
    return [{"id": k, "symbol": v} for k, v in CRYPTO_NAMES.items()]


def format_usd(price: float) -> str:
    """
    USD with thousands separators. Prices of a dollar or more get 2-6
    decimals, sub-dollar prices get 6-10 so tiny coins stay readable.
    """
    min_digits, max_digits = (2, 6) if price >= 1 else (6, 10)
    text = f"{price:,.{max_digits}f}"
    whole, frac = text.split(".")
    frac = frac.rstrip("0").ljust(min_digits, "0")
    return f"${whole}.{frac}"
