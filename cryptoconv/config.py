# cryptoconv/config.py
import os
from dataclasses import dataclass

@dataclass
class Settings:
    # Core
    PORT: int = int(os.getenv("PORT", "10000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Price API
    PRICE_API_BASE: str = os.getenv("PRICE_API_BASE", "https://price-api.crypto.com")
    PRICE_API_TIMEOUT_SECS: int = int(os.getenv("PRICE_API_TIMEOUT_SECS", "10"))

    # Both legs of a conversion are fetched side by side
    FETCH_MAX_WORKERS: int = int(os.getenv("FETCH_MAX_WORKERS", "2"))

settings = Settings()
