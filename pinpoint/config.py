"""Pinpoint settings, read once at import from the environment, a .env file and secrets/."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# One file per key, e.g. secrets/w3w_api_key (keep out of version control)
SECRETS_DIR: Path = PROJECT_ROOT / "secrets"


def _read_secret(name: str, default: str = "") -> str:
    """Look up NAME in the environment first, then secrets/name."""
    value = os.getenv(name.upper())
    if value:
        return value
    path = SECRETS_DIR / name.lower()
    return path.read_text().strip() if path.is_file() else default


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def _env_url(name: str, default: str) -> str:
    return os.getenv(name, default).rstrip("/")


# CORS (comma-separated origins)
CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Postcodes.io (free, no auth)
POSTCODES_IO_URL: str = _env_url("POSTCODES_IO_URL", "https://api.postcodes.io/postcodes")

# what3words (register at https://developer.what3words.com/)
W3W_API_URL: str = _env_url("W3W_API_URL", "https://api.what3words.com/v3")
W3W_API_KEY: str = _read_secret("w3w_api_key")

# Geocoder request timeouts in seconds; one attempt per request, no retries
GEOCODER_TIMEOUT: float = float(os.getenv("GEOCODER_TIMEOUT", "10"))
GEOCODER_BULK_TIMEOUT: float = float(os.getenv("GEOCODER_BULK_TIMEOUT", "15"))

# Rate limiting (slowapi limit strings)
RATE_LIMIT_RESOLVE: str = os.getenv("RATE_LIMIT_RESOLVE", "120/minute")
RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
