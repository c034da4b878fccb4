"""
Configuration management for the StyleComplete autofill proxy.

All settings come from environment variables (optionally via a .env file).
Missing credentials or a missing Redis URL do NOT fail startup: the service
degrades to empty suggestions or uncached operation instead. Only values
that are present but malformed raise ConfigurationError.
"""
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# interpolate=False keeps $ characters in API keys and Redis passwords intact
load_dotenv(interpolate=False)


# =============================================================================
# CONFIGURATION VALIDATION
# =============================================================================

class ConfigurationError(Exception):
    """Raised when a configuration value is present but invalid."""
    pass


def _get_int_env(key: str, default: int) -> int:
    """Read an integer environment variable or raise ConfigurationError."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"❌ {key} must be an integer, got: {raw!r}")


def _get_float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"❌ {key} must be a number, got: {raw!r}")


def parse_api_keys(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated key list.

    Blank entries (e.g. from "key1,,key2" or a trailing comma) are dropped
    so the rotator never hands out an empty credential.
    """
    if not raw:
        return []
    return [key.strip() for key in raw.split(",") if key.strip()]


# =============================================================================
# BASE PATHS
# =============================================================================

BASE_DIR = Path(__file__).parent.parent

# =============================================================================
# SERVER CONFIGURATION
# =============================================================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _get_int_env("PORT", 10000)

# Front-end assets served at "/" when present
STATIC_DIR = os.getenv("STATIC_DIR", str(BASE_DIR / "public"))

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

# Unset disables both the suggestion cache and vocabulary learning
REDIS_URL = os.getenv("REDIS_URL", "").strip() or None

SUGGESTION_CACHE_TTL_SECONDS = _get_int_env("SUGGESTION_CACHE_TTL_SECONDS", 3600)

# Key namespaces must stay disjoint: feedback deletes autofill:* only
SUGGESTION_CACHE_PREFIX = "autofill:"
VOCABULARY_PREFIX = "dict:"

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

GEMINI_API_KEYS = parse_api_keys(os.getenv("GEMINI_API_KEYS", ""))

GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
).rstrip("/")

# Two-tier fallback: newest model first, stable model second
PRIMARY_MODEL = os.getenv("PRIMARY_MODEL", "gemini-3-pro-preview")
FALLBACK_MODEL = os.getenv("FALLBACK_MODEL", "gemini-2.5-pro")

UPSTREAM_TIMEOUT_SECONDS = _get_float_env("UPSTREAM_TIMEOUT_SECONDS", 60.0)

# Sampling temperature sent with every completion request
COMPLETION_TEMPERATURE = 0.7

VERSION = "1.0.0"


def validate_configuration() -> List[str]:
    """
    Inspect configuration and return human-readable warnings.

    Never raises: absent keys or an absent Redis URL only degrade the
    service, so callers log the warnings at startup and carry on.
    """
    warnings = []

    if not GEMINI_API_KEYS:
        warnings.append(
            "⚠️ No Gemini API keys found. Set GEMINI_API_KEYS=key1,key2 in your .env file. "
            "All suggestion requests will return an empty list."
        )

    if not REDIS_URL:
        warnings.append(
            "⚠️ No REDIS_URL found, running without cache. "
            "Vocabulary feedback will be rejected."
        )

    if PRIMARY_MODEL == FALLBACK_MODEL:
        warnings.append(
            f"⚠️ PRIMARY_MODEL and FALLBACK_MODEL are both '{PRIMARY_MODEL}'; "
            "the fallback retry will hit the same model."
        )

    static_index = Path(STATIC_DIR) / "index.html"
    if not static_index.exists():
        warnings.append(f"ℹ️ No front-end found at {static_index}; '/' serves a text banner.")

    return warnings
