"""Config module initialization."""
from .settings import (
    # Server configuration
    HOST,
    PORT,
    STATIC_DIR,
    ALLOWED_ORIGINS,
    LOG_LEVEL,
    VERSION,
    # Cache configuration
    REDIS_URL,
    SUGGESTION_CACHE_TTL_SECONDS,
    SUGGESTION_CACHE_PREFIX,
    VOCABULARY_PREFIX,
    # LLM configuration
    GEMINI_API_KEYS,
    GEMINI_API_BASE,
    PRIMARY_MODEL,
    FALLBACK_MODEL,
    UPSTREAM_TIMEOUT_SECONDS,
    COMPLETION_TEMPERATURE,
    parse_api_keys,
    # Validation
    ConfigurationError,
    validate_configuration,
)

__all__ = [
    # Server configuration
    "HOST",
    "PORT",
    "STATIC_DIR",
    "ALLOWED_ORIGINS",
    "LOG_LEVEL",
    "VERSION",
    # Cache configuration
    "REDIS_URL",
    "SUGGESTION_CACHE_TTL_SECONDS",
    "SUGGESTION_CACHE_PREFIX",
    "VOCABULARY_PREFIX",
    # LLM configuration
    "GEMINI_API_KEYS",
    "GEMINI_API_BASE",
    "PRIMARY_MODEL",
    "FALLBACK_MODEL",
    "UPSTREAM_TIMEOUT_SECONDS",
    "COMPLETION_TEMPERATURE",
    "parse_api_keys",
    # Validation
    "ConfigurationError",
    "validate_configuration",
]
