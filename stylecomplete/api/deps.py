"""
Shared dependencies for the StyleComplete API.

Provides:
- Structured logging (one configuration for the whole service)
- Accessors for the components built once in the app lifespan
  (cache manager, completion client, suggestion service)
"""

import logging

from fastapi import Request

from configs import LOG_LEVEL
from stylecomplete.orchestrator import GeminiCompletionClient, SuggestionService
from stylecomplete.utils.cache import CacheManager


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

def setup_logging() -> logging.Logger:
    """Configure structured logging for the API."""
    logger = logging.getLogger("stylecomplete")

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # httpx logs full request URLs at INFO, and the API key is a query parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


logger = setup_logging()


# =============================================================================
# COMPONENT ACCESSORS
# =============================================================================

def get_cache(request: Request) -> CacheManager:
    return request.app.state.cache


def get_llm_client(request: Request) -> GeminiCompletionClient:
    return request.app.state.llm_client


def get_suggestion_service(request: Request) -> SuggestionService:
    """The service instance created at startup; shared across requests."""
    return request.app.state.suggestion_service
