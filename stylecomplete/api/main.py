"""
StyleComplete FastAPI Application.

This module wires the REST API for the fashion editor's autocompletion.
All completion and caching logic lives in the orchestrator and utils
packages; nothing here talks to Gemini or Redis directly.

Endpoints:
- POST /api/suggest  (alias /api/complete) - Suggestions for the word at the cursor
- POST /api/validate (alias /api/feedback) - Teach a new vocabulary word
- GET  /             - Front-end landing page or liveness banner
- GET  /health       - Health check
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from configs import (
    ALLOWED_ORIGINS,
    GEMINI_API_KEYS,
    REDIS_URL,
    STATIC_DIR,
    UPSTREAM_TIMEOUT_SECONDS,
    VERSION,
    validate_configuration,
)
from stylecomplete.orchestrator import GeminiCompletionClient, KeyRotator, SuggestionService
from stylecomplete.utils.cache import CacheManager

from .deps import logger
from .routers import suggest, system, vocabulary


def create_app(
    cache: Optional[CacheManager] = None,
    llm_client: Optional[GeminiCompletionClient] = None,
    static_dir: Optional[str] = STATIC_DIR,
) -> FastAPI:
    """
    Build the application.

    Components not passed in are created from configuration at startup.
    Tests inject their own cache and completion client.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        # Startup
        for warning in validate_configuration():
            logger.warning(warning)

        owned_http_client = None
        app_cache = cache or CacheManager(redis_url=REDIS_URL)
        app_llm_client = llm_client
        if app_llm_client is None:
            owned_http_client = httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT_SECONDS)
            app_llm_client = GeminiCompletionClient(
                key_rotator=KeyRotator(GEMINI_API_KEYS),
                http_client=owned_http_client,
            )

        await app_cache.initialize()

        app.state.cache = app_cache
        app.state.llm_client = app_llm_client
        app.state.suggestion_service = SuggestionService(app_cache, app_llm_client)
        app.state.static_dir = static_dir

        logger.info(
            "StyleComplete API started. Keys: %d, cache: %s",
            len(app_llm_client.key_rotator),
            "enabled" if app_cache.is_configured else "disabled",
        )
        yield
        # Shutdown
        if owned_http_client is not None:
            await owned_http_client.aclose()
        if cache is None:
            await app_cache.close()
        logger.info("StyleComplete API shutting down.")

    app = FastAPI(
        title="StyleComplete API",
        description="Context-aware autocompletion for fashion design text",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Suggestion-Source"],
    )

    app.include_router(system.router)
    app.include_router(suggest.router)
    app.include_router(vocabulary.router)

    # Front-end assets; registered routes above take precedence
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app()


# ============================================================
# RUN DIRECTLY (for development)
# ============================================================

if __name__ == "__main__":
    import uvicorn
    from configs import HOST, PORT
    uvicorn.run(app, host=HOST, port=PORT)
