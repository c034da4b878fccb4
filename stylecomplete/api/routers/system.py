"""
System router — landing page and health check.

Endpoints:
- GET /       — Front-end index.html when present, otherwise a text banner
- GET /health — Configuration and usage summary
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, PlainTextResponse

from configs import VERSION
from stylecomplete.orchestrator import GeminiCompletionClient
from stylecomplete.utils.cache import CacheManager

from ..schemas import HealthResponse
from ..deps import get_cache, get_llm_client


router = APIRouter(tags=["System"])

BANNER = "StyleComplete server is running"


@router.get("/", include_in_schema=False)
async def index(request: Request):
    static_dir = getattr(request.app.state, "static_dir", None)
    if static_dir:
        index_file = Path(static_dir) / "index.html"
        if index_file.is_file():
            return FileResponse(index_file)
    return PlainTextResponse(BANNER)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    cache: CacheManager = Depends(get_cache),
    llm_client: GeminiCompletionClient = Depends(get_llm_client),
):
    """Check API health and configuration status."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        cache_configured=cache.is_configured,
        api_key_count=len(llm_client.key_rotator),
        primary_model=llm_client.primary_model,
        fallback_model=llm_client.fallback_model,
        stats=llm_client.get_stats(),
    )
