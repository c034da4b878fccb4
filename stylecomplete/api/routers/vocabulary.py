"""
Vocabulary router — editor feedback that teaches new words.

Endpoints:
- POST /api/validate — Store a word permanently and evict its cached suggestions
- POST /api/feedback — Legacy alias of /api/validate
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from stylecomplete.orchestrator import SuggestionService
from stylecomplete.utils.cache import CacheError, CacheManager

from ..schemas import VocabularyRequest, VocabularyResponse, ErrorResponse
from ..deps import get_cache, get_suggestion_service, logger


router = APIRouter(tags=["Vocabulary"])


@router.post(
    "/api/validate",
    response_model=VocabularyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.post("/api/feedback", response_model=VocabularyResponse, include_in_schema=False)
async def learn_word(
    request: VocabularyRequest,
    cache: CacheManager = Depends(get_cache),
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Learn a word. Requires a configured Redis store."""
    if not request.word or not cache.is_configured:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request"},
        )

    try:
        await service.learn_word(request.word, request.category)
    except CacheError as e:
        logger.error("Vocabulary write failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Redis Write Failed"},
        )

    return VocabularyResponse(success=True, message=f"Learned: {request.word}")
