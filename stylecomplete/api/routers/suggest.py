"""
Suggest router — autocompletion for the word under the cursor.

Endpoints:
- POST /api/suggest  — Suggestions for the last token before the cursor
- POST /api/complete — Legacy alias of /api/suggest
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from stylecomplete.orchestrator import SuggestionService

from ..schemas import SuggestRequest, SuggestResponse, ErrorResponse
from ..deps import get_suggestion_service, logger


router = APIRouter(tags=["Suggest"])


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/api/suggest",
    response_model=SuggestResponse,
    responses={500: {"model": ErrorResponse}},
)
@router.post("/api/complete", response_model=SuggestResponse, include_in_schema=False)
async def suggest(
    request: SuggestRequest,
    response: Response,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """
    Suggest completions for the token before the cursor.

    Model failures and missing API keys are not errors here: they return
    an empty list with 200. The X-Suggestion-Source header tells the
    caller which path produced the list.
    """
    context = request.context.model_dump(exclude_none=True) if request.context else None

    try:
        result = await service.suggest(request.text, request.cursor, context)
    except Exception as e:
        logger.exception("Server Error: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error", "details": str(e)},
        )

    response.headers["X-Suggestion-Source"] = result.source.value
    return SuggestResponse(suggestions=result.suggestions)
