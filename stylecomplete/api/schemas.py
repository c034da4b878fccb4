"""
Pydantic schemas for the StyleComplete API.

These models define the request/response structure for all API endpoints.
Suggestions are passed through as the model produced them; only the
envelope is validated.
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# REQUEST MODELS
# ============================================================

class SuggestionContext(BaseModel):
    """Editor context attached to a lookup."""
    season: Optional[str] = Field(None, description="Season the user is designing for")

    model_config = ConfigDict(extra="allow")


class SuggestRequest(BaseModel):
    """Request body for POST /api/suggest."""
    text: str = Field(..., description="Full editor text")
    cursor: Optional[int] = Field(
        None,
        description="Cursor offset into text (omitted means end of text)"
    )
    context: Optional[SuggestionContext] = Field(None, description="Optional editor context")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"text": "I love silk", "cursor": 11},
                {"text": "夏季连衣裙 zhen", "cursor": 10, "context": {"season": "summer"}}
            ]
        }
    }


class VocabularyRequest(BaseModel):
    """Request body for POST /api/validate. A missing word is a 400, not a 422."""
    word: Optional[str] = Field(None, description="Word to learn")
    category: Optional[str] = Field(None, description="Category such as 材质 or 造型")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"word": "香云纱", "category": "材质"}
            ]
        }
    }


# ============================================================
# RESPONSE MODELS
# ============================================================

class SuggestResponse(BaseModel):
    """Response from POST /api/suggest."""
    suggestions: List[Any] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""
    error: str
    details: Optional[str] = None


class VocabularyResponse(BaseModel):
    """Response from POST /api/validate."""
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """Response from GET /health."""
    status: str
    version: str
    cache_configured: bool
    api_key_count: int
    primary_model: str
    fallback_model: str
    stats: Dict[str, Any] = Field(default_factory=dict)
