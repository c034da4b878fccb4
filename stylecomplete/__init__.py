"""
StyleComplete Backend Package

Autocompletion proxy for a fashion-design text editor:
- orchestrator: key rotation, Gemini fallback client, suggestion service
- utils: Redis cache manager
- api: FastAPI application and routers
- models: Completion outcome and vocabulary models
"""

from stylecomplete.models import (
    CompletionOutcome,
    CompletionStatus,
    SuggestionResult,
    SuggestionSource,
    VocabularyEntry,
)

__version__ = "1.0.0"

__all__ = [
    "CompletionOutcome",
    "CompletionStatus",
    "SuggestionResult",
    "SuggestionSource",
    "VocabularyEntry",
]
