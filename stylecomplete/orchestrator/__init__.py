"""Orchestrator module initialization."""

from .key_rotator import KeyRotator
from .json_utils import JSONExtractionError, parse_suggestion_array, strip_code_fences
from .prompts import build_completion_prompt
from .llm_client import GeminiCompletionClient, LLMError
from .suggestion_service import (
    SuggestionService,
    extract_last_word,
    slice_to_cursor,
    suggestion_cache_key,
    vocabulary_key,
)

__all__ = [
    "KeyRotator",
    "JSONExtractionError",
    "parse_suggestion_array",
    "strip_code_fences",
    "build_completion_prompt",
    "GeminiCompletionClient",
    "LLMError",
    "SuggestionService",
    "extract_last_word",
    "slice_to_cursor",
    "suggestion_cache_key",
    "vocabulary_key",
]
