"""
Suggestion lookup and vocabulary learning.

Lookup flow for one keystroke:
    text[:cursor] -> last token -> cache (autofill:<token>) -> model -> cache write

Learning flow for one editor feedback:
    dict:<word> (permanent) -> delete autofill:<word> so the next lookup
    regenerates instead of serving a pre-feedback answer.
"""
import logging
import re
from typing import Any, Mapping, Optional

from configs import (
    SUGGESTION_CACHE_PREFIX,
    SUGGESTION_CACHE_TTL_SECONDS,
    VOCABULARY_PREFIX,
)
from stylecomplete.models import (
    SuggestionResult,
    SuggestionSource,
    VocabularyEntry,
)
from stylecomplete.utils.cache import CacheError, CacheManager

from .llm_client import GeminiCompletionClient

logger = logging.getLogger("stylecomplete.suggest")

# Whitespace plus ASCII and full-width comma/period
_TOKEN_SEPARATORS = re.compile(r"[\s,，.。]+")


def slice_to_cursor(text: str, cursor: Optional[int]) -> str:
    """Text before the cursor; a missing cursor means the whole text."""
    if cursor is None:
        return text
    return text[:cursor]


def extract_last_word(text_before_cursor: str) -> str:
    """
    Last token before the cursor.

    Text ending in a separator yields "" so no lookup happens while the
    user is between words.
    """
    return _TOKEN_SEPARATORS.split(text_before_cursor)[-1]


def suggestion_cache_key(word: str) -> str:
    return f"{SUGGESTION_CACHE_PREFIX}{word.lower()}"


def vocabulary_key(word: str) -> str:
    return f"{VOCABULARY_PREFIX}{word}"


class SuggestionService:
    """Read-through cache in front of the completion client."""

    def __init__(
        self,
        cache: CacheManager,
        llm_client: GeminiCompletionClient,
        cache_ttl: int = SUGGESTION_CACHE_TTL_SECONDS,
    ):
        self.cache = cache
        self.llm_client = llm_client
        self.cache_ttl = cache_ttl

    async def suggest(
        self,
        text: str,
        cursor: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> SuggestionResult:
        text_before_cursor = slice_to_cursor(text, cursor)
        last_word = extract_last_word(text_before_cursor)

        if not last_word:
            return SuggestionResult(source=SuggestionSource.EMPTY_TRIGGER)

        cache_key = suggestion_cache_key(last_word)

        cached = await self.cache.get(cache_key)
        if cached is not None and not isinstance(cached, list):
            logger.warning('[Cache] Ignoring non-list value at %s', cache_key)
            cached = None
        if cached is not None:
            logger.info('[Cache] Hit for "%s"', last_word)
            return SuggestionResult(
                suggestions=cached,
                source=SuggestionSource.CACHE,
                last_word=last_word,
            )

        logger.info('[AI] Fetching for "%s"...', last_word)
        outcome = await self.llm_client.complete(text_before_cursor, last_word, context)

        if outcome.suggestions:
            try:
                await self.cache.set(cache_key, outcome.suggestions, ttl=self.cache_ttl)
            except CacheError as e:
                logger.warning("Suggestion cache write skipped: %s", e)
        elif not outcome.ok:
            logger.info('No suggestions for "%s" (%s): %s', last_word, outcome.status.value, outcome.reason)

        return SuggestionResult(
            suggestions=outcome.suggestions,
            source=SuggestionSource(outcome.status.value),
            last_word=last_word,
        )

    async def learn_word(self, word: str, category: Optional[str] = None) -> VocabularyEntry:
        """
        Persist a vocabulary entry and evict the stale suggestion cache.

        Raises:
            CacheError: if the store rejects the write or delete
        """
        entry = VocabularyEntry(word=word, category=category)
        await self.cache.set(vocabulary_key(word), entry.model_dump())
        await self.cache.delete(suggestion_cache_key(word))
        logger.info('[Vocabulary] Learned "%s" (%s)', word, category)
        return entry
