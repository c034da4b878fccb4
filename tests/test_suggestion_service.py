"""Tests for tokenization, the read-through cache and vocabulary learning."""
import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from stylecomplete.models import CompletionOutcome, CompletionStatus, SuggestionSource
from stylecomplete.orchestrator import (
    SuggestionService,
    extract_last_word,
    slice_to_cursor,
    suggestion_cache_key,
    vocabulary_key,
)
from stylecomplete.utils.cache import CacheError, CacheManager

from conftest import SILK_SUGGESTIONS


def run(coro):
    return asyncio.run(coro)


def stub_llm(suggestions=None, status=CompletionStatus.PRIMARY):
    llm = MagicMock()
    llm.complete = AsyncMock(return_value=CompletionOutcome(
        suggestions=suggestions or [],
        status=status,
    ))
    return llm


# =============================================================================
# TOKENIZATION
# =============================================================================

@pytest.mark.parametrize("text, expected", [
    ("I love silk", "silk"),
    ("silk", "silk"),
    ("red, blue,silk", "silk"),
    ("夏季连衣裙，zhen", "zhen"),
    ("一件外套。丝绸", "丝绸"),
    ("Cotton.Linen", "Linen"),
    ("I love silk ", ""),
    ("I love silk,", ""),
    ("I love silk。", ""),
    ("   ", ""),
    ("", ""),
])
def test_extract_last_word(text, expected):
    assert extract_last_word(text) == expected


def test_slice_to_cursor():
    assert slice_to_cursor("I love silk dress", 11) == "I love silk"
    assert slice_to_cursor("I love silk", None) == "I love silk"
    assert slice_to_cursor("I love silk", 100) == "I love silk"
    assert slice_to_cursor("I love silk", 0) == ""


def test_key_namespaces_are_disjoint():
    assert suggestion_cache_key("Silk") == "autofill:silk"
    assert vocabulary_key("Silk") == "dict:Silk"


# =============================================================================
# LOOKUP
# =============================================================================

class TestSuggest:

    def test_example_sentence_uses_last_word(self, cache, fake_redis):
        llm = stub_llm(SILK_SUGGESTIONS)
        service = SuggestionService(cache, llm)

        result = run(service.suggest("I love silk", 11))

        assert result.last_word == "silk"
        assert result.source == SuggestionSource.PRIMARY
        assert result.suggestions == SILK_SUGGESTIONS
        llm.complete.assert_awaited_once_with("I love silk", "silk", None)
        assert ("get", "autofill:silk") in fake_redis.calls

    def test_miss_writes_cache_with_one_hour_ttl(self, cache, fake_redis):
        service = SuggestionService(cache, stub_llm(SILK_SUGGESTIONS))
        run(service.suggest("I love Silk"))
        assert fake_redis.ttls["autofill:silk"] == 3600
        assert json.loads(fake_redis.store["autofill:silk"]) == SILK_SUGGESTIONS

    def test_cache_hit_skips_model(self, cache, fake_redis):
        cached = [{"label": "From cache"}]
        fake_redis.store["autofill:silk"] = json.dumps(cached)
        llm = stub_llm(SILK_SUGGESTIONS)
        service = SuggestionService(cache, llm)

        result = run(service.suggest("I love SILK"))

        assert result.suggestions == cached
        assert result.source == SuggestionSource.CACHE
        llm.complete.assert_not_awaited()

    def test_empty_trigger_touches_nothing(self, cache, fake_redis):
        llm = stub_llm(SILK_SUGGESTIONS)
        service = SuggestionService(cache, llm)

        result = run(service.suggest("I love silk ", None))

        assert result.suggestions == []
        assert result.source == SuggestionSource.EMPTY_TRIGGER
        assert fake_redis.calls == []
        llm.complete.assert_not_awaited()

    def test_empty_result_is_not_cached(self, cache, fake_redis):
        service = SuggestionService(cache, stub_llm([], CompletionStatus.EXHAUSTED))
        result = run(service.suggest("I love silk"))
        assert result.suggestions == []
        assert result.source == SuggestionSource.EXHAUSTED
        assert fake_redis.store == {}

    def test_cache_write_failure_still_returns_suggestions(self):
        broken = MagicMock(spec=CacheManager)
        broken.get = AsyncMock(return_value=None)
        broken.set = AsyncMock(side_effect=CacheError("redis down"))
        service = SuggestionService(broken, stub_llm(SILK_SUGGESTIONS))

        result = run(service.suggest("I love silk"))

        assert result.suggestions == SILK_SUGGESTIONS
        broken.set.assert_awaited_once()

    def test_works_without_cache(self):
        service = SuggestionService(CacheManager(), stub_llm(SILK_SUGGESTIONS))
        result = run(service.suggest("I love silk"))
        assert result.suggestions == SILK_SUGGESTIONS

    def test_context_is_forwarded(self, cache):
        llm = stub_llm(SILK_SUGGESTIONS)
        service = SuggestionService(cache, llm)
        run(service.suggest("I love silk", 11, {"season": "summer"}))
        llm.complete.assert_awaited_once_with("I love silk", "silk", {"season": "summer"})


# =============================================================================
# VOCABULARY
# =============================================================================

class TestLearnWord:

    def test_writes_permanent_entry_and_evicts_cache(self, cache, fake_redis):
        fake_redis.store["autofill:xiangyunsha"] = json.dumps([{"label": "stale"}])
        service = SuggestionService(cache, stub_llm())

        entry = run(service.learn_word("XiangYunSha", "材质"))

        stored = json.loads(fake_redis.store["dict:XiangYunSha"])
        assert stored["word"] == "XiangYunSha"
        assert stored["category"] == "材质"
        assert stored["addedAt"] == entry.addedAt
        assert stored["addedAt"].endswith("Z")
        assert "dict:XiangYunSha" not in fake_redis.ttls
        assert "autofill:xiangyunsha" not in fake_redis.store

    def test_feedback_prevents_stale_lookup(self, cache, fake_redis):
        fake_redis.store["autofill:silk"] = json.dumps([{"label": "stale"}])
        llm = stub_llm(SILK_SUGGESTIONS)
        service = SuggestionService(cache, llm)

        run(service.learn_word("silk", "材质"))
        result = run(service.suggest("I love silk"))

        assert result.suggestions == SILK_SUGGESTIONS
        assert result.source == SuggestionSource.PRIMARY
        llm.complete.assert_awaited_once()

    def test_store_failure_propagates(self):
        broken = MagicMock(spec=CacheManager)
        broken.set = AsyncMock(side_effect=CacheError("redis down"))
        broken.delete = AsyncMock()
        service = SuggestionService(broken, stub_llm())

        with pytest.raises(CacheError):
            run(service.learn_word("silk", "材质"))
        broken.delete.assert_not_awaited()
