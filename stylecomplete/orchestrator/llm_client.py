"""
Gemini completion client with a two-tier model fallback.

FALLBACK CHAIN:
===============
1. PRIMARY model (default gemini-3-pro-preview)
2. FALLBACK model (default gemini-2.5-pro), same key and prompt

Any failure of the primary call (HTTP error status, network error, an answer
without text, or text that is not a JSON array) moves on to the fallback.
If the fallback fails too, the client returns an EXHAUSTED outcome with an
empty suggestion list. `complete()` never raises.

USAGE:
======
    client = GeminiCompletionClient(key_rotator, httpx.AsyncClient())
    outcome = await client.complete("I love silk", "silk", {"season": "summer"})
    outcome.suggestions   # [] on any failure
    outcome.status        # CompletionStatus.PRIMARY / FALLBACK / ...
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from configs import (
    COMPLETION_TEMPERATURE,
    FALLBACK_MODEL,
    GEMINI_API_BASE,
    PRIMARY_MODEL,
)
from stylecomplete.models import CompletionOutcome, CompletionStatus

from .json_utils import parse_suggestion_array
from .key_rotator import KeyRotator
from .prompts import build_completion_prompt

logger = logging.getLogger("stylecomplete.llm")


class LLMError(Exception):
    """Raised when a single upstream call fails."""
    pass


class GeminiCompletionClient:
    """Calls generateContent on the primary model, then the fallback model."""

    def __init__(
        self,
        key_rotator: KeyRotator,
        http_client: httpx.AsyncClient,
        primary_model: str = PRIMARY_MODEL,
        fallback_model: str = FALLBACK_MODEL,
        api_base: str = GEMINI_API_BASE,
        temperature: float = COMPLETION_TEMPERATURE,
    ):
        self.key_rotator = key_rotator
        self.http_client = http_client
        self.primary_model = primary_model
        self.fallback_model = fallback_model
        self.api_base = api_base.rstrip("/")
        self.temperature = temperature

        self.stats = {
            "total_calls": 0,
            "primary_successes": 0,
            "fallback_successes": 0,
            "exhausted": 0,
            "no_credentials": 0,
        }

    async def complete(
        self,
        full_text: str,
        trigger_word: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> CompletionOutcome:
        """Ask the model for completions of `trigger_word` within `full_text`."""
        self.stats["total_calls"] += 1

        api_key = self.key_rotator.next_key()
        if not api_key:
            self.stats["no_credentials"] += 1
            return CompletionOutcome(
                status=CompletionStatus.NO_CREDENTIALS,
                reason="No Gemini API keys configured",
            )

        prompt = build_completion_prompt(full_text, trigger_word, context)

        try:
            suggestions = await self._send_request(self.primary_model, api_key, prompt)
            self.stats["primary_successes"] += 1
            return CompletionOutcome(
                suggestions=suggestions,
                status=CompletionStatus.PRIMARY,
                model=self.primary_model,
            )
        except Exception as e:
            primary_reason = str(e)
            logger.warning(
                "⚠️ %s failed (%s). Switching to %s...",
                self.primary_model, primary_reason, self.fallback_model,
            )

        try:
            suggestions = await self._send_request(self.fallback_model, api_key, prompt)
            self.stats["fallback_successes"] += 1
            return CompletionOutcome(
                suggestions=suggestions,
                status=CompletionStatus.FALLBACK,
                model=self.fallback_model,
            )
        except Exception as e:
            fallback_reason = str(e)

        self.stats["exhausted"] += 1
        reason = (
            f"{self.primary_model}: {primary_reason}; "
            f"{self.fallback_model}: {fallback_reason}"
        )
        logger.error("❌ All AI models failed. %s", reason)
        return CompletionOutcome(status=CompletionStatus.EXHAUSTED, reason=reason)

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": self.temperature,
            },
        }

    async def _send_request(self, model_id: str, api_key: str, prompt: str) -> List[Any]:
        """
        One generateContent call.

        Raises:
            LLMError: transport failure, non-2xx status, or unexpected body shape
            JSONExtractionError: answer text is not a JSON array
        """
        logger.info("[AI] Attempting to call model: %s...", model_id)
        url = f"{self.api_base}/models/{model_id}:generateContent"

        try:
            response = await self.http_client.post(
                url,
                params={"key": api_key},
                json=self.build_request_body(prompt),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise LLMError(f"HTTP {e.response.status_code} from {model_id}")
        except httpx.HTTPError as e:
            raise LLMError(f"{type(e).__name__} calling {model_id}: {e}")
        except ValueError as e:
            raise LLMError(f"Non-JSON response body from {model_id}: {e}")

        raw_text = extract_answer_text(data)
        if raw_text is None:
            raise LLMError(f"No candidate text in response from {model_id}")

        return parse_suggestion_array(raw_text)

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self.stats,
            "fallback_chain": f"{self.primary_model} → {self.fallback_model}",
        }


def extract_answer_text(data: Any) -> Optional[str]:
    """Read candidates[0].content.parts[0].text, or None if the path is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
