"""
Pydantic models shared between the completion pipeline and the API layer.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CompletionStatus(str, Enum):
    """How a completion attempt ended."""
    PRIMARY = "primary"                 # Primary model answered
    FALLBACK = "fallback"               # Primary failed, fallback model answered
    NO_CREDENTIALS = "no_credentials"   # Key pool empty, no call made
    EXHAUSTED = "exhausted"             # Both models failed


class SuggestionSource(str, Enum):
    """Where the suggestions returned to the editor came from."""
    CACHE = "cache"
    PRIMARY = "primary"
    FALLBACK = "fallback"
    NO_CREDENTIALS = "no_credentials"
    EXHAUSTED = "exhausted"
    EMPTY_TRIGGER = "empty_trigger"


# ============================================================
# Completion Models
# ============================================================

class CompletionOutcome(BaseModel):
    """
    Tagged result of one completion request.

    The HTTP caller only ever sees `suggestions` (empty on any failure);
    `status` and `reason` keep the failure cause available to logs and
    response headers.
    """
    suggestions: List[Any] = Field(default_factory=list, description="Parsed model suggestions")
    status: CompletionStatus = Field(description="Terminal state of the fallback chain")
    model: Optional[str] = Field(default=None, description="Model that produced the answer")
    reason: Optional[str] = Field(default=None, description="Failure reason when not ok")

    @property
    def ok(self) -> bool:
        return self.status in (CompletionStatus.PRIMARY, CompletionStatus.FALLBACK)


class SuggestionResult(BaseModel):
    """Suggestions for one lookup plus where they came from."""
    suggestions: List[Any] = Field(default_factory=list)
    source: SuggestionSource
    last_word: str = ""


# ============================================================
# Vocabulary Models
# ============================================================

def _utc_timestamp() -> str:
    # Millisecond ISO-8601 with a Z suffix, as a serialized JS Date reads
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class VocabularyEntry(BaseModel):
    """A word the editor taught the system; stored without expiry."""
    word: str = Field(description="Learned word, case preserved")
    category: Optional[str] = Field(default=None, description="Editor-supplied category")
    addedAt: str = Field(default_factory=_utc_timestamp, description="UTC time the word was learned")
