"""
JSON parsing for model answers.

Even with responseMimeType=application/json, Gemini sometimes wraps its
answer in markdown fences:

    ```json
    [{"label": "Silk Satin", ...}]
    ```

All fence markers are removed before parsing, and the result must be a
JSON array of suggestions.
"""
import json
import re
from typing import Any, List


class JSONExtractionError(ValueError):
    """Raised when a model answer is not a JSON array."""
    pass


_FENCE_PATTERN = re.compile(r"```(?:json)?")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and trim surrounding whitespace."""
    return _FENCE_PATTERN.sub("", text).strip()


def parse_suggestion_array(text: str) -> List[Any]:
    """
    Parse a model answer into a list of suggestions.

    Raises:
        JSONExtractionError: if the text is empty, not JSON, or not an array
    """
    if not text or not isinstance(text, str):
        raise JSONExtractionError("Model answer is empty or not a string")

    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONExtractionError(
            f"Model answer is not valid JSON: {e}\n"
            f"Answer: {cleaned[:200]}"
        )

    if not isinstance(parsed, list):
        raise JSONExtractionError(
            f"Expected JSON array, got {type(parsed).__name__}"
        )

    return parsed
