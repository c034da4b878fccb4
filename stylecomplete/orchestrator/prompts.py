"""Instruction text sent to the model for each completion request."""
from typing import Any, Mapping, Optional


COMPLETION_PROMPT = """
Role: Context-Aware Fashion LSP Engine.
{context_instruction}
Input Sentence: "{full_text}"
Focused Trigger Word: "{trigger_word}"

Task:
1. Suggest completions for the trigger word.
2. Treat Pinyin as Chinese.
3. If the trigger matches a known industry term, suggest it.

Output Format (LSP Standard):
Return a raw JSON array of objects:
[{{
    "label": "Display Text",
    "insertText": "Text to insert",
    "kind": "Category (材质/造型)",
    "detail": "Short explanation",
    "trigger": "{trigger_word}"
}}]
"""


def get_season(context: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Season from the editor context, or None when absent or blank."""
    if not context:
        return None
    season = context.get("season")
    if not season or not isinstance(season, str):
        return None
    return season


def build_completion_prompt(
    full_text: str,
    trigger_word: str,
    context: Optional[Mapping[str, Any]] = None,
) -> str:
    """Compose the instruction; the season clause appears only when a season is set."""
    context_instruction = ""
    season = get_season(context)
    if season:
        context_instruction = (
            f"Context: The user is designing for {season.upper()}. "
            "Prioritize materials/styles suitable for this season."
        )

    return COMPLETION_PROMPT.format(
        context_instruction=context_instruction,
        full_text=full_text,
        trigger_word=trigger_word,
    )
