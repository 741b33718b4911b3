"""Post-processing of backend answer text."""
from typing import Any

UNKNOWN_ANSWER_PHRASES = (
    "i don't know",
    "i do not know",
    "no relevant information",
    "couldn't find",
    "not found",
    "don't have the answer",
)

APOLOGY_MESSAGE = (
    "I wish I could help with that, but I don’t have the answer to that "
    "right now based on context provided."
)


def clean(text: Any) -> str:
    """Replace "I don't know"-style answers with a fixed apology.

    Missing or non-string input yields an empty string; anything else is
    returned trimmed.
    """
    if not text or not isinstance(text, str):
        return ""
    lowered = text.lower()
    if any(phrase in lowered for phrase in UNKNOWN_ANSWER_PHRASES):
        return APOLOGY_MESSAGE
    return text.strip()
