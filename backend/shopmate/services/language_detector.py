"""
Script-based language detection.

WHAT: Classify a chat message as English, Hindi or Kannada
WHY: Replies are localized into the buyer's language
HOW: Look for any character of the Devanagari or Kannada Unicode block

This is an approximation, not language identification: romanized Hindi
("theek hai") is reported as English, and any Devanagari text (Marathi,
Nepali) is reported as Hindi.
"""

import re

from ..models.negotiation import LocaleTag

DEVANAGARI_RE = re.compile(r"[\u0900-\u097F]")
KANNADA_RE = re.compile(r"[\u0C80-\u0CFF]")

# Blocks are disjoint, so order only matters for mixed-script text.
SCRIPT_RULES: list[tuple[re.Pattern, LocaleTag]] = [
    (DEVANAGARI_RE, "hi"),
    (KANNADA_RE, "kn"),
]

DEFAULT_LOCALE: LocaleTag = "en"


def detect_language(text: str | None) -> LocaleTag:
    """
    Detect the locale of a message from the scripts it uses.

    Never fails: empty input and unmatched scripts default to English.

    Args:
        text: Message text

    Returns:
        "hi", "kn" or "en"
    """
    if not text:
        return DEFAULT_LOCALE

    for pattern, locale in SCRIPT_RULES:
        if pattern.search(text):
            return locale

    return DEFAULT_LOCALE
