"""
Text helpers: normalization and placeholder detection for observation text.

Contains:
- normalize: lowercase and collapse whitespace
- is_placeholder: recognise "undetermined"-style values from the captioning step
- split_words: whitespace tokenization that keeps hyphenated words
"""

import re
from typing import List, Optional

_WHITESPACE = re.compile(r"\s+")
_EDGE_PUNCT = ".,;:!?()[]{}\"'¡¿…"

PLACEHOLDER_VALUES = frozenset({
    "", "-", "n/a", "na", "none", "nothing", "unknown", "undetermined",
    "not determined", "not visible", "ninguno", "ninguna", "nada",
    "desconocido", "desconocida", "no visible",
})
"""Whole-field values that carry no observation"""

PLACEHOLDER_PHRASES = (
    "undetermined",
    "not determined",
    "not clearly visible",
    "no determinad",
    "no claramente visible",
    "sin sonidos detectados",
)
"""Fragments the captioning fallback uses, e.g. "postura no determinada"."""


def normalize(text: Optional[str]) -> str:
    """
    Lowercase and collapse whitespace.

    Args:
        text: raw text, may be None

    Returns:
        Normalized string (empty string for None)
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", str(text)).strip().lower()


def is_placeholder(text: Optional[str]) -> bool:
    """Return True when the text is empty or an "undetermined" marker."""
    value = normalize(text).strip(_EDGE_PUNCT).strip()
    if value in PLACEHOLDER_VALUES:
        return True
    return any(phrase in value for phrase in PLACEHOLDER_PHRASES)


def split_words(text: str) -> List[str]:
    """
    Split on whitespace and strip surrounding punctuation.

    Hyphenated words ("half-closed") stay whole.
    """
    words = []
    for raw in text.split():
        word = raw.strip(_EDGE_PUNCT)
        if word:
            words.append(word)
    return words


def split_phrases(text: str) -> List[str]:
    """Split on commas into stripped, non-empty sub-phrases."""
    return [p.strip() for p in text.split(",") if p.strip()]
