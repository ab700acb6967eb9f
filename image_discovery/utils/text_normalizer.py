"""Text normalization helpers shared by keyword extraction and assembly.

Two concerns live here:

1. **Token normalization** -- lowercases article text, replaces every
   character that is not a word character or whitespace with a space, and
   collapses runs of whitespace.  Python's ``\\w`` is Unicode-aware, so
   accented Italian letters (à, è, ì, ò, ù) survive untouched.

2. **Slugs** -- ASCII-only, filesystem-friendly stems used when the
   result assembler suggests a filename for the chosen image.
"""

from __future__ import annotations

import re
import unicodedata

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def normalize_text(text: str) -> str:
    """Lowercase *text*, drop punctuation, and collapse whitespace."""
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def tokenize(text: str) -> list[str]:
    """Split normalized *text* into tokens (empty input yields ``[]``)."""
    normalized = normalize_text(text)
    return normalized.split(" ") if normalized else []


def slugify(value: str, fallback: str = "image") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only.

    Accented letters are decomposed first so ``"Qualità"`` becomes
    ``"qualita"`` instead of losing the final letter.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    normalized = decomposed.encode("ascii", "ignore").decode("ascii").lower()
    normalized = _SLUG_RE.sub("-", normalized).strip("-")
    return normalized or fallback
