"""Maps a keyword set onto thematic categories for the level-2 prompt."""

from __future__ import annotations

from image_discovery.config.vocabulary import FALLBACK_THEMES, THEME_TABLE
from image_discovery.models.image import KeywordSet, ThemeCategory


class ThemeInferencer:
    """Substring-based theme detection.

    A keyword maps to a theme when it contains any of the theme's
    substrings.  Output follows the table's declaration order, not the
    keyword order, so the same keywords always produce the same prompt.
    When nothing matches, the fixed ``(general, professional)`` pair is
    returned so the thematic prompt never lacks context.
    """

    def __init__(
        self,
        table: tuple[tuple[ThemeCategory, tuple[str, ...]], ...] = THEME_TABLE,
        fallback: tuple[ThemeCategory, ...] = FALLBACK_THEMES,
    ) -> None:
        self._table = table
        self._fallback = fallback

    def infer(self, keywords: KeywordSet) -> tuple[ThemeCategory, ...]:
        lowered = [keyword.lower() for keyword in keywords]
        detected = tuple(
            theme
            for theme, fragments in self._table
            if any(fragment in keyword for keyword in lowered for fragment in fragments)
        )
        return detected or self._fallback
