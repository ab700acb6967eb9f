"""Prompt construction for the three escalation levels.

Level 1 asks for a handful of images that match the article *exactly*,
quoting the title and the five strongest keywords with a low sampling
temperature.  Level 2 relaxes the request to the inferred themes and the
full keyword set.  Level 3 is not a search at all: it produces a compact
description for an image generator (title concepts, a couple of
keywords and a short excerpt of the body), capped at the generator's
prompt length.
"""

from __future__ import annotations

from dataclasses import dataclass

from image_discovery.config.vocabulary import STOP_WORDS
from image_discovery.models.image import KeywordSet, ThemeCategory
from image_discovery.utils.text_normalizer import tokenize

MAX_GENERATION_PROMPT = 400
_TOP_KEYWORDS = 5
_MAX_TITLE_CONCEPTS = 4
_MAX_CONTENT_THEMES = 2
_MAX_CONTENT_EXCERPT = 120


@dataclass(frozen=True)
class SearchPrompt:
    """A ready-to-send search request: instructions, prompt, temperature."""

    system: str
    user: str
    temperature: float


class PromptBuilder:
    """Builds provider prompts from article text and keywords."""

    def ultra_specific(self, title: str, keywords: KeywordSet) -> SearchPrompt:
        focus = ", ".join(keywords.top(_TOP_KEYWORDS)) or title
        user = (
            f'Find me 5-7 ultra-specific, free images for this exact topic: "{title}"\n\n'
            "CRITICAL REQUIREMENTS:\n"
            f"- Images must be DIRECTLY and SPECIFICALLY related to: {focus}\n"
            "- Must contain visual elements that clearly represent the main subject\n"
            "- Only professional, high-quality images from free sources\n"
            "- From Unsplash, Pixabay, Pexels with exact URLs ending in .jpg/.png/.webp\n\n"
            "SPECIFICITY LEVEL: MAXIMUM\n"
            "Search for images that someone would immediately recognize as being about "
            f'"{title}" specifically.\n\n'
            "Provide ONLY direct image URLs, one per line, each preceded by a short "
            "description of the image:"
        )
        return SearchPrompt(
            system=(
                "You are an expert at finding ultra-specific images that precisely "
                "match given topics with maximum relevance."
            ),
            user=user,
            temperature=0.1,
        )

    def thematic(
        self,
        title: str,
        keywords: KeywordSet,
        themes: tuple[ThemeCategory, ...],
    ) -> SearchPrompt:
        user = (
            f'Find me 5-7 thematic images related to: "{title}"\n\n'
            f"THEME CATEGORIES: {', '.join(theme.value for theme in themes)}\n"
            f"KEYWORDS: {', '.join(keywords)}\n\n"
            "Find professional images that represent these themes/concepts, even if "
            "not exactly specific to the title.\n"
            "Focus on high-quality, copyright-free images from trusted sources.\n\n"
            "Provide direct image URLs, one per line, each preceded by a short "
            "description of the image:"
        )
        return SearchPrompt(
            system=(
                "You are an expert at finding thematically relevant images for broad "
                "topic categories."
            ),
            user=user,
            temperature=0.3,
        )

    def generation(
        self,
        title: str,
        keywords: KeywordSet,
        custom_prompt: str = "",
        *,
        body: str = "",
    ) -> str:
        """Return the image-generation prompt for the article.

        A non-blank *custom_prompt* (the editor's own wording) wins over
        the derived one; both pass through the same length/quality guard.
        The derived prompt carries the opening of *body* as scene context.
        """
        if custom_prompt.strip():
            return self._optimize(custom_prompt)

        concepts = self._title_concepts(title)
        prompt = f"A professional, high-quality image representing: {' '.join(concepts) or title}"

        themes = [keyword for keyword in keywords if keyword not in concepts][:_MAX_CONTENT_THEMES]
        if themes:
            prompt += f", incorporating themes of {' and '.join(themes)}"

        excerpt = self._content_excerpt(body)
        if excerpt:
            prompt += f". Scene context: {excerpt}"

        prompt += ". Professional style, clean composition, suitable for article featured image."
        return self._optimize(prompt)

    @staticmethod
    def _title_concepts(title: str) -> list[str]:
        words = [word for word in tokenize(title) if len(word) > 2 and word not in STOP_WORDS]
        return list(dict.fromkeys(words))[:_MAX_TITLE_CONCEPTS]

    @staticmethod
    def _content_excerpt(body: str) -> str:
        text = " ".join(body.split())
        if len(text) > _MAX_CONTENT_EXCERPT:
            cut = text[:_MAX_CONTENT_EXCERPT]
            # Break on a word boundary unless the first word alone fills the excerpt.
            space = cut.rfind(" ")
            text = cut[:space] if space > 0 else cut
        return text.rstrip(" ,;:.")

    @staticmethod
    def _optimize(prompt: str) -> str:
        optimized = prompt.strip()
        if "high quality" not in optimized and "professional" not in optimized:
            optimized += ", high quality, professional"
        if len(optimized) > MAX_GENERATION_PROMPT:
            optimized = optimized[: MAX_GENERATION_PROMPT - 3] + "..."
        return optimized
