"""Unit tests for the PromptBuilder."""

from __future__ import annotations

from image_discovery.models.image import KeywordSet, ThemeCategory
from image_discovery.services.prompt_builder import MAX_GENERATION_PROMPT, PromptBuilder

KEYWORDS = KeywordSet(
    terms=("guida", "risparmio", "energetico", "energia", "casa", "bollette", "consumi")
)


class TestSearchPrompts:
    def setup_method(self) -> None:
        self.builder = PromptBuilder()

    def test_ultra_specific_quotes_title_and_top_five_keywords(self) -> None:
        prompt = self.builder.ultra_specific("Guida al Risparmio Energetico", KEYWORDS)

        assert '"Guida al Risparmio Energetico"' in prompt.user
        assert "guida, risparmio, energetico, energia, casa" in prompt.user
        assert "bollette" not in prompt.user
        assert prompt.temperature == 0.1
        assert "ultra-specific" in prompt.system

    def test_ultra_specific_falls_back_to_title_without_keywords(self) -> None:
        prompt = self.builder.ultra_specific("Solo titolo", KeywordSet())
        assert "SPECIFICALLY related to: Solo titolo" in prompt.user

    def test_thematic_lists_themes_and_all_keywords(self) -> None:
        prompt = self.builder.thematic(
            "Guida al Risparmio Energetico",
            KEYWORDS,
            (ThemeCategory.ENVIRONMENT, ThemeCategory.BUSINESS),
        )

        assert "THEME CATEGORIES: environment, business" in prompt.user
        assert "KEYWORDS: guida, risparmio, energetico, energia, casa, bollette, consumi" in prompt.user
        assert prompt.temperature == 0.3


class TestGenerationPrompt:
    def setup_method(self) -> None:
        self.builder = PromptBuilder()

    def test_derived_prompt_uses_title_concepts_and_two_themes(self) -> None:
        prompt = self.builder.generation("Guida al Risparmio Energetico", KEYWORDS)

        assert prompt.startswith(
            "A professional, high-quality image representing: guida risparmio energetico"
        )
        assert "incorporating themes of energia and casa" in prompt
        assert prompt.endswith("suitable for article featured image.")

    def test_custom_prompt_wins(self) -> None:
        prompt = self.builder.generation("Titolo", KEYWORDS, "A sunny rooftop with solar panels")
        assert prompt == "A sunny rooftop with solar panels, high quality, professional"

    def test_custom_prompt_with_quality_words_is_kept_verbatim(self) -> None:
        prompt = self.builder.generation("Titolo", KEYWORDS, "  professional photo of a kitchen  ")
        assert prompt == "professional photo of a kitchen"

    def test_blank_custom_prompt_is_ignored(self) -> None:
        prompt = self.builder.generation("Casa Verde", KeywordSet(), "   ")
        assert prompt.startswith("A professional, high-quality image representing: casa verde.")

    def test_long_prompt_is_truncated(self) -> None:
        prompt = self.builder.generation("Titolo", KEYWORDS, "professional " + "x" * 600)

        assert len(prompt) == MAX_GENERATION_PROMPT
        assert prompt.endswith("...")

    def test_derived_prompt_includes_body_excerpt(self) -> None:
        prompt = self.builder.generation(
            "Guida al Risparmio Energetico",
            KEYWORDS,
            body="Pannelli solari sul tetto\n\n di una casa   di campagna.",
        )

        assert "casa. Scene context: Pannelli solari sul tetto di una casa di campagna. " in prompt
        assert prompt.endswith("suitable for article featured image.")

    def test_long_body_excerpt_breaks_on_a_word(self) -> None:
        body = "risparmio energetico " * 20

        prompt = self.builder.generation("Titolo", KEYWORDS, body=body)

        excerpt = prompt.split("Scene context: ")[1].split(". Professional style")[0]
        assert len(excerpt) <= 120
        assert excerpt.endswith("energetico") or excerpt.endswith("risparmio")
        assert len(prompt) <= MAX_GENERATION_PROMPT

    def test_custom_prompt_ignores_body(self) -> None:
        prompt = self.builder.generation(
            "Titolo", KEYWORDS, "A sunny rooftop", body="Pannelli solari sul tetto"
        )
        assert "Pannelli" not in prompt

    def test_blank_body_adds_no_context(self) -> None:
        prompt = self.builder.generation("Casa Verde", KeywordSet(), body=" \n ")
        assert "Scene context" not in prompt
