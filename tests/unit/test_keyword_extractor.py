"""Unit tests for the KeywordExtractor."""

from __future__ import annotations

from image_discovery.models.image import KeywordSet
from image_discovery.services.keyword_extractor import KeywordExtractor


class TestKeywordExtractor:
    """Tests for title-first keyword extraction."""

    def setup_method(self) -> None:
        self.extractor = KeywordExtractor()

    def test_title_tokens_lead_frequent_body_tokens(self) -> None:
        body = "mercato " * 5
        keywords = self.extractor.extract("Tecnologia AI in Italia", body)

        # "ai" and "in" fail the length filter; the title tokens come first.
        assert keywords.top(3) == ("tecnologia", "italia", "mercato")

    def test_title_token_survives_even_when_rare(self) -> None:
        body = " ".join(f"parola{i} " * 3 for i in range(20))
        keywords = self.extractor.extract("Fotovoltaico", body)

        assert keywords.terms[0] == "fotovoltaico"
        assert len(keywords) == KeywordSet.MAX_TERMS

    def test_filters_short_words_stop_words_and_numbers(self) -> None:
        keywords = self.extractor.extract(
            "Il futuro della mobilità",
            "Nel 2030 questo mercato sarà per tutti, the future of mobility 12345",
        )

        assert "della" not in keywords
        assert "questo" not in keywords
        assert "2030" not in keywords
        assert "12345" not in keywords
        assert "the" not in keywords
        assert "futuro" in keywords
        assert "mobilità" in keywords

    def test_no_duplicates(self) -> None:
        keywords = self.extractor.extract(
            "Energia solare",
            "energia solare energia solare energia pannelli",
        )

        assert keywords.as_list().count("energia") == 1
        assert keywords.as_list().count("solare") == 1

    def test_frequency_ranks_body_tokens(self) -> None:
        keywords = self.extractor.extract(
            "Titolo",
            "pannelli batterie batterie inverter inverter inverter",
        )

        assert keywords.as_list() == ["titolo", "inverter", "batterie", "pannelli"]

    def test_equal_frequency_keeps_first_appearance_order(self) -> None:
        keywords = self.extractor.extract("", "zucchine carote patate")

        assert keywords.as_list() == ["zucchine", "carote", "patate"]

    def test_never_more_than_ten_terms(self) -> None:
        title = " ".join(f"titolo{chr(97 + i)}" for i in range(14))
        keywords = self.extractor.extract(title, "qualcosa di diverso")

        assert len(keywords) == 10
        assert keywords.terms[0] == "titoloa"

    def test_degenerate_input_yields_empty_set(self) -> None:
        keywords = self.extractor.extract("il la", "a e o 123")

        assert len(keywords) == 0
        assert not keywords

    def test_is_deterministic(self) -> None:
        title = "Guida al Risparmio Energetico"
        body = "Il risparmio energetico parte dall'energia che non consumiamo."

        assert self.extractor.extract(title, body) == self.extractor.extract(title, body)

    def test_custom_stop_words(self) -> None:
        extractor = KeywordExtractor(stop_words=frozenset({"mercato"}))
        keywords = extractor.extract("Mercato azionario", "")

        assert keywords.as_list() == ["azionario"]
