"""Unit tests for the RelevanceScorer."""

from __future__ import annotations

import pytest

from image_discovery.models.image import ImageCandidate, KeywordSet
from image_discovery.services.relevance_scorer import RelevanceScorer


def _candidate(
    description: str,
    url: str = "https://img.freepik.com/photo.jpg",
    source_domain: str = "img.freepik.com",
) -> ImageCandidate:
    return ImageCandidate(url=url, source_domain=source_domain, description=description)


@pytest.fixture
def scorer() -> RelevanceScorer:
    return RelevanceScorer()


class TestScoringRules:
    def test_keyword_in_description(self, scorer: RelevanceScorer) -> None:
        [scored] = scorer.score([_candidate("pannelli solari")], "", "", KeywordSet(terms=("solari",)))
        assert scored.relevance_score == 15

    def test_keyword_in_url(self, scorer: RelevanceScorer) -> None:
        candidate = _candidate("x", url="https://img.freepik.com/solari-tetto.jpg")
        [scored] = scorer.score([candidate], "", "", KeywordSet(terms=("solari",)))
        assert scored.relevance_score == 10

    def test_title_words_in_description_and_url(self, scorer: RelevanceScorer) -> None:
        candidate = _candidate("vista del tetto", url="https://img.freepik.com/tetto.jpg")
        # "del" is too short to count as a title word.
        [scored] = scorer.score([candidate], "Il tetto del futuro", "", KeywordSet())
        assert scored.relevance_score == 20 + 15

    @pytest.mark.parametrize(
        ("host", "bonus"),
        [
            ("images.unsplash.com", 10),
            ("images.pexels.com", 8),
            ("cdn.pixabay.com", 6),
            ("img.freepik.com", 0),
        ],
    )
    def test_source_bonus(self, scorer: RelevanceScorer, host: str, bonus: int) -> None:
        candidate = _candidate("x", url=f"https://{host}/p.jpg", source_domain=host)
        [scored] = scorer.score([candidate], "", "", KeywordSet())
        assert scored.relevance_score == bonus

    def test_generic_terms_penalised_once_each(self, scorer: RelevanceScorer) -> None:
        candidate = _candidate(
            "casa people people background",
            url="https://images.unsplash.com/p.jpg",
            source_domain="images.unsplash.com",
        )
        [scored] = scorer.score([candidate], "", "", KeywordSet(terms=("casa",)))
        # 15 (keyword) + 10 (unsplash) - 5 (people) - 5 (background)
        assert scored.relevance_score == 15

    def test_matching_is_case_insensitive(self, scorer: RelevanceScorer) -> None:
        [scored] = scorer.score([_candidate("ENERGIA Pulita")], "", "", KeywordSet(terms=("energia",)))
        assert scored.relevance_score == 15


class TestClamping:
    def test_clamped_to_zero(self, scorer: RelevanceScorer) -> None:
        candidate = _candidate("business people abstract concept background")
        [scored] = scorer.score([candidate], "", "", KeywordSet())
        assert scored.relevance_score == 0

    def test_clamped_to_hundred(self, scorer: RelevanceScorer) -> None:
        terms = ("alpha", "beta", "gamma", "delta", "epsilon", "zeta", "theta", "iota")
        candidate = _candidate(" ".join(terms), url="https://img.freepik.com/" + "-".join(terms) + ".jpg")
        [scored] = scorer.score([candidate], "alpha beta gamma", "", KeywordSet(terms=terms))
        assert scored.relevance_score == 100


class TestOrdering:
    def test_highest_score_first(self, scorer: RelevanceScorer) -> None:
        weak = _candidate("tetto")
        strong = _candidate("tetto con pannelli solari")
        keywords = KeywordSet(terms=("tetto", "pannelli", "solari"))

        scored = scorer.score([weak, strong], "", "", keywords)

        assert [c.description for c in scored] == [strong.description, weak.description]
        assert scored[0].relevance_score > scored[1].relevance_score

    def test_ties_keep_parse_order(self, scorer: RelevanceScorer) -> None:
        first = _candidate("pannelli A", url="https://img.freepik.com/a.jpg")
        second = _candidate("pannelli B", url="https://img.freepik.com/b.jpg")

        scored = scorer.score([first, second], "", "", KeywordSet(terms=("pannelli",)))

        assert [c.url for c in scored] == [first.url, second.url]

    def test_is_deterministic(self, scorer: RelevanceScorer) -> None:
        candidates = [_candidate(f"pannelli {i}", url=f"https://img.freepik.com/{i}.jpg") for i in range(5)]
        keywords = KeywordSet(terms=("pannelli", "3"))

        first = scorer.score(candidates, "Pannelli", "", keywords)
        second = scorer.score(candidates, "Pannelli", "", keywords)

        assert first == second

    def test_inputs_are_not_mutated(self, scorer: RelevanceScorer) -> None:
        candidate = _candidate("pannelli")
        scorer.score([candidate], "", "", KeywordSet(terms=("pannelli",)))
        assert candidate.relevance_score == 0

    def test_empty_input(self, scorer: RelevanceScorer) -> None:
        assert scorer.score([], "Titolo", "corpo", KeywordSet()) == []
