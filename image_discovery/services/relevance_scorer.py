"""Deterministic 0-100 relevance scoring for image candidates.

Scoring rules, applied to each candidate starting from 0:

    +15  per keyword found in the description
    +10  per keyword found in the URL
    +20  per title word (len > 3) found in the description
    +15  per title word (len > 3) found in the URL
    +10 / +8 / +6  host contains unsplash.com / pexels.com / pixabay.com
    -5   per generic stock-photo term present in the description

All matching is case-insensitive substring matching.  The total is
clamped to [0, 100].  The scorer is a pure function of its inputs:
identical candidates and text always give identical scores and order.
"""

from __future__ import annotations

from collections.abc import Sequence

from image_discovery.config.vocabulary import GENERIC_TERMS, SOURCE_BONUSES
from image_discovery.models.image import ImageCandidate, KeywordSet

KEYWORD_IN_DESCRIPTION = 15
KEYWORD_IN_URL = 10
TITLE_WORD_IN_DESCRIPTION = 20
TITLE_WORD_IN_URL = 15
GENERIC_TERM_PENALTY = 5
MIN_SCORE = 0
MAX_SCORE = 100

_MIN_TITLE_WORD_LENGTH = 4


class RelevanceScorer:
    """Assigns relevance scores and orders candidates best-first."""

    def __init__(
        self,
        source_bonuses: tuple[tuple[str, int], ...] = SOURCE_BONUSES,
        generic_terms: tuple[str, ...] = GENERIC_TERMS,
    ) -> None:
        self._source_bonuses = source_bonuses
        self._generic_terms = generic_terms

    def score(
        self,
        candidates: Sequence[ImageCandidate],
        title: str,
        body: str,
        keywords: KeywordSet,
    ) -> list[ImageCandidate]:
        """Return scored copies of *candidates*, highest score first.

        The sort is stable: equal scores keep their parse order.  *body*
        only reaches the score through *keywords*, which were extracted
        from it.
        """
        title_words = [word for word in title.lower().split() if len(word) >= _MIN_TITLE_WORD_LENGTH]
        lowered_keywords = [keyword.lower() for keyword in keywords]

        scored = [
            candidate.model_copy(
                update={"relevance_score": self.score_one(candidate, title_words, lowered_keywords)}
            )
            for candidate in candidates
        ]
        return sorted(scored, key=lambda candidate: candidate.relevance_score, reverse=True)

    def score_one(
        self,
        candidate: ImageCandidate,
        title_words: Sequence[str],
        keywords: Sequence[str],
    ) -> int:
        """Score a single candidate against pre-lowered title words and keywords."""
        description = candidate.description.lower()
        url = candidate.url.lower()
        host = candidate.source_domain.lower()
        total = 0

        for keyword in keywords:
            if keyword in description:
                total += KEYWORD_IN_DESCRIPTION
            if keyword in url:
                total += KEYWORD_IN_URL

        for word in title_words:
            if word in description:
                total += TITLE_WORD_IN_DESCRIPTION
            if word in url:
                total += TITLE_WORD_IN_URL

        for fragment, bonus in self._source_bonuses:
            if fragment in host:
                total += bonus

        for term in self._generic_terms:
            if term in description:
                total -= GENERIC_TERM_PENALTY

        return min(MAX_SCORE, max(MIN_SCORE, total))
