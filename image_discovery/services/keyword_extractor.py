"""Title-first keyword extraction from article text.

The keyword set drives everything downstream: the level-1 prompt quotes
its first five entries, the level-2 prompt quotes all of them, themes
are inferred from them, and the relevance scorer matches them against
candidate descriptions and URLs.

Algorithm
---------
1. Normalize ``title + body`` (lowercase, punctuation to spaces,
   whitespace collapsed) and split into tokens.
2. Drop tokens of length <= 3, stop words, and pure numbers.
3. Rank the survivors by frequency and keep the top 15; ties keep the
   order in which the tokens first appeared.
4. Tokenize the title alone with the same filters.  Every title token is
   forced in, ahead of the frequency-ranked body tokens.
5. Deduplicate and truncate to :attr:`KeywordSet.MAX_TERMS`.
"""

from __future__ import annotations

from collections import Counter

import structlog

from image_discovery.config.vocabulary import STOP_WORDS
from image_discovery.models.image import KeywordSet
from image_discovery.utils.logging import get_logger
from image_discovery.utils.text_normalizer import tokenize

_MIN_TOKEN_LENGTH = 4
_TOP_FREQUENT = 15


class KeywordExtractor:
    """Derives a ranked :class:`KeywordSet` from an article."""

    def __init__(self, stop_words: frozenset[str] = STOP_WORDS) -> None:
        self._stop_words = stop_words
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def extract(self, title: str, body: str) -> KeywordSet:
        """Return the keyword set for *title* and *body*.

        Never fails: degenerate input yields an empty set, which callers
        must treat as a valid low-signal state.
        """
        frequency = Counter(self._filter(tokenize(f"{title} {body}")))
        # most_common sorts stably, so equal counts keep first-appearance order.
        frequent = [word for word, _count in frequency.most_common(_TOP_FREQUENT)]
        title_tokens = self._filter(tokenize(title))

        ordered = list(dict.fromkeys([*title_tokens, *frequent]))
        keywords = KeywordSet(terms=tuple(ordered[: KeywordSet.MAX_TERMS]))

        self._logger.debug(
            "keywords_extracted",
            title_tokens=len(dict.fromkeys(title_tokens)),
            keywords=keywords.as_list(),
        )
        return keywords

    def _filter(self, tokens: list[str]) -> list[str]:
        return [
            token
            for token in tokens
            if len(token) >= _MIN_TOKEN_LENGTH
            and token not in self._stop_words
            and not token.isdigit()
        ]
