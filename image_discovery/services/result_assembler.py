"""Packages an escalation outcome into the response payload.

Pure mapping with no business logic.  Identifier and timestamp sources
are injected so tests can pin them and assert on exact output.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePath
from uuid import uuid4

from image_discovery.models.image import EscalationOutcome, KeywordSet
from image_discovery.models.payload import (
    ImagePayload,
    ImageSearchResponse,
    MetadataPayload,
    SearchResultsPayload,
)
from image_discovery.services.candidate_parser import SYNTHETIC_DESCRIPTION_PREFIX
from image_discovery.utils.text_normalizer import slugify

_DEFAULT_FILENAME_STEM = "enhanced"


def _random_image_id() -> str:
    return f"img_{uuid4().hex[:12]}"


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


class ResultAssembler:
    """Builds :class:`ImageSearchResponse` objects.  Never fails."""

    def __init__(
        self,
        id_factory: Callable[[], str] = _random_image_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._id_factory = id_factory
        self._clock = clock

    def assemble(
        self,
        outcome: EscalationOutcome,
        keywords: KeywordSet,
        *,
        article_id: str,
        total_time_ms: int,
        alt_text: str = "",
        filename: str = "",
    ) -> ImageSearchResponse:
        image = outcome.image
        level = outcome.level

        return ImageSearchResponse(
            image=ImagePayload(
                id=self._id_factory(),
                article_id=article_id,
                url=image.url,
                filename=self.suggest_filename(outcome, filename),
                alt_text=alt_text.strip() or self._alt_text(image.description, keywords),
                status="generated" if outcome.was_generated else "found",
                relevance_score=image.relevance_score,
                search_level=level,
            ),
            search_results=SearchResultsPayload(
                total_found=outcome.candidates_evaluated,
                candidates_evaluated=outcome.candidates_evaluated,
                best_score=image.relevance_score,
                search_level=level,
                processing_time=outcome.processing_time_ms,
            ),
            metadata=MetadataPayload(
                was_generated=outcome.was_generated,
                provider=f"{outcome.provider}-{level.value}",
                search_time=outcome.processing_time_ms,
                total_time=max(total_time_ms, outcome.processing_time_ms),
                keywords=keywords.as_list(),
            ),
        )

    def suggest_filename(self, outcome: EscalationOutcome, requested: str = "") -> str:
        """``<stem>-<level>-<UTC timestamp>.jpg``; *requested* supplies the stem."""
        stem = slugify(PurePath(requested).stem, fallback="") if requested.strip() else ""
        timestamp = self._clock().strftime("%Y%m%d%H%M%S")
        return f"{stem or _DEFAULT_FILENAME_STEM}-{outcome.level.value}-{timestamp}.jpg"

    @staticmethod
    def _alt_text(description: str, keywords: KeywordSet) -> str:
        if description and not description.startswith(SYNTHETIC_DESCRIPTION_PREFIX):
            return description
        if keywords:
            return f"Professional image related to keywords: {', '.join(keywords.top(3))}"
        return description
