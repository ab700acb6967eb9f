"""Request-level facade: validate, extract keywords, escalate, assemble.

Architecture role: **Facade**
-----------------------------
The API route and the CLI both call :meth:`ImageDiscoveryService.discover`.
It owns the fail-fast checks (request validation and provider
configuration, both before any network activity), runs the escalation
controller, and hands the single outcome to the result assembler.  It
contains no search logic of its own.
"""

from __future__ import annotations

import asyncio
import time

import structlog

from image_discovery.interfaces.generation_provider import IGenerationProvider
from image_discovery.interfaces.search_provider import ISearchProvider
from image_discovery.models.image import SearchLevel
from image_discovery.models.payload import ImageSearchRequest, ImageSearchResponse
from image_discovery.pipeline.escalation import SearchEscalationController
from image_discovery.services.keyword_extractor import KeywordExtractor
from image_discovery.services.result_assembler import ResultAssembler
from image_discovery.utils.errors import (
    ConfigurationError,
    InvalidRequestError,
    NoSuitableImagesError,
    SearchCancelledError,
)
from image_discovery.utils.logging import get_logger

_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("article_id", "articleId"),
    ("article_title", "articleTitle"),
    ("article_content", "articleContent"),
)


class ImageDiscoveryService:
    """Finds (or generates) one representative image per article."""

    def __init__(
        self,
        controller: SearchEscalationController,
        keyword_extractor: KeywordExtractor,
        assembler: ResultAssembler,
        search_provider: ISearchProvider,
        generation_provider: IGenerationProvider | None = None,
    ) -> None:
        self._controller = controller
        self._keywords = keyword_extractor
        self._assembler = assembler
        self._search = search_provider
        self._generation = generation_provider
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def discover(
        self,
        request: ImageSearchRequest,
        *,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ImageSearchResponse:
        """Run one image search.

        Parameters
        ----------
        request:
            The article to illustrate.
        timeout:
            Per provider call, in seconds.  Defaults to the controller's.
        cancel_event:
            Setting this event aborts the search with
            :class:`~image_discovery.utils.errors.SearchCancelledError`.

        Raises
        ------
        InvalidRequestError
            ``articleId``, ``articleTitle`` or ``articleContent`` is blank.
        ConfigurationError
            The provider needed for the first level has no credentials.
        NoSuitableImagesError
            All levels were exhausted.
        SearchCancelledError
            The cancellation signal fired mid-search.
        """
        self.validate(request)
        start_level = (
            SearchLevel.AI_GENERATED if request.force_regenerate else SearchLevel.ULTRA_SPECIFIC
        )
        self._check_configuration(start_level)

        started = time.perf_counter()
        log = self._logger.bind(article_id=request.article_id)
        log.info(
            "image_search_started",
            title=request.article_title[:50],
            content_length=len(request.article_content),
            start_level=start_level.value,
        )

        keywords = self._keywords.extract(request.article_title, request.article_content)
        log.info("keywords_ready", keywords=keywords.as_list())

        try:
            outcome = await self._controller.run(
                request.article_title,
                request.article_content,
                keywords,
                custom_prompt=request.ai_prompt,
                start_level=start_level,
                timeout=timeout,
                cancel_event=cancel_event,
            )
        except (NoSuitableImagesError, SearchCancelledError) as exc:
            log.warning(
                "image_search_failed",
                code=exc.code,
                elapsed_ms=int((time.perf_counter() - started) * 1000),
            )
            raise

        total_time_ms = int((time.perf_counter() - started) * 1000)
        response = self._assembler.assemble(
            outcome,
            keywords,
            article_id=request.article_id,
            total_time_ms=total_time_ms,
            alt_text=request.alt_text,
            filename=request.filename,
        )
        log.info(
            "image_search_completed",
            search_level=outcome.level.value,
            relevance_score=outcome.image.relevance_score,
            attempts=[attempt.status.value for attempt in outcome.attempts],
            total_time_ms=total_time_ms,
        )
        return response

    @staticmethod
    def validate(request: ImageSearchRequest) -> None:
        """Raise :class:`InvalidRequestError` when a required field is blank."""
        missing = [
            wire_name
            for field_name, wire_name in _REQUIRED_FIELDS
            if not getattr(request, field_name).strip()
        ]
        if missing:
            raise InvalidRequestError(f"Missing required fields: {', '.join(missing)}")

    def _check_configuration(self, start_level: SearchLevel) -> None:
        if start_level is SearchLevel.AI_GENERATED:
            if self._generation is None or not self._generation.is_available():
                raise ConfigurationError(
                    "Image generation provider API key not configured",
                    provider_name=self._generation.get_provider_name() if self._generation else None,
                )
            return
        if not self._search.is_available():
            raise ConfigurationError(
                "Image search provider API key not configured",
                provider_name=self._search.get_provider_name(),
            )
