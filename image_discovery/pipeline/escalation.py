"""Three-level search escalation: ultra-specific → thematic → generated.

ARCHITECTURE NOTE:
    The escalation is a small state machine driven by an ordered
    transition table (:data:`LEVEL_ORDER` plus one :class:`LevelPolicy`
    per level).  Levels run strictly one after another; a level only
    starts once the previous one has fully resolved, so the broader or
    generative (and more expensive) strategies are paid for only when
    the cheaper, more precise one failed.

    Each search level:
        1. Builds its prompt and calls the search provider.
        2. A provider error or timeout is a *miss*: logged, absorbed,
           and the next level runs.  Provider failures never abort the
           request.
        3. Parses and scores the candidates; only the best one is
           examined.  If it clears the level's quality gate the
           escalation stops immediately, even though a later level might
           score higher.

    The generation level has no contest: a successful generation call is
    accepted unconditionally with a synthetic score.  If it fails too,
    the request ends with :class:`NoSuitableImagesError`.

    Cancellation: an optional ``asyncio.Event`` is checked before each
    level and raced against every provider call.  When it fires, the
    in-flight call is cancelled and :class:`SearchCancelledError` is
    raised; no partial result is returned.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeVar
from urllib.parse import urlparse

import httpx
import structlog

from image_discovery.interfaces.generation_provider import IGenerationProvider
from image_discovery.interfaces.search_provider import ISearchProvider
from image_discovery.models.image import (
    AttemptStatus,
    EscalationOutcome,
    ImageCandidate,
    KeywordSet,
    LevelAttempt,
    SearchLevel,
)
from image_discovery.services.candidate_parser import CandidateParser
from image_discovery.services.prompt_builder import PromptBuilder, SearchPrompt
from image_discovery.services.relevance_scorer import RelevanceScorer
from image_discovery.services.theme_inferencer import ThemeInferencer
from image_discovery.utils.errors import (
    NoSuitableImagesError,
    ProviderError,
    SearchCancelledError,
)
from image_discovery.utils.logging import get_logger

T = TypeVar("T")

# Fixed visiting order; levels are never revisited.
LEVEL_ORDER: tuple[SearchLevel, ...] = (
    SearchLevel.ULTRA_SPECIFIC,
    SearchLevel.THEMATIC,
    SearchLevel.AI_GENERATED,
)

# Failures that turn a level into a miss instead of failing the request.
# TimeoutError covers both asyncio timeouts and socket-level ones.
_MISS_ERRORS: tuple[type[BaseException], ...] = (
    ProviderError,
    asyncio.TimeoutError,
    httpx.HTTPError,
    OSError,
)


@dataclass(frozen=True)
class LevelPolicy:
    """Quality gate for one level.  ``threshold=None`` means always accept."""

    level: SearchLevel
    threshold: int | None


@dataclass(frozen=True)
class _LevelResult:
    attempt: LevelAttempt
    outcome: EscalationOutcome | None = None


class SearchEscalationController:
    """Runs the escalation for one article and returns its single outcome.

    All collaborators are injected; the controller holds no per-request
    state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        search_provider: ISearchProvider,
        generation_provider: IGenerationProvider | None,
        parser: CandidateParser,
        scorer: RelevanceScorer,
        theme_inferencer: ThemeInferencer,
        prompt_builder: PromptBuilder,
        *,
        ultra_specific_threshold: int = 85,
        thematic_threshold: int = 70,
        generated_score: int = 95,
        model_hint: str | None = None,
        timeout_seconds: float | None = 25.0,
    ) -> None:
        self._search = search_provider
        self._generation = generation_provider
        self._parser = parser
        self._scorer = scorer
        self._themes = theme_inferencer
        self._prompts = prompt_builder
        self._generated_score = generated_score
        self._model_hint = model_hint
        self._timeout = timeout_seconds
        self._policies: dict[SearchLevel, LevelPolicy] = {
            SearchLevel.ULTRA_SPECIFIC: LevelPolicy(SearchLevel.ULTRA_SPECIFIC, ultra_specific_threshold),
            SearchLevel.THEMATIC: LevelPolicy(SearchLevel.THEMATIC, thematic_threshold),
            SearchLevel.AI_GENERATED: LevelPolicy(SearchLevel.AI_GENERATED, None),
        }
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def policies(self) -> tuple[LevelPolicy, ...]:
        return tuple(self._policies[level] for level in LEVEL_ORDER)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        title: str,
        body: str,
        keywords: KeywordSet,
        *,
        custom_prompt: str = "",
        start_level: SearchLevel = SearchLevel.ULTRA_SPECIFIC,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> EscalationOutcome:
        """Escalate through the levels until one produces an acceptable image.

        Raises
        ------
        NoSuitableImagesError
            Every level was tried and none produced a result.
        SearchCancelledError
            *cancel_event* fired before a result was reached.
        """
        call_timeout = timeout if timeout is not None else self._timeout
        attempts: list[LevelAttempt] = []
        start_index = LEVEL_ORDER.index(start_level)

        for index, level in enumerate(LEVEL_ORDER):
            if index < start_index:
                attempts.append(
                    LevelAttempt(level=level, status=AttemptStatus.SKIPPED, reason="start level")
                )
                continue

            self._raise_if_cancelled(cancel_event, level)
            self._logger.info("escalation_level_started", level=level.value)

            if level is SearchLevel.AI_GENERATED:
                result = await self._run_generation_level(
                    title, body, keywords, custom_prompt, call_timeout, cancel_event
                )
            else:
                result = await self._run_search_level(
                    self._policies[level], title, body, keywords, call_timeout, cancel_event
                )

            attempts.append(result.attempt)
            if result.outcome is not None:
                return result.outcome.model_copy(update={"attempts": tuple(attempts)})

        self._logger.error(
            "escalation_exhausted",
            attempts=[attempt.model_dump(mode="json") for attempt in attempts],
        )
        raise NoSuitableImagesError()

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    async def _run_search_level(
        self,
        policy: LevelPolicy,
        title: str,
        body: str,
        keywords: KeywordSet,
        timeout: float | None,
        cancel_event: asyncio.Event | None,
    ) -> _LevelResult:
        level = policy.level
        started = time.perf_counter()
        prompt = self._prompt_for(level, title, keywords)

        try:
            raw_text = await self._guarded(
                self._search.search(
                    prompt.user,
                    self._model_hint,
                    system_prompt=prompt.system,
                    temperature=prompt.temperature,
                ),
                timeout,
                cancel_event,
            )
        except _MISS_ERRORS as exc:
            return self._miss(level, started, reason=str(exc) or type(exc).__name__)

        candidates = self._parser.parse(raw_text, keywords)
        if not candidates:
            return self._miss(level, started, reason="no usable candidates")

        scored = self._scorer.score(candidates, title, body, keywords)
        best = scored[0]
        elapsed_ms = _elapsed_ms(started)

        if policy.threshold is not None and best.relevance_score >= policy.threshold:
            self._logger.info(
                "escalation_level_accepted",
                level=level.value,
                best_score=best.relevance_score,
                threshold=policy.threshold,
                candidates=len(scored),
                elapsed_ms=elapsed_ms,
            )
            attempt = LevelAttempt(
                level=level,
                status=AttemptStatus.ACCEPTED,
                candidates_found=len(scored),
                best_score=best.relevance_score,
                elapsed_ms=elapsed_ms,
            )
            outcome = EscalationOutcome(
                image=best,
                level=level,
                candidates_evaluated=len(scored),
                processing_time_ms=elapsed_ms,
                provider=self._search.get_provider_name(),
            )
            return _LevelResult(attempt=attempt, outcome=outcome)

        self._logger.info(
            "escalation_level_below_threshold",
            level=level.value,
            best_score=best.relevance_score,
            threshold=policy.threshold,
            candidates=len(scored),
            elapsed_ms=elapsed_ms,
        )
        return _LevelResult(
            attempt=LevelAttempt(
                level=level,
                status=AttemptStatus.BELOW_THRESHOLD,
                candidates_found=len(scored),
                best_score=best.relevance_score,
                elapsed_ms=elapsed_ms,
            )
        )

    async def _run_generation_level(
        self,
        title: str,
        body: str,
        keywords: KeywordSet,
        custom_prompt: str,
        timeout: float | None,
        cancel_event: asyncio.Event | None,
    ) -> _LevelResult:
        level = SearchLevel.AI_GENERATED
        started = time.perf_counter()

        if self._generation is None or not self._generation.is_available():
            return self._miss(level, started, reason="generation provider not configured")

        prompt = self._prompts.generation(title, keywords, custom_prompt, body=body)
        try:
            generated = await self._guarded(
                self._generation.generate(prompt), timeout, cancel_event
            )
        except _MISS_ERRORS as exc:
            return self._miss(level, started, reason=str(exc) or type(exc).__name__)

        elapsed_ms = _elapsed_ms(started)
        provider_name = self._generation.get_provider_name()
        image = ImageCandidate(
            url=generated.url,
            source_domain=_host_or(generated.url, provider_name),
            description=generated.description,
            keywords=keywords.terms,
            relevance_score=self._generated_score,
        )
        self._logger.info(
            "escalation_level_accepted",
            level=level.value,
            best_score=self._generated_score,
            elapsed_ms=elapsed_ms,
        )
        return _LevelResult(
            attempt=LevelAttempt(
                level=level,
                status=AttemptStatus.ACCEPTED,
                candidates_found=1,
                best_score=self._generated_score,
                elapsed_ms=elapsed_ms,
            ),
            outcome=EscalationOutcome(
                image=image,
                level=level,
                candidates_evaluated=1,
                processing_time_ms=elapsed_ms,
                provider=provider_name,
            ),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _prompt_for(self, level: SearchLevel, title: str, keywords: KeywordSet) -> SearchPrompt:
        if level is SearchLevel.ULTRA_SPECIFIC:
            return self._prompts.ultra_specific(title, keywords)
        return self._prompts.thematic(title, keywords, self._themes.infer(keywords))

    def _miss(self, level: SearchLevel, started: float, *, reason: str) -> _LevelResult:
        elapsed_ms = _elapsed_ms(started)
        self._logger.warning(
            "escalation_level_miss",
            level=level.value,
            reason=reason,
            elapsed_ms=elapsed_ms,
        )
        return _LevelResult(
            attempt=LevelAttempt(
                level=level,
                status=AttemptStatus.MISS,
                elapsed_ms=elapsed_ms,
                reason=reason,
            )
        )

    def _raise_if_cancelled(self, cancel_event: asyncio.Event | None, level: SearchLevel) -> None:
        if cancel_event is not None and cancel_event.is_set():
            self._logger.info("escalation_cancelled", level=level.value)
            raise SearchCancelledError()

    async def _guarded(
        self,
        call: Awaitable[T],
        timeout: float | None,
        cancel_event: asyncio.Event | None,
    ) -> T:
        """Await a provider call under the timeout and the cancellation signal.

        A timeout raises ``asyncio.TimeoutError`` (a miss for the caller);
        the cancellation signal raises :class:`SearchCancelledError`.
        Either way the in-flight call is cancelled before returning.
        """
        task = asyncio.ensure_future(call)
        waiters: set[asyncio.Future] = {task}
        cancel_waiter: asyncio.Future | None = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _pending = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, *_MISS_ERRORS):
            await task

        if cancel_event is not None and cancel_event.is_set():
            self._logger.info("escalation_cancelled_in_flight")
            raise SearchCancelledError()
        raise asyncio.TimeoutError(f"provider call exceeded {timeout}s")


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _host_or(url: str, fallback: str) -> str:
    try:
        return urlparse(url).hostname or fallback
    except ValueError:
        return fallback
