"""Core domain models for the image discovery engine.

Defines the value objects that flow through one search request:

    KeywordSet       ordered, title-first keyword list (built once per request)
    ImageCandidate   one image URL plus provenance and its relevance score
    SearchLevel      which escalation stage produced the result
    ThemeCategory    thematic hint for the level-2 prompt
    GeneratedImage   what a generation provider hands back
    LevelAttempt     telemetry for one level of the escalation
    EscalationOutcome the single terminal value of a request

Pydantic models use frozen config so nothing is mutated after creation:
the relevance scorer produces *scored copies* via ``model_copy`` instead
of writing into the parsed candidates.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
class SearchLevel(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Escalation stages, tried in declaration order and never revisited.

    UltraSpecific → Thematic → AiGenerated.  Earlier levels target higher
    precision and are strictly preferred when they clear their quality gate.
    """

    ULTRA_SPECIFIC = "ultra-specific"
    THEMATIC = "thematic"
    AI_GENERATED = "ai-generated"


class ThemeCategory(str, Enum):  # noqa: UP042
    """Closed set of themes used only to phrase the level-2 search prompt."""

    TECHNOLOGY = "technology"
    BUSINESS = "business"
    HEALTH = "health"
    ENVIRONMENT = "environment"
    EDUCATION = "education"
    ARTS = "arts"
    # Fallback pair when no keyword matches a theme.
    GENERAL = "general"
    PROFESSIONAL = "professional"


# ---------------------------------------------------------------------------
# KeywordSet
# ---------------------------------------------------------------------------
# A plain frozen dataclass rather than a Pydantic model: it is a simple
# sequence value object and BaseModel already claims __iter__ for fields.
@dataclass(frozen=True)
class KeywordSet:
    """Ordered, deduplicated keywords with title-derived tokens first.

    Index order is an implicit relevance prior: prompt construction uses
    the first entries, and the extractor guarantees title tokens lead.
    """

    terms: tuple[str, ...] = ()

    MAX_TERMS = 10

    def __post_init__(self) -> None:
        if len(self.terms) > self.MAX_TERMS:
            raise ValueError(f"KeywordSet holds at most {self.MAX_TERMS} terms")
        if len(set(self.terms)) != len(self.terms):
            raise ValueError("KeywordSet terms must be unique")

    def __iter__(self) -> Iterator[str]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __bool__(self) -> bool:
        return bool(self.terms)

    def top(self, n: int) -> tuple[str, ...]:
        """Return the first *n* keywords in priority order."""
        return self.terms[:n]

    def as_list(self) -> list[str]:
        return list(self.terms)


# ---------------------------------------------------------------------------
# Candidates and generation output
# ---------------------------------------------------------------------------
class ImageCandidate(BaseModel):
    """A single image URL returned by a search provider.

    Created by the candidate parser with ``relevance_score=0``.  The
    relevance scorer returns a copy carrying the real score; a score
    outside 0..100 fails validation because it can only come from a bug.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    source_domain: str
    description: str
    keywords: tuple[str, ...] = ()
    relevance_score: int = Field(default=0, ge=0, le=100)


class GeneratedImage(BaseModel):
    """Result of a generation provider call."""

    model_config = ConfigDict(frozen=True)

    url: str
    description: str


# ---------------------------------------------------------------------------
# Escalation telemetry and outcome
# ---------------------------------------------------------------------------
class AttemptStatus(str, Enum):  # noqa: UP042
    """How a single escalation level ended."""

    ACCEPTED = "accepted"
    BELOW_THRESHOLD = "below_threshold"
    MISS = "miss"
    SKIPPED = "skipped"


class LevelAttempt(BaseModel):
    """Telemetry for one level of the escalation (logged, not returned)."""

    model_config = ConfigDict(frozen=True)

    level: SearchLevel
    status: AttemptStatus
    candidates_found: int = 0
    best_score: int | None = None
    elapsed_ms: int = 0
    reason: str | None = None


class EscalationOutcome(BaseModel):
    """The single terminal value produced by the escalation controller.

    Exactly one outcome exists per successful request; failure is an
    exception, never an empty outcome.
    """

    model_config = ConfigDict(frozen=True)

    image: ImageCandidate
    level: SearchLevel
    candidates_evaluated: int = Field(ge=1)
    processing_time_ms: int = Field(ge=0)
    provider: str
    attempts: tuple[LevelAttempt, ...] = ()

    @property
    def was_generated(self) -> bool:
        return self.level is SearchLevel.AI_GENERATED
