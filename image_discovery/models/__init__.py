"""Domain and payload models for the image discovery engine."""

from image_discovery.models.image import (
    AttemptStatus,
    EscalationOutcome,
    GeneratedImage,
    ImageCandidate,
    KeywordSet,
    LevelAttempt,
    SearchLevel,
    ThemeCategory,
)
from image_discovery.models.payload import (
    ImagePayload,
    ImageSearchRequest,
    ImageSearchResponse,
    MetadataPayload,
    SearchResultsPayload,
)

__all__ = [
    "AttemptStatus",
    "EscalationOutcome",
    "GeneratedImage",
    "ImageCandidate",
    "ImagePayload",
    "ImageSearchRequest",
    "ImageSearchResponse",
    "KeywordSet",
    "LevelAttempt",
    "MetadataPayload",
    "SearchLevel",
    "SearchResultsPayload",
    "ThemeCategory",
]
