"""Request and response payloads of an image search.

The wire format is camelCase (``articleTitle``, ``relevanceScore``) to
match the admin client that calls the engine; Python code uses the
snake_case field names.  ``populate_by_name`` lets both spellings in.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from image_discovery.models.image import SearchLevel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ImageSearchRequest(_CamelModel):
    """An article for which a representative image is wanted.

    The three article fields default to empty strings so that a missing
    field reaches the discovery service and is reported as
    ``VALIDATION_ERROR`` like any other malformed request.
    """

    article_id: str = ""
    article_title: str = ""
    article_content: str = ""
    ai_prompt: str = ""
    filename: str = ""
    alt_text: str = ""
    force_regenerate: bool = False


class ImagePayload(_CamelModel):
    id: str
    article_id: str
    url: str
    filename: str
    alt_text: str
    status: str
    relevance_score: int
    search_level: SearchLevel


class SearchResultsPayload(_CamelModel):
    total_found: int
    candidates_evaluated: int
    best_score: int
    search_level: SearchLevel
    processing_time: int


class MetadataPayload(_CamelModel):
    was_generated: bool
    provider: str
    search_time: int
    total_time: int
    keywords: list[str]


class ImageSearchResponse(_CamelModel):
    """The assembled answer handed to the downstream publishing flow."""

    image: ImagePayload
    search_results: SearchResultsPayload
    metadata: MetadataPayload
