"""Pydantic schemas for the HTTP surface.

The search request and response bodies are the domain payload models
themselves (:mod:`image_discovery.models.payload`); this module adds the
envelopes and the operational endpoints' shapes.
"""

from __future__ import annotations

from pydantic import BaseModel

from image_discovery.models.payload import ImageSearchRequest, ImageSearchResponse


class ImageSearchEnvelope(BaseModel):
    """Successful search: ``{"success": true, "data": {...}}``."""

    success: bool = True
    data: ImageSearchResponse


class ErrorResponse(BaseModel):
    """Every failed request gets this body, whatever the status code."""

    success: bool = False
    error: str
    code: str
    retryable: bool = False


class ProviderStatus(BaseModel):
    name: str
    type: str
    available: bool


class HealthResponse(BaseModel):
    status: str
    version: str
    providers: dict[str, bool]


class ProvidersResponse(BaseModel):
    providers: list[ProviderStatus]


__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ImageSearchEnvelope",
    "ImageSearchRequest",
    "ImageSearchResponse",
    "ProviderStatus",
    "ProvidersResponse",
]
