"""FastAPI routes for the image discovery engine.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                    Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/images/search       POST    Find or generate one image for an article
# /api/v1/health              GET     Health check + provider status
# /api/v1/providers           GET     Configured providers
#
# Service dependencies are read from ``app.state`` (populated at startup
# in main.py) through ``Depends`` helpers.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request

from image_discovery.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ImageSearchEnvelope,
    ImageSearchRequest,
    ProvidersResponse,
    ProviderStatus,
)
from image_discovery.services.image_discovery_service import ImageDiscoveryService
from image_discovery.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

# How often a running search checks whether the client went away.
_DISCONNECT_POLL_SECONDS = 0.5

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "VALIDATION_ERROR"},
    499: {"model": ErrorResponse, "description": "CANCELLED"},
    502: {"model": ErrorResponse, "description": "NO_SUITABLE_IMAGES"},
    503: {"model": ErrorResponse, "description": "CONFIGURATION_ERROR"},
}


def _get_discovery_service(request: Request) -> ImageDiscoveryService:
    return request.app.state.discovery_service


def _get_provider_list(request: Request) -> list[ProviderStatus]:
    return request.app.state.provider_list


async def _watch_disconnect(request: Request, cancel_event: asyncio.Event) -> None:
    """Set *cancel_event* once the HTTP client disconnects."""
    while True:
        await asyncio.sleep(_DISCONNECT_POLL_SECONDS)
        if await request.is_disconnected():
            _logger.info("client_disconnected", path=str(request.url.path))
            cancel_event.set()
            return


@router.post(
    "/images/search",
    response_model=ImageSearchEnvelope,
    responses=_ERROR_RESPONSES,
)
async def search_image(
    body: ImageSearchRequest,
    request: Request,
    service: Annotated[ImageDiscoveryService, Depends(_get_discovery_service)],
) -> ImageSearchEnvelope:
    """Find (or generate) the representative image for one article."""
    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel_event))
    try:
        result = await service.discover(body, cancel_event=cancel_event)
    finally:
        watcher.cancel()
    return ImageSearchEnvelope(data=result)


@router.get("/health", response_model=HealthResponse)
async def health(
    providers: Annotated[list[ProviderStatus], Depends(_get_provider_list)],
) -> HealthResponse:
    from image_discovery import __version__

    provider_map = {provider.type: provider.available for provider in providers}
    status = "ok" if provider_map.get("search") else "degraded"
    return HealthResponse(status=status, version=__version__, providers=provider_map)


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(
    providers: Annotated[list[ProviderStatus], Depends(_get_provider_list)],
) -> ProvidersResponse:
    return ProvidersResponse(providers=providers)
