"""Image discovery FastAPI application entry point.

Wires providers and services together via constructor injection, loads
configuration from ``.env`` and ``config/config.yaml``, and configures
structured logging.  :func:`build_discovery_service` is also used by the
CLI, so both entry points run the exact same object graph.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from image_discovery import __version__
from image_discovery.api.middleware import (
    RequestLoggingMiddleware,
    configure_cors,
    register_error_handlers,
)
from image_discovery.api.routes import router as api_router
from image_discovery.api.schemas import ProviderStatus
from image_discovery.config.loader import load_config
from image_discovery.config.settings import Settings
from image_discovery.pipeline.escalation import SearchEscalationController
from image_discovery.providers.generation.dalle_provider import DalleGenerationProvider
from image_discovery.providers.search.perplexity_provider import PerplexitySearchProvider
from image_discovery.services.candidate_parser import CandidateParser
from image_discovery.services.image_discovery_service import ImageDiscoveryService
from image_discovery.services.keyword_extractor import KeywordExtractor
from image_discovery.services.prompt_builder import PromptBuilder
from image_discovery.services.relevance_scorer import RelevanceScorer
from image_discovery.services.result_assembler import ResultAssembler
from image_discovery.services.theme_inferencer import ThemeInferencer
from image_discovery.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def build_discovery_service(
    app_settings: Settings,
    config: dict[str, Any] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> tuple[ImageDiscoveryService, list[ProviderStatus]]:
    """Construct the discovery service and describe its providers.

    Returns the service plus the provider list served by ``/providers``.
    """
    config = config if config is not None else load_config(settings=app_settings)
    escalation = config.get("escalation", {})
    provider_config = config.get("providers", {})

    search_provider = PerplexitySearchProvider(settings=app_settings, http_client=http_client)
    generation_provider = DalleGenerationProvider(settings=app_settings, http_client=http_client)

    controller = SearchEscalationController(
        search_provider=search_provider,
        generation_provider=generation_provider,
        parser=CandidateParser(),
        scorer=RelevanceScorer(),
        theme_inferencer=ThemeInferencer(),
        prompt_builder=PromptBuilder(),
        ultra_specific_threshold=int(escalation.get("ultra_specific_threshold", 85)),
        thematic_threshold=int(escalation.get("thematic_threshold", 70)),
        generated_score=int(escalation.get("generated_score", 95)),
        model_hint=provider_config.get("search_model", app_settings.perplexity_model),
        timeout_seconds=float(
            provider_config.get("timeout_seconds", app_settings.provider_timeout_seconds)
        ),
    )
    service = ImageDiscoveryService(
        controller=controller,
        keyword_extractor=KeywordExtractor(),
        assembler=ResultAssembler(),
        search_provider=search_provider,
        generation_provider=generation_provider,
    )

    providers = [
        ProviderStatus(
            name=search_provider.get_provider_name(),
            type="search",
            available=search_provider.is_available(),
        ),
        ProviderStatus(
            name=generation_provider.get_provider_name(),
            type="generation",
            available=generation_provider.is_available(),
        ),
    ]
    for provider in providers:
        if not provider.available:
            _logger.warning("provider_not_configured", provider=provider.name, type=provider.type)
    return service, providers


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    discovery_service: ImageDiscoveryService | None = None,
    provider_list: list[ProviderStatus] | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Tests pass a pre-built *discovery_service* (with fake providers);
    otherwise the real providers are built during the lifespan startup.
    """
    app_settings = app_settings or Settings()
    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    @asynccontextmanager
    async def lifespan(application: FastAPI):  # noqa: ANN202
        http_client: httpx.AsyncClient | None = None
        if discovery_service is None:
            http_client = httpx.AsyncClient(timeout=app_settings.provider_timeout_seconds * 2)
            service, providers = build_discovery_service(app_settings, http_client=http_client)
            application.state.discovery_service = service
            application.state.provider_list = providers
        _logger.info("app_started", version=__version__, env=app_settings.app_env)
        try:
            yield
        finally:
            if http_client is not None:
                await http_client.aclose()
            _logger.info("app_stopped")

    application = FastAPI(
        title="Image Discovery",
        version=__version__,
        lifespan=lifespan,
    )
    if discovery_service is not None:
        application.state.discovery_service = discovery_service
        application.state.provider_list = provider_list or []

    register_error_handlers(application)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)
    application.include_router(api_router)
    return application


if __name__ == "__main__":
    _settings = Settings()
    uvicorn.run(
        "image_discovery.main:create_app",
        factory=True,
        host=_settings.app_host,
        port=_settings.app_port,
        reload=(_settings.app_env == "development"),
    )
