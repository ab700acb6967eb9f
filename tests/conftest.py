"""Shared pytest fixtures for the image discovery test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from image_discovery.interfaces.generation_provider import IGenerationProvider
from image_discovery.interfaces.search_provider import ISearchProvider
from image_discovery.models.image import GeneratedImage, KeywordSet
from image_discovery.pipeline.escalation import SearchEscalationController
from image_discovery.services.candidate_parser import CandidateParser
from image_discovery.services.image_discovery_service import ImageDiscoveryService
from image_discovery.services.keyword_extractor import KeywordExtractor
from image_discovery.services.prompt_builder import PromptBuilder
from image_discovery.services.relevance_scorer import RelevanceScorer
from image_discovery.services.result_assembler import ResultAssembler
from image_discovery.services.theme_inferencer import ThemeInferencer
from image_discovery.utils.errors import ProviderError

# ---------------------------------------------------------------------------
# Sample article
# ---------------------------------------------------------------------------

ENERGY_TITLE = "Guida al Risparmio Energetico"
ENERGY_BODY = (
    "Il risparmio energetico in casa parte da piccoli gesti. "
    "Ridurre i consumi di energia significa bollette più leggere: "
    "isolare le finestre, scegliere lampadine LED e usare la lavatrice "
    "a pieno carico. L'energia risparmiata oggi aiuta anche l'ambiente."
)
# A line the parser turns into a labelled unsplash candidate.
ENERGY_LEVEL1_TEXT = (
    "Here are some images:\n"
    "- Risparmio energetico in casa, energia solare sul tetto: "
    "https://images.unsplash.com/photo-1509391366360-2e959784a276.jpg\n"
)

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def energy_keywords() -> KeywordSet:
    return KeywordExtractor().extract(ENERGY_TITLE, ENERGY_BODY)


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_search_provider() -> ISearchProvider:
    """Mock ISearchProvider returning no URLs by default.

    Override with ``mock_search_provider.search.side_effect = [...]`` to
    script one answer (or exception) per level.
    """
    mock = MagicMock(spec=ISearchProvider)
    mock.get_provider_name.return_value = "mock-search"
    mock.is_available.return_value = True
    mock.search = AsyncMock(return_value="No images found.")
    return mock


@pytest.fixture
def mock_generation_provider() -> IGenerationProvider:
    mock = MagicMock(spec=IGenerationProvider)
    mock.get_provider_name.return_value = "mock-generator"
    mock.is_available.return_value = True
    mock.generate = AsyncMock(
        return_value=GeneratedImage(
            url="https://generated.example.com/img/abc123.png",
            description="A modern home with solar panels at sunset",
        )
    )
    return mock


@pytest.fixture
def failing_search_provider(mock_search_provider: ISearchProvider) -> ISearchProvider:
    mock_search_provider.search.side_effect = ProviderError("connection reset", provider_name="mock-search")
    return mock_search_provider


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


def build_controller(
    search_provider: ISearchProvider,
    generation_provider: IGenerationProvider | None,
    **overrides,
) -> SearchEscalationController:
    """Controller wired with the real parsing/scoring components."""
    options = {"timeout_seconds": 5.0}
    options.update(overrides)
    return SearchEscalationController(
        search_provider=search_provider,
        generation_provider=generation_provider,
        parser=CandidateParser(),
        scorer=RelevanceScorer(),
        theme_inferencer=ThemeInferencer(),
        prompt_builder=PromptBuilder(),
        **options,
    )


@pytest.fixture
def controller(
    mock_search_provider: ISearchProvider,
    mock_generation_provider: IGenerationProvider,
) -> SearchEscalationController:
    return build_controller(mock_search_provider, mock_generation_provider)


@pytest.fixture
def assembler() -> ResultAssembler:
    return ResultAssembler(id_factory=lambda: "img_test0001", clock=lambda: FIXED_NOW)


@pytest.fixture
def discovery_service(
    controller: SearchEscalationController,
    assembler: ResultAssembler,
    mock_search_provider: ISearchProvider,
    mock_generation_provider: IGenerationProvider,
) -> ImageDiscoveryService:
    return ImageDiscoveryService(
        controller=controller,
        keyword_extractor=KeywordExtractor(),
        assembler=assembler,
        search_provider=mock_search_provider,
        generation_provider=mock_generation_provider,
    )
