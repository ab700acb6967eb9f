"""Public interface definitions for the external providers.

The engine talks to the outside world only through these two ports:

    Interface            →  Concrete implementation (image_discovery/providers/)
    ──────────────────────────────────────────────────────────────────
    ISearchProvider      →  PerplexitySearchProvider
    IGenerationProvider  →  DalleGenerationProvider

Unit tests inject ``MagicMock(spec=...)`` fakes instead of live clients.
"""

from image_discovery.interfaces.generation_provider import IGenerationProvider
from image_discovery.interfaces.search_provider import ISearchProvider

__all__ = ["IGenerationProvider", "ISearchProvider"]
