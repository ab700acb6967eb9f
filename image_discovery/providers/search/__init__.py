"""Search provider implementations of ISearchProvider."""

from image_discovery.providers.search.perplexity_provider import PerplexitySearchProvider

__all__ = ["PerplexitySearchProvider"]
