"""Generation provider implementations of IGenerationProvider."""

from image_discovery.providers.generation.dalle_provider import DalleGenerationProvider

__all__ = ["DalleGenerationProvider"]
