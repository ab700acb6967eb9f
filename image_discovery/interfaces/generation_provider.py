"""Abstract base class for image generation providers.

Used only by the last escalation level: when no searched image clears
its quality gate, a generation provider synthesises one from a prompt
derived from the article.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from image_discovery.models.image import GeneratedImage


# Concrete implementation: DalleGenerationProvider (image_discovery/providers/generation/)
class IGenerationProvider(ABC):
    """Contract for prompt-to-image generation services."""

    @abstractmethod
    async def generate(self, prompt: str) -> GeneratedImage:
        """Generate one image for *prompt*.

        Returns
        -------
        GeneratedImage
            The hosted URL of the image and a short description of it.

        Raises
        ------
        image_discovery.utils.errors.ProviderError
            If the call fails or returns no image.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"dall-e"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured (no network call)."""
