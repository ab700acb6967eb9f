"""Abstract base class for image search providers.

A search provider answers a natural-language prompt with free text that
is expected to contain direct image URLs.  Implementations may wrap
Perplexity, any other OpenAI-compatible chat API with web access, or a
deterministic fake in tests.  The escalation controller only ever sees
this contract, so swapping the backing service never touches the
search logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: PerplexitySearchProvider (image_discovery/providers/search/)
class ISearchProvider(ABC):
    """Contract for prompt-driven image search services."""

    @abstractmethod
    async def search(
        self,
        prompt: str,
        model_hint: str | None = None,
        *,
        system_prompt: str | None = None,
        temperature: float = 0.3,
    ) -> str:
        """Run one search prompt and return the provider's raw text answer.

        Parameters
        ----------
        prompt:
            The user prompt describing the images wanted.
        model_hint:
            Optional model identifier; providers fall back to their
            configured default when ``None``.
        system_prompt:
            Optional instruction message setting the provider's role.
        temperature:
            Sampling temperature; the precise level uses a lower value.

        Returns
        -------
        str
            Free text, possibly empty.  Parsing is the caller's job.

        Raises
        ------
        image_discovery.utils.errors.ProviderError
            If the call fails for any reason other than cancellation.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"perplexity"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured (no network call)."""
