"""Perplexity search provider adapter.

Perplexity exposes an OpenAI-compatible chat completions API backed by
live web search, so this adapter reuses the ``openai`` async client and
simply points it at ``perplexity_base_url``.  The model is asked for
direct image URLs; the free-text answer is returned untouched and parsed
by :class:`~image_discovery.services.candidate_parser.CandidateParser`.
"""

from __future__ import annotations

import httpx
import openai
import structlog

from image_discovery.config.settings import Settings
from image_discovery.interfaces.search_provider import ISearchProvider
from image_discovery.utils.errors import ProviderError, RateLimitError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_SYSTEM_PROMPT = (
    "You are an expert at finding free, copyright-free images on the web. "
    "Always provide direct image URLs from reputable free image sources "
    "like Unsplash, Pixabay, Pexels."
)


class PerplexitySearchProvider(ISearchProvider):
    """Image search backed by Perplexity's online models.

    The adapter never retries: a failed call is reported as
    :class:`ProviderError` and the escalation controller moves on.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = settings.perplexity_api_key
        self._default_model = settings.perplexity_model
        self._timeout = settings.provider_timeout_seconds

        client_kwargs: dict = {
            "api_key": self._api_key or "unset",
            "base_url": settings.perplexity_base_url,
            "timeout": openai.Timeout(self._timeout, connect=5.0),
            # Escalation treats any failure as a miss; retrying here would
            # only delay the next level.
            "max_retries": 0,
        }
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        self._client = openai.AsyncOpenAI(**client_kwargs)

    async def search(
        self,
        prompt: str,
        model_hint: str | None = None,
        *,
        system_prompt: str | None = None,
        temperature: float = 0.3,
    ) -> str:
        """Send *prompt* to Perplexity and return the answer text."""
        model = model_hint or self._default_model
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt or _DEFAULT_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=800,
                stream=False,
            )
        except openai.APITimeoutError as exc:
            raise ProviderError(
                message=f"search timed out after {self._timeout:.0f}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.RateLimitError as exc:
            raise RateLimitError(
                message=f"search rate limited: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise ProviderError(
                message=f"search API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.choices:
            raise ProviderError(
                message="search returned no choices",
                provider_name=self.get_provider_name(),
            )
        content = response.choices[0].message.content or ""
        logger.info(
            "perplexity_search",
            model=model,
            chars=len(content),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content

    def get_provider_name(self) -> str:
        return "perplexity"

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)
