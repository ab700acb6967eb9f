"""DALL-E generation provider adapter.

Wraps the OpenAI images endpoint to implement
:class:`IGenerationProvider`.  Size, quality, and style come from
settings; when the API rewrites the prompt (DALL-E 3 does), the
``revised_prompt`` becomes the image description.
"""

from __future__ import annotations

import httpx
import openai
import structlog

from image_discovery.config.settings import Settings
from image_discovery.interfaces.generation_provider import IGenerationProvider
from image_discovery.models.image import GeneratedImage
from image_discovery.utils.errors import ProviderError, RateLimitError

logger = structlog.get_logger(logger_name=__name__)


class DalleGenerationProvider(IGenerationProvider):
    """Image generation backed by OpenAI's DALL-E models."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = settings.openai_api_key
        self._model = settings.openai_image_model
        self._size = settings.image_size
        self._quality = settings.image_quality
        self._style = settings.image_style
        # Generation is slower than search; give it twice the search budget.
        self._timeout = settings.provider_timeout_seconds * 2

        client_kwargs: dict = {
            "api_key": self._api_key or "unset",
            "timeout": openai.Timeout(self._timeout, connect=5.0),
            "max_retries": 0,
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        self._client = openai.AsyncOpenAI(**client_kwargs)

    async def generate(self, prompt: str) -> GeneratedImage:
        """Generate a single image and return its hosted URL."""
        try:
            response = await self._client.images.generate(
                model=self._model,
                prompt=prompt,
                n=1,
                size=self._size,
                quality=self._quality,
                style=self._style,
                response_format="url",
            )
        except openai.APITimeoutError as exc:
            raise ProviderError(
                message=f"generation timed out after {self._timeout:.0f}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.RateLimitError as exc:
            raise RateLimitError(
                message=f"generation rate limited: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise ProviderError(
                message=f"generation API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.data or not response.data[0].url:
            raise ProviderError(
                message="generation returned no image",
                provider_name=self.get_provider_name(),
            )

        image = response.data[0]
        description = image.revised_prompt or prompt
        logger.info("dalle_generation", model=self._model, size=self._size)
        return GeneratedImage(url=image.url, description=description)

    def get_provider_name(self) -> str:
        return "dall-e"

    def is_available(self) -> bool:
        return bool(self._api_key)
