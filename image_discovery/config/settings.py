"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# This class reads configuration from TWO sources (in priority order):
#
#   1. **Environment variables** — e.g., PERPLEXITY_API_KEY=pplx-abc123
#   2. **.env file** — key=value lines in the project root .env file
#
# Field name `perplexity_api_key` maps to env var `PERPLEXITY_API_KEY`.
# Defaults apply when neither an env var nor a .env entry exists.
#
# An empty string means "not configured": the discovery service refuses
# to start a search without search credentials, and the generation
# level is skipped without generation credentials.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Image discovery engine settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Search provider (Perplexity, OpenAI-compatible chat API) ===
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "sonar-pro"

    # === Generation provider (OpenAI images API) ===
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_image_model: str = "dall-e-3"
    image_size: str = "1792x1024"
    image_quality: str = "standard"
    image_style: str = "natural"

    # === Provider calls ===
    # Upper bound for a single provider call; a timeout counts as a miss
    # for that search level.
    provider_timeout_seconds: float = 25.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_providers(self) -> list[str]:
        """Return the provider names that have non-empty API keys configured."""
        providers: list[str] = []
        if self.perplexity_api_key:
            providers.append("perplexity")
        if self.openai_api_key:
            providers.append("openai")
        return providers
