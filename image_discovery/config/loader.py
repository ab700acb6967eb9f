"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  — Static defaults checked into the repo
#   2. .env file           — Local developer overrides (not committed)
#   3. Environment vars    — Set at deploy time
#
# The escalation quality gates live in the YAML file only.  The search
# model and per-call timeout under "providers" always take the Settings
# value; credentials never pass through this dict.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from image_discovery.config.settings import Settings

DEFAULT_ESCALATION: dict[str, int] = {
    "ultra_specific_threshold": 85,
    "thematic_threshold": 70,
    "generated_score": 95,
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.
    Missing escalation keys fall back to :data:`DEFAULT_ESCALATION`.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh :class:`Settings` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    defaults = {"escalation": dict(DEFAULT_ESCALATION)}
    _deep_merge(defaults, yaml_config)

    env_overrides = {
        "providers": {
            "search_model": settings.perplexity_model,
            "timeout_seconds": settings.provider_timeout_seconds,
        },
    }

    _deep_merge(defaults, env_overrides)
    return defaults


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
