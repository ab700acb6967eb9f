"""Configuration module — exports Settings and load_config."""

from image_discovery.config.loader import load_config
from image_discovery.config.settings import Settings

__all__ = ["Settings", "load_config"]
