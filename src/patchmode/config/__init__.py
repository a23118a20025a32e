"""Configuration loading, schema, and defaults."""

from patchmode.config.loader import ConfigError, load_config
from patchmode.config.schema import OUTPUT_FORMATS, PatchModeConfig

__all__ = [
    "ConfigError",
    "OUTPUT_FORMATS",
    "PatchModeConfig",
    "load_config",
]
