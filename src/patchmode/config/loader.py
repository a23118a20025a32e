"""Load and merge configuration from .patchmode.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from patchmode.config.schema import (
    OUTPUT_FORMATS,
    OutputConfig,
    PatchModeConfig,
    ResolveConfig,
)

CONFIG_FILENAME = ".patchmode.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(work_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = work_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: PatchModeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output.format {cfg.output.format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    if not isinstance(cfg.resolve.filesystem_fallback, bool):
        raise ConfigError("resolve.filesystem_fallback must be true or false")


def _merge_env_overrides(cfg: PatchModeConfig) -> None:
    """Apply PATCHMODE_* environment variable overrides. Invalid values are ignored."""
    if val := os.environ.get("PATCHMODE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if os.environ.get("PATCHMODE_NO_FALLBACK") == "1":
        cfg.resolve.filesystem_fallback = False


def load_config(
    work_dir: Path,
    config_override: Optional[str] = None,
) -> PatchModeConfig:
    """Load, validate, and return a PatchModeConfig."""
    config_path = find_config_file(work_dir, config_override)

    if config_path is None:
        cfg = PatchModeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = PatchModeConfig(
            version=str(raw.get("version", "1.0")),
            resolve=_build_section(raw, ResolveConfig, "resolve"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
