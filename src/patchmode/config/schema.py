"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json", "yaml"]

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "yaml")


@dataclass
class ResolveConfig:
    filesystem_fallback: bool = True  # stat the working tree for paths the patch leaves unresolved


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class PatchModeConfig:
    version: str = "1.0"
    resolve: ResolveConfig = field(default_factory=ResolveConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
