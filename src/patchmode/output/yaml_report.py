"""YAML reporter — same document as the JSON reporter."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import yaml

from patchmode.git.models import ModeEntry
from patchmode.output.json_report import to_dict


def render(entries: Sequence[ModeEntry], working_directory: Path) -> str:
    """Return a YAML document. Mode strings stay quoted so ``040000`` survives a reload."""
    return yaml.safe_dump(
        to_dict(entries, working_directory),
        sort_keys=False,
        default_flow_style=False,
    )
