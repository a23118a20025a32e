"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from patchmode.git.models import ModeEntry


def to_dict(entries: Sequence[ModeEntry], working_directory: Path) -> Dict[str, Any]:
    """Convert resolved entries to a JSON-serialisable dict."""
    files: List[Dict[str, Any]] = []
    for e in entries:
        files.append({
            "path": e.path,
            "mode": e.mode,
            "source": e.source.value,
            "deleted": e.deleted,
        })

    return {
        "version": "1.0",
        "working_directory": str(working_directory),
        "files": files,
        "total": len(files),
    }


def render(entries: Sequence[ModeEntry], working_directory: Path) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(entries, working_directory), indent=2)
