"""Patch mode resolver — map every path in a git patch to its post-patch mode.

Phase 1 scans the patch headers line by line. Explicit mode lines
(``new file mode``, ``deleted file mode``, ``new mode``) always overwrite;
the mode field of an ``index`` line only fills an empty slot. Phase 2 stats
any path still unresolved in the working tree and drops what it cannot see.

The resolver never raises on malformed input.

Only the unquoted header form is recognised. git quotes paths containing
spaces or special characters (``diff --git "a/x y" "b/x y"``); such a header
does not match and the mode lines after it stay with the previous file.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from patchmode.git.fs_probe import probe_mode
from patchmode.git.models import ModeEntry, ModeSource

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# --- Regex patterns for patch headers ---

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.+?) b/(.+)$")
_NEW_FILE_RE = re.compile(r"^new file mode (\d+)$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode (\d+)$")
_NEW_MODE_RE = re.compile(r"^new mode (\d+)$")
_INDEX_RE = re.compile(r"^index [0-9a-f]+\.\.[0-9a-f]+ (\d+)$")

# Explicit mode lines, all equal priority: last one in the patch wins.
_EXPLICIT_MODE_LINES = (
    (_NEW_FILE_RE, ModeSource.NEW_FILE),
    (_DELETED_FILE_RE, ModeSource.DELETED_FILE),
    (_NEW_MODE_RE, ModeSource.NEW_MODE),
)


@dataclass
class _Slot:
    mode: str = ""
    source: Optional[ModeSource] = None


class PatchModeResolver:
    """Resolve post-patch git modes for the files a patch touches.

    Usage::

        resolver = PatchModeResolver(repo_root)
        modes = resolver.resolve(patch_text)   # {"src/run.sh": "100755", ...}

    Every call builds its own parse state, so one resolver may be shared.
    """

    def __init__(self, working_directory: PathLike, *, filesystem_fallback: bool = True) -> None:
        self.working_directory = Path(working_directory)
        self.filesystem_fallback = filesystem_fallback

    def resolve(self, patch_text: str) -> Dict[str, str]:
        """Return ``{path: mode}`` for every resolvable path in *patch_text*."""
        return {entry.path: entry.mode for entry in self.resolve_entries(patch_text)}

    def resolve_entries(self, patch_text: str) -> List[ModeEntry]:
        """Like :meth:`resolve`, but keep the source of each mode and the deleted flag."""
        slots = self._scan(patch_text)
        entries: List[ModeEntry] = []

        for path, slot in slots.items():
            if slot.mode:
                entries.append(ModeEntry(
                    path=path,
                    mode=slot.mode,
                    source=slot.source or ModeSource.INDEX,
                    deleted=slot.source == ModeSource.DELETED_FILE,
                ))
                continue

            if not self.filesystem_fallback:
                logger.debug("no mode in patch for %s, fallback disabled", path)
                continue
            mode = probe_mode(self.working_directory / path)
            if mode is None:
                logger.debug("dropping %s: not resolvable from patch or filesystem", path)
                continue
            entries.append(ModeEntry(path=path, mode=mode, source=ModeSource.FILESYSTEM))

        return entries

    async def resolve_async(self, patch_text: str) -> Dict[str, str]:
        """Coroutine form of :meth:`resolve`; stat calls run in a worker thread."""
        return await asyncio.to_thread(self.resolve, patch_text)

    # ---- phase 1 ----

    def _scan(self, patch_text: str) -> Dict[str, _Slot]:
        slots: Dict[str, _Slot] = {}
        current_file: Optional[str] = None

        for raw_line in patch_text.split("\n"):
            line = raw_line.rstrip("\r")

            m = _DIFF_HEADER_RE.match(line)
            if m:
                # Post-image path is authoritative
                current_file = m.group(2)
                slots.setdefault(current_file, _Slot())
                continue

            if current_file is None:
                continue

            if self._match_explicit(line, slots[current_file]):
                continue

            im = _INDEX_RE.match(line)
            if im and not slots[current_file].mode:
                slots[current_file] = _Slot(mode=im.group(1), source=ModeSource.INDEX)

        return slots

    @staticmethod
    def _match_explicit(line: str, slot: _Slot) -> bool:
        for pattern, source in _EXPLICIT_MODE_LINES:
            m = pattern.match(line)
            if m:
                slot.mode = m.group(1)
                slot.source = source
                return True
        return False


def resolve(patch_text: str, working_directory: PathLike, *, filesystem_fallback: bool = True) -> Dict[str, str]:
    """Resolve the post-patch mode of every path in *patch_text*.

    Paths with no mode in the patch are looked up under *working_directory*.
    """
    return PatchModeResolver(working_directory, filesystem_fallback=filesystem_fallback).resolve(patch_text)


async def resolve_async(
    patch_text: str,
    working_directory: PathLike,
    *,
    filesystem_fallback: bool = True,
) -> Dict[str, str]:
    """Coroutine form of :func:`resolve`."""
    resolver = PatchModeResolver(working_directory, filesystem_fallback=filesystem_fallback)
    return await resolver.resolve_async(patch_text)
