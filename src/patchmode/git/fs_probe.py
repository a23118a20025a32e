"""Filesystem fallback — derive a git mode from a working-tree entry."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Optional

from patchmode.git.models import (
    MODE_DIRECTORY,
    MODE_EXECUTABLE,
    MODE_REGULAR,
    MODE_SYMLINK,
)

logger = logging.getLogger(__name__)

_ANY_EXEC = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def mode_from_stat(st: os.stat_result) -> Optional[str]:
    """Map stat attributes to a git mode string, or None for other entry types."""
    if stat.S_ISLNK(st.st_mode):
        return MODE_SYMLINK
    if stat.S_ISREG(st.st_mode):
        return MODE_EXECUTABLE if st.st_mode & _ANY_EXEC else MODE_REGULAR
    if stat.S_ISDIR(st.st_mode):
        return MODE_DIRECTORY
    return None


def probe_mode(path: Path) -> Optional[str]:
    """Return the git mode for *path* on disk, or None if it cannot be observed.

    The final path component is not followed, so a symlink reports
    ``120000``. A dangling symlink is treated like a missing file.
    """
    try:
        st = path.lstat()
        if stat.S_ISLNK(st.st_mode):
            path.stat()  # raises if the target is gone
    except (OSError, ValueError) as exc:
        # ValueError: path with an embedded NUL byte
        logger.debug("stat failed for %s: %s", path, exc)
        return None

    mode = mode_from_stat(st)
    if mode is None:
        logger.debug("unsupported entry type for %s (st_mode=%o)", path, st.st_mode)
    return mode
