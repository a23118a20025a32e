"""Git interface layer — adapter, mode resolution, filesystem probe, models."""

from patchmode.git.adapter import (
    GitError,
    get_commit_patch,
    get_range_diff,
    get_repo_root,
    get_staged_diff,
)
from patchmode.git.fs_probe import mode_from_stat, probe_mode
from patchmode.git.mode_parser import PatchModeResolver, resolve, resolve_async
from patchmode.git.models import (
    MODE_DIRECTORY,
    MODE_EXECUTABLE,
    MODE_REGULAR,
    MODE_SYMLINK,
    ModeEntry,
    ModeSource,
)

__all__ = [
    "GitError",
    "MODE_DIRECTORY",
    "MODE_EXECUTABLE",
    "MODE_REGULAR",
    "MODE_SYMLINK",
    "ModeEntry",
    "ModeSource",
    "PatchModeResolver",
    "get_commit_patch",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
    "mode_from_stat",
    "probe_mode",
    "resolve",
    "resolve_async",
]
