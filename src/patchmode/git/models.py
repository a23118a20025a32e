"""Data models for mode resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MODE_REGULAR = "100644"
MODE_EXECUTABLE = "100755"
MODE_DIRECTORY = "040000"
MODE_SYMLINK = "120000"

# Human-readable names for the terminal renderer
MODE_KINDS: dict[str, str] = {
    MODE_REGULAR: "file",
    MODE_EXECUTABLE: "executable",
    MODE_DIRECTORY: "directory",
    MODE_SYMLINK: "symlink",
    "160000": "submodule",
}


class ModeSource(str, Enum):
    NEW_FILE = "new_file"
    DELETED_FILE = "deleted_file"
    NEW_MODE = "new_mode"
    INDEX = "index"
    FILESYSTEM = "filesystem"


@dataclass(frozen=True)
class ModeEntry:
    """Resolved mode for one path touched by a patch."""

    path: str
    mode: str
    source: ModeSource
    deleted: bool = False  # last explicit mode came from 'deleted file mode'

    @property
    def kind(self) -> str:
        return MODE_KINDS.get(self.mode, "unknown")
