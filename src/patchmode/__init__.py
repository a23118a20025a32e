"""patchmode — resolve post-patch git file modes from unified diffs."""

__version__ = "0.1.0"

from patchmode.git.mode_parser import PatchModeResolver, resolve, resolve_async  # noqa: E402

__all__ = ["PatchModeResolver", "__version__", "resolve", "resolve_async"]
