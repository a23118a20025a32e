"""Shared test fixtures — sample patches, work trees, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def patch_new_file() -> str:
    """A patch adding a regular file."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,2 @@
        +def greet(name):
        +    return f"Hello, {name}!"
    """)


@pytest.fixture
def patch_new_script() -> str:
    """A patch adding an executable script."""
    return textwrap.dedent("""\
        diff --git a/src/run.sh b/src/run.sh
        new file mode 100755
        index 0000000..1a2b3c4
        --- /dev/null
        +++ b/src/run.sh
        @@ -0,0 +1,2 @@
        +#!/bin/sh
        +echo run
    """)


@pytest.fixture
def patch_modified() -> str:
    """A content-only change; the mode comes from the index line."""
    return textwrap.dedent("""\
        diff --git a/README.md b/README.md
        index 1111111..2222222 100644
        --- a/README.md
        +++ b/README.md
        @@ -1 +1 @@
        -# Old
        +# New
    """)


@pytest.fixture
def patch_mode_only() -> str:
    """A patch that only flips the executable bit."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
    """)


@pytest.fixture
def patch_mode_and_content() -> str:
    """Mode change plus content change: git prints the index line after 'new mode'."""
    return textwrap.dedent("""\
        diff --git a/tools/build.sh b/tools/build.sh
        old mode 100644
        new mode 100755
        index ab12cd3..ef45678
        --- a/tools/build.sh
        +++ b/tools/build.sh
        @@ -1 +1 @@
        -echo old
        +echo new
    """)


@pytest.fixture
def patch_deleted() -> str:
    """A patch deleting a file."""
    return textwrap.dedent("""\
        diff --git a/old.py b/old.py
        deleted file mode 100644
        index abc1234..0000000
        --- a/old.py
        +++ /dev/null
        @@ -1,2 +0,0 @@
        -line one
        -line two
    """)


@pytest.fixture
def patch_rename() -> str:
    """A rename with a content change."""
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,0 +2,1 @@
        +# New line added after rename
    """)


@pytest.fixture
def patch_submodule() -> str:
    """A submodule pointer change."""
    return textwrap.dedent("""\
        diff --git a/vendor/lib b/vendor/lib
        index abc1234..def5678 160000
        --- a/vendor/lib
        +++ b/vendor/lib
        @@ -1 +1 @@
        -Subproject commit abc1234567890abcdef1234567890abcdef123456
        +Subproject commit def4567890abcdef1234567890abcdef123456ab
    """)


@pytest.fixture
def patch_multi(patch_new_script, patch_modified, patch_mode_only, patch_deleted) -> str:
    """Several files in one patch."""
    return patch_new_script + patch_modified + patch_mode_only + patch_deleted


@pytest.fixture
def work_tree(tmp_path: Path) -> Path:
    """A working directory with one entry of each kind the fallback understands."""
    (tmp_path / "plain.txt").write_text("plain\n")
    script = tmp_path / "run.sh"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o755)
    (tmp_path / "pkg").mkdir()
    (tmp_path / "link").symlink_to("plain.txt")
    (tmp_path / "dangling").symlink_to("does-not-exist")
    return tmp_path


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "core.fileMode", "true"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
