"""Shared test fixtures — sample diffs, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_diff_modified() -> str:
    """A single modified file with one hunk of mixed changes."""
    return textwrap.dedent("""\
        diff --git a/src/index.ts b/src/index.ts
        index 1234567..abcdef0 100644
        --- a/src/index.ts
        +++ b/src/index.ts
        @@ -1,3 +1,4 @@
         import { foo } from "./foo";
        +import { bar } from "./bar";
         
         export function main() {
    """)


@pytest.fixture
def sample_diff_multi() -> str:
    """Two files, the second with two hunks."""
    return textwrap.dedent("""\
        diff --git a/a.py b/a.py
        index 1234567..abcdef0 100644
        --- a/a.py
        +++ b/a.py
        @@ -1,2 +1,3 @@
         x = 1
        +y = 2
         print(x)
        diff --git a/contracts/Token.sol b/contracts/Token.sol
        index 1234567..abcdef0 100644
        --- a/contracts/Token.sol
        +++ b/contracts/Token.sol
        @@ -1,3 +1,4 @@ contract Token {
         uint256 total;
        +uint256 cap;
         function mint() public {
         }
        @@ -10,3 +11,3 @@ function burn() public {
         uint256 amount;
        -total -= amount;
        +total = total - amount;
         }
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    return textwrap.dedent("""\
        diff --git a/newfile.ts b/newfile.ts
        new file mode 100644
        index 0000000..abcdef0
        --- /dev/null
        +++ b/newfile.ts
        @@ -0,0 +1,3 @@
        +export const hello = "world";
        +export const foo = "bar";
        +export const baz = 42;
    """)


@pytest.fixture
def sample_diff_deleted_file() -> str:
    return textwrap.dedent("""\
        diff --git a/old.ts b/old.ts
        deleted file mode 100644
        index abcdef0..0000000
        --- a/old.ts
        +++ /dev/null
        @@ -1,2 +0,0 @@
        -export const gone = true;
        -export const removed = true;
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 90%
        rename from old_name.py
        rename to new_name.py
        index 1234567..abcdef0 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,2 +1,2 @@
        -NAME = "old"
        +NAME = "new"
         print(NAME)
    """)


@pytest.fixture
def sample_diff_pure_rename() -> str:
    """A rename with no content change — no ---/+++ lines, no hunks."""
    return textwrap.dedent("""\
        diff --git a/lib/a.go b/lib/b.go
        similarity index 100%
        rename from lib/a.go
        rename to lib/b.go
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abc1234
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index 1234567..abcdef0 100644
        --- a/data.txt
        +++ b/data.txt
        @@ -1 +1 @@
        -old last line
        \\ No newline at end of file
        +new last line
        \\ No newline at end of file
    """)


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
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
