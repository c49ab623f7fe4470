"""Diff acquisition from a local git checkout.

Diffs are requested with rename detection and normal context lines, since a
reviewer reading a chunk needs the code around each change.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

import structlog

logger = structlog.get_logger(__name__)

GIT_TIMEOUT = 30

# Non-ASCII paths stay UTF-8; no colour or external diff driver in the parsed text
_DIFF_ARGS = [
    "-c", "core.quotePath=false",
    "diff", "--no-color", "--no-ext-diff", "--find-renames",
]


class GitError(Exception):
    """Raised when git is missing, times out, or exits non-zero."""


def _git(args: List[str], cwd: Path) -> str:
    command = ["git", *args]
    try:
        proc = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=GIT_TIMEOUT,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"'{' '.join(command)}' did not finish within {GIT_TIMEOUT}s") from exc

    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise GitError(f"'{' '.join(command)}' failed: {detail}")
    return proc.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Top-level directory of the repository containing *cwd*."""
    return Path(_git(["rev-parse", "--show-toplevel"], cwd=cwd or Path.cwd()).strip())


def get_staged_diff(repo_root: Path, *, context: int = 3) -> str:
    """Diff of the index against HEAD."""
    text = _git([*_DIFF_ARGS, f"--unified={context}", "--cached"], cwd=repo_root)
    logger.debug("staged_diff_read", chars=len(text))
    return text


def get_range_diff(repo_root: Path, base: str, head: str = "HEAD", *, context: int = 3) -> str:
    """Diff between two revisions, e.g. a PR's base and head commits."""
    text = _git([*_DIFF_ARGS, f"--unified={context}", f"{base}..{head}"], cwd=repo_root)
    logger.debug("range_diff_read", base=base, head=head, chars=len(text))
    return text
