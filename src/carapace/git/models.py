"""Data models for parsed diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ChangeKind(str, Enum):
    ADD = "add"
    DELETE = "delete"
    CONTEXT = "context"


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


_MARKERS = {
    ChangeKind.ADD: "+",
    ChangeKind.DELETE: "-",
    ChangeKind.CONTEXT: " ",
}


@dataclass(frozen=True, slots=True)
class Change:
    """A single line inside a hunk, without its leading marker."""

    kind: ChangeKind
    content: str
    line_no: int = 0  # new side for add/context, old side for delete

    @property
    def marker(self) -> str:
        return _MARKERS[self.kind]


@dataclass(frozen=True)
class Hunk:
    """One ``@@ -a,b +c,d @@`` block and its changed lines."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: Tuple[Change, ...] = ()
    section: Optional[str] = None  # text after the closing @@

    @property
    def header(self) -> str:
        text = (
            f"@@ -{self.old_start},{self.old_lines} "
            f"+{self.new_start},{self.new_lines} @@"
        )
        if self.section:
            text += f" {self.section}"
        return text

    @property
    def additions(self) -> int:
        return sum(1 for c in self.changes if c.kind == ChangeKind.ADD)

    @property
    def deletions(self) -> int:
        return sum(1 for c in self.changes if c.kind == ChangeKind.DELETE)


@dataclass(frozen=True)
class FileChange:
    """A file touched by the diff.

    ``old_path`` and ``new_path`` are equal unless the file was renamed. For
    added and deleted files both carry the existing side's path and
    ``status`` records which side is ``/dev/null``.
    """

    old_path: str
    new_path: str
    hunks: Tuple[Hunk, ...] = field(default=())
    status: FileStatus = FileStatus.MODIFIED

    @property
    def path(self) -> str:
        return self.new_path

    @property
    def additions(self) -> int:
        return sum(h.additions for h in self.hunks)

    @property
    def deletions(self) -> int:
        return sum(h.deletions for h in self.hunks)
