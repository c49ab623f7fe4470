"""Chunk data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from carapace.git.models import FileChange
from carapace.git.serializer import serialize_files


@dataclass(frozen=True)
class DiffChunk:
    """A group of files that can be reviewed on its own.

    A file split at hunk granularity appears as a partial FileChange: same
    paths and status, only the hunks that landed in this chunk.
    """

    files: Tuple[FileChange, ...]
    estimated_tokens: int

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def hunk_count(self) -> int:
        return sum(len(f.hunks) for f in self.files)

    def to_diff(self) -> str:
        """Serialize the chunk back to unified diff text."""
        return serialize_files(self.files)
