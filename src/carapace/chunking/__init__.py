"""Token-bounded partitioning of parsed diffs."""

from carapace.chunking.models import DiffChunk
from carapace.chunking.splitter import (
    CHARS_PER_TOKEN,
    InvalidBudget,
    estimate_tokens,
    file_tokens,
    hunk_tokens,
    split_into_chunks,
)

__all__ = [
    "CHARS_PER_TOKEN",
    "DiffChunk",
    "InvalidBudget",
    "estimate_tokens",
    "file_tokens",
    "hunk_tokens",
    "split_into_chunks",
]
