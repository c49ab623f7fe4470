"""Chunk splitter.

Greedy, order-preserving bin packing of parsed files into chunks that fit a
token budget. Files are packed whole while they fit; a file that is larger
than the budget on its own is split at hunk boundaries instead. A single
hunk is never split, so a chunk holding one oversized hunk (or one oversized
hunk-less file) is the only way a chunk can exceed the budget.

Token estimation is ``ceil(len(text) / CHARS_PER_TOKEN)`` over the canonical
serialization from :mod:`carapace.git.serializer`.
"""

from __future__ import annotations

import dataclasses
from typing import List, Sequence

import structlog

from carapace.chunking.models import DiffChunk
from carapace.git.models import FileChange, Hunk
from carapace.git.serializer import file_header, serialize_file, serialize_hunk

logger = structlog.get_logger(__name__)

CHARS_PER_TOKEN = 3


class InvalidBudget(Exception):
    """Raised when the chunk budget is not a positive integer."""

    def __init__(self, budget: object) -> None:
        super().__init__(f"max chunk tokens must be a positive integer, got {budget!r}")
        self.budget = budget


def estimate_tokens(text: str) -> int:
    """Estimate token count for *text* (rounded up)."""
    return -(-len(text) // CHARS_PER_TOKEN)


def file_tokens(file: FileChange) -> int:
    return estimate_tokens(serialize_file(file))


def hunk_tokens(hunk: Hunk) -> int:
    return estimate_tokens(serialize_hunk(hunk))


def _chunk(files: Sequence[FileChange]) -> DiffChunk:
    return DiffChunk(
        files=tuple(files),
        estimated_tokens=sum(file_tokens(f) for f in files),
    )


def _split_by_hunks(file: FileChange, max_chunk_tokens: int) -> List[DiffChunk]:
    """Split one oversized file into chunks of consecutive hunks."""
    if not file.hunks:
        logger.warning(
            "oversized_file_without_hunks",
            path=file.path,
            budget=max_chunk_tokens,
        )
        return [_chunk([file])]

    header_tokens = estimate_tokens(file_header(file))
    chunks: List[DiffChunk] = []
    batch: List[Hunk] = []
    batch_tokens = header_tokens

    for hunk in file.hunks:
        h_tokens = hunk_tokens(hunk)

        if batch_tokens + h_tokens <= max_chunk_tokens:
            batch.append(hunk)
            batch_tokens += h_tokens
            continue

        # Flush current hunk batch
        if batch:
            chunks.append(_chunk([dataclasses.replace(file, hunks=tuple(batch))]))
        if header_tokens + h_tokens > max_chunk_tokens:
            logger.warning(
                "oversized_hunk",
                path=file.path,
                hunk=hunk.header,
                tokens=header_tokens + h_tokens,
                budget=max_chunk_tokens,
            )
        batch = [hunk]
        batch_tokens = header_tokens + h_tokens

    # Flush remaining hunks
    if batch:
        chunks.append(_chunk([dataclasses.replace(file, hunks=tuple(batch))]))

    logger.debug("file_split_by_hunks", path=file.path, chunks=len(chunks))
    return chunks


def split_into_chunks(
    files: Sequence[FileChange],
    max_chunk_tokens: int,
) -> List[DiffChunk]:
    """Partition *files* into chunks of at most *max_chunk_tokens* tokens.

    Concatenating the hunks of every chunk, per file, in emission order gives
    back the original hunks in their original order.
    """
    if (
        isinstance(max_chunk_tokens, bool)
        or not isinstance(max_chunk_tokens, int)
        or max_chunk_tokens <= 0
    ):
        raise InvalidBudget(max_chunk_tokens)

    chunks: List[DiffChunk] = []
    current_files: List[FileChange] = []
    current_tokens = 0

    for file in files:
        f_tokens = file_tokens(file)

        # The entire file fits into the current chunk
        if current_tokens + f_tokens <= max_chunk_tokens:
            current_files.append(file)
            current_tokens += f_tokens
            continue

        if current_files:
            chunks.append(_chunk(current_files))
            current_files = []
            current_tokens = 0

        # Fits in an empty chunk: carry it forward
        if f_tokens <= max_chunk_tokens:
            current_files.append(file)
            current_tokens = f_tokens
            continue

        # Larger than a whole chunk: emit hunk batches straight away
        chunks.extend(_split_by_hunks(file, max_chunk_tokens))

    if current_files:
        chunks.append(_chunk(current_files))

    logger.debug(
        "diff_chunked",
        files=len(files),
        chunks=len(chunks),
        budget=max_chunk_tokens,
    )
    return chunks
