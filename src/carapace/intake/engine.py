"""Intake engine — runs the full pipeline on raw diff text.

Errors from the parser (MalformedDiff) and the splitter (InvalidBudget)
propagate unchanged: downstream review assumes a complete, order-correct
file list, so a partial result is never returned.
"""

from __future__ import annotations

import time
from fnmatch import fnmatch
from typing import List, Optional

import structlog

from carapace.chunking import split_into_chunks
from carapace.classify import classify_file
from carapace.config.schema import CarapaceConfig
from carapace.git.diff_parser import parse_diff
from carapace.git.models import FileChange
from carapace.intake.models import ChunkPlan, IntakeResult
from carapace.rules.registry import RuleRegistry

logger = structlog.get_logger(__name__)


def _is_ignored(path: str, globs: List[str]) -> bool:
    return any(fnmatch(path, g) for g in globs)


def prepare(
    diff_text: str,
    config: CarapaceConfig,
    registry: RuleRegistry,
    *,
    max_chunk_tokens: Optional[int] = None,
) -> IntakeResult:
    """Parse *diff_text* and turn it into per-chunk review plans."""
    start = time.perf_counter()
    budget = max_chunk_tokens if max_chunk_tokens is not None else config.chunking.max_tokens

    files = parse_diff(diff_text)

    kept: List[FileChange] = []
    ignored: List[str] = []
    for file in files:
        if _is_ignored(file.path, config.ignore.files):
            ignored.append(file.path)
            continue
        kept.append(file)

    chunks = split_into_chunks(kept, budget)

    plans: List[ChunkPlan] = []
    for index, chunk in enumerate(chunks):
        classifications = {path: classify_file(path) for path in chunk.paths}
        rules = registry.rules_for_chains(c.chain for c in classifications.values())
        plans.append(
            ChunkPlan(
                index=index,
                chunk=chunk,
                classifications=classifications,
                rule_ids=[r.id for r in rules],
            )
        )

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "intake_complete",
        files=len(files),
        ignored=len(ignored),
        chunks=len(plans),
        budget=budget,
    )

    return IntakeResult(
        plans=plans,
        total_files=len(kept),
        ignored_files=ignored,
        max_chunk_tokens=budget,
        duration_ms=round(elapsed, 2),
    )
