"""JSON reporter for CI pipelines and downstream reviewers."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from carapace.git.models import FileChange
from carapace.intake.models import ChunkPlan, IntakeResult


def _file_dict(file: FileChange) -> Dict[str, Any]:
    return {
        "path": file.path,
        "old_path": file.old_path,
        "status": file.status.value,
        "hunks": len(file.hunks),
        "additions": file.additions,
        "deletions": file.deletions,
    }


def _plan_dict(plan: ChunkPlan, *, include_diff: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "index": plan.index,
        "estimated_tokens": plan.chunk.estimated_tokens,
        "files": [_file_dict(f) for f in plan.chunk.files],
        "classifications": {
            path: c.to_dict() for path, c in plan.classifications.items()
        },
        "rules": plan.rule_ids,
    }
    if include_diff:
        data["diff"] = plan.chunk.to_diff()
    return data


def to_dict(result: IntakeResult, *, include_diff: bool = False) -> Dict[str, Any]:
    """Convert IntakeResult to a JSON-serialisable dict."""
    chunks: List[Dict[str, Any]] = [
        _plan_dict(p, include_diff=include_diff) for p in result.plans
    ]
    return {
        "version": "1.0",
        "max_chunk_tokens": result.max_chunk_tokens,
        "total_files": result.total_files,
        "total_chunks": result.total_chunks,
        "total_tokens": result.total_tokens,
        "oversized_chunks": [p.index for p in result.oversized_chunks],
        "ignored_files": result.ignored_files,
        "chunks": chunks,
        "duration_ms": result.duration_ms,
    }


def render(result: IntakeResult, *, include_diff: bool = False) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, include_diff=include_diff), indent=2)
