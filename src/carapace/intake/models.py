"""Intake result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from carapace.chunking.models import DiffChunk
from carapace.classify import Classification


@dataclass
class ChunkPlan:
    """One chunk plus what the reviewer needs to know about it."""

    index: int
    chunk: DiffChunk
    classifications: Dict[str, Classification] = field(default_factory=dict)
    rule_ids: List[str] = field(default_factory=list)

    @property
    def languages(self) -> List[str]:
        seen: List[str] = []
        for c in self.classifications.values():
            if c.language.value not in seen:
                seen.append(c.language.value)
        return seen

    @property
    def has_smart_contracts(self) -> bool:
        return any(c.is_smart_contract for c in self.classifications.values())


@dataclass
class IntakeResult:
    """Complete result of an intake run."""

    plans: List[ChunkPlan] = field(default_factory=list)
    total_files: int = 0
    ignored_files: List[str] = field(default_factory=list)
    max_chunk_tokens: int = 0
    duration_ms: float = 0.0

    @property
    def total_chunks(self) -> int:
        return len(self.plans)

    @property
    def total_tokens(self) -> int:
        return sum(p.chunk.estimated_tokens for p in self.plans)

    @property
    def oversized_chunks(self) -> List[ChunkPlan]:
        return [p for p in self.plans if p.chunk.estimated_tokens > self.max_chunk_tokens]
