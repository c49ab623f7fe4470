"""Intake pipeline — parse, classify, chunk, select rules."""

from carapace.intake.engine import prepare
from carapace.intake.models import ChunkPlan, IntakeResult

__all__ = ["ChunkPlan", "IntakeResult", "prepare"]
