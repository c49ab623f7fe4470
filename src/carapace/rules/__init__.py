"""Ruleset registry — models, registry, built-in rule catalogue."""

from carapace.rules.models import Rule
from carapace.rules.registry import RuleRegistry, build_registry

__all__ = ["Rule", "RuleRegistry", "build_registry"]
