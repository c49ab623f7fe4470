"""Rule registry — loads built-in and custom rules, applies config filters."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import structlog
import yaml

from carapace.classify import Classification
from carapace.config.loader import ConfigError
from carapace.config.schema import VALID_RULESETS, CarapaceConfig
from carapace.rules.models import Rule

logger = structlog.get_logger(__name__)

CUSTOM_RULES_DIRNAME = ".carapace-rules"


class RuleRegistry:
    """Central store for all review rules."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}
        self._rulesets: set[str] = set(VALID_RULESETS)

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: Iterable[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    @property
    def rulesets(self) -> List[str]:
        return [r for r in VALID_RULESETS if r in self._rulesets]

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    def rules_for_chains(self, chains: Iterable[Optional[str]]) -> List[Rule]:
        """Enabled rules of the selected rulesets that apply to *chains*.

        Chain-agnostic rules always apply. A chain's own ruleset (e.g.
        ``solidity``) is implied whenever that chain is present, so contract
        files get their rules without listing the ruleset in the config.
        """
        chain_set = {c for c in chains if c}
        selected: List[Rule] = []
        for rule in self.enabled_rules():
            if rule.chain is None:
                if rule.ruleset in self._rulesets:
                    selected.append(rule)
            elif rule.chain in chain_set:
                if rule.ruleset in self._rulesets or rule.ruleset == rule.chain:
                    selected.append(rule)
        return selected

    def rules_for(self, classification: Classification) -> List[Rule]:
        return self.rules_for_chains([classification.chain])

    # ---- config filtering ----

    def apply_config(self, config: CarapaceConfig) -> None:
        """Select rulesets, then narrow to ``rules.enable`` minus ``rules.disable``."""
        self._rulesets = set(config.rules.rulesets)
        allowed = set(config.rules.enable)
        blocked = set(config.rules.disable)

        for rule_id in sorted((allowed | blocked) - set(self._rules)):
            logger.warning("unknown_rule_id", rule_id=rule_id)

        for rule in self._rules.values():
            if rule.id in blocked:
                rule.enabled = False
            elif allowed:
                rule.enabled = rule.id in allowed

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Register every rule defined in ``*.yaml``/``*.yml`` under *directory*."""
        if not directory.is_dir():
            return 0
        files = sorted(p for p in directory.iterdir() if p.suffix in (".yaml", ".yml"))
        loaded = sum(self._load_rule_file(p) for p in files)
        logger.debug("custom_rules_loaded", directory=str(directory), count=loaded)
        return loaded

    def _load_rule_file(self, path: Path) -> int:
        """A rule file holds one mapping or a list of them; ``id`` is required."""
        try:
            with open(path, encoding="utf-8") as f:
                document = yaml.safe_load(f) or []
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load rule file {path}: {exc}") from exc
        entries = document if isinstance(document, list) else [document]

        loaded = 0
        for entry in entries:
            if not isinstance(entry, dict) or "id" not in entry:
                logger.warning("invalid_custom_rule", file=str(path), entry=entry)
                continue
            rule_id = str(entry["id"])
            self.register(
                Rule(
                    id=rule_id,
                    name=entry.get("name", rule_id),
                    description=entry.get("description", ""),
                    category=entry.get("category", "quality"),
                    ruleset=entry.get("ruleset", "general"),
                    severity=entry.get("severity", "medium"),
                    chain=entry.get("chain"),
                    enabled=bool(entry.get("enabled", True)),
                )
            )
            loaded += 1
        return loaded


def build_registry(config: CarapaceConfig, repo_root: Path) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from carapace.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    # Copies, so config filtering never leaks into the shared catalogue
    registry.register_many(dataclasses.replace(r) for r in ALL_BUILTIN_RULES)

    registry.load_custom_rules(repo_root / CUSTOM_RULES_DIRNAME)

    registry.apply_config(config)
    return registry
