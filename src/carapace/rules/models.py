"""Rule data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from carapace.config.schema import Severity


@dataclass
class Rule:
    """A review rule the downstream reviewer is asked to apply.

    Rules with ``chain`` set only apply to files of that smart-contract
    ecosystem; all others are chain-agnostic and are selected by ``ruleset``.
    """

    id: str
    name: str
    description: str
    category: str  # security | bugs | quality | performance | gas | recon | auth | ...
    ruleset: str  # general | attack | quality | solidity
    severity: Severity
    chain: Optional[str] = None
    enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "ruleset": self.ruleset,
            "severity": self.severity,
        }
        if self.chain is not None:
            data["chain"] = self.chain
        return data
