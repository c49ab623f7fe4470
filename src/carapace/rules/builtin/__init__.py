"""Built-in rules — aggregate all rulesets."""

from carapace.rules.builtin.attack import ALL_ATTACK_RULES
from carapace.rules.builtin.general import ALL_GENERAL_RULES
from carapace.rules.builtin.quality import ALL_QUALITY_RULES
from carapace.rules.builtin.solidity import ALL_SOLIDITY_RULES
from carapace.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_GENERAL_RULES,
    *ALL_SOLIDITY_RULES,
    *ALL_ATTACK_RULES,
    *ALL_QUALITY_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
