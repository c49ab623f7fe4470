"""Solidity smart-contract rules."""

from carapace.rules.models import Rule

SOL_REENTRANCY = Rule(
    id="sol-reentrancy",
    name="Reentrancy",
    description="External calls made before state updates, allowing re-entry.",
    category="security",
    ruleset="solidity",
    severity="critical",
    chain="solidity",
)

SOL_ACCESS_CONTROL = Rule(
    id="sol-access-control",
    name="Access Control",
    description="Sensitive functions callable without owner or role checks.",
    category="security",
    ruleset="solidity",
    severity="critical",
    chain="solidity",
)

SOL_GAS_OPTIMIZATION = Rule(
    id="sol-gas-optimization",
    name="Gas Optimization",
    description="Redundant storage reads, unbounded loops, poor data packing.",
    category="performance",
    ruleset="solidity",
    severity="medium",
    chain="solidity",
)

SOL_INTEGER_OVERFLOW = Rule(
    id="sol-integer-overflow",
    name="Integer Overflow",
    description="Overflow or underflow before 0.8.0 without SafeMath, or in unchecked blocks.",
    category="security",
    ruleset="solidity",
    severity="high",
    chain="solidity",
)

SOL_FLASH_LOAN = Rule(
    id="sol-flash-loan",
    name="Flash Loan Attack",
    description="Logic that trusts balances or prices manipulable within one transaction.",
    category="security",
    ruleset="solidity",
    severity="critical",
    chain="solidity",
)

SOL_ORACLE_MANIPULATION = Rule(
    id="sol-oracle-manipulation",
    name="Oracle Manipulation",
    description="Spot prices or single-source oracles used without TWAP or sanity bounds.",
    category="security",
    ruleset="solidity",
    severity="critical",
    chain="solidity",
)

SOL_FRONT_RUNNING = Rule(
    id="sol-front-running-mev",
    name="Front-Running / MEV",
    description="Transactions whose outcome can be exploited by reordering.",
    category="security",
    ruleset="solidity",
    severity="high",
    chain="solidity",
)

SOL_UNCHECKED_RETURN = Rule(
    id="sol-unchecked-return",
    name="Unchecked Return Values",
    description="Ignored return values of low-level calls and ERC-20 transfers.",
    category="security",
    ruleset="solidity",
    severity="high",
    chain="solidity",
)

SOL_TX_ORIGIN = Rule(
    id="sol-tx-origin",
    name="tx.origin Usage",
    description="Authorization based on tx.origin instead of msg.sender.",
    category="security",
    ruleset="solidity",
    severity="high",
    chain="solidity",
)

SOL_DELEGATECALL = Rule(
    id="sol-delegatecall-safety",
    name="Delegatecall Safety",
    description="delegatecall to untrusted targets or with mismatched storage layout.",
    category="security",
    ruleset="solidity",
    severity="critical",
    chain="solidity",
)

ALL_SOLIDITY_RULES = [
    SOL_REENTRANCY,
    SOL_ACCESS_CONTROL,
    SOL_GAS_OPTIMIZATION,
    SOL_INTEGER_OVERFLOW,
    SOL_FLASH_LOAN,
    SOL_ORACLE_MANIPULATION,
    SOL_FRONT_RUNNING,
    SOL_UNCHECKED_RETURN,
    SOL_TX_ORIGIN,
    SOL_DELEGATECALL,
]
