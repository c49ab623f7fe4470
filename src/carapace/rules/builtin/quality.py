"""Code-quality rules, including Solidity gas and documentation checks."""

from typing import Optional

from carapace.rules.models import Rule


def _quality(
    id: str,
    name: str,
    description: str,
    category: str,
    severity: str,
    chain: Optional[str] = None,
) -> Rule:
    return Rule(
        id=id,
        name=name,
        description=description,
        category=category,
        ruleset="quality",
        severity=severity,  # type: ignore[arg-type]
        chain=chain,
    )


ALL_QUALITY_RULES = [
    # complexity
    _quality("qual-cyclomatic-complexity", "Cyclomatic Complexity",
             "Functions with too many branches.", "quality", "medium"),
    _quality("qual-function-length", "Function Length",
             "Functions too long to review at a glance.", "quality", "low"),
    _quality("qual-nesting-depth", "Excessive Nesting",
             "Deeply nested conditionals and loops.", "quality", "medium"),
    _quality("qual-file-size", "File Size",
             "Files that have grown past a maintainable size.", "quality", "low"),
    # naming
    _quality("qual-naming-convention", "Naming Convention",
             "Names that break the language's conventions.", "quality", "low"),
    _quality("qual-magic-numbers", "Magic Numbers",
             "Unexplained numeric literals.", "quality", "low"),
    _quality("qual-unclear-names", "Unclear Variable Names",
             "Single-letter or misleading identifiers.", "quality", "low"),
    # dead code
    _quality("qual-unused-imports", "Unused Imports",
             "Imports that nothing references.", "quality", "low"),
    _quality("qual-unreachable-code", "Unreachable Code",
             "Statements after return, throw or break.", "quality", "medium"),
    _quality("qual-empty-catch", "Empty Catch Blocks",
             "Exceptions caught and silently dropped.", "quality", "medium"),
    # best practices
    _quality("qual-error-handling", "Error Handling",
             "Inconsistent or missing error propagation.", "quality", "medium"),
    _quality("qual-event-emission", "Missing Event Emission",
             "State changes that emit no event.", "quality", "medium", chain="solidity"),
    _quality("qual-natspec", "Missing NatSpec Documentation",
             "Public functions without NatSpec comments.", "quality", "low", chain="solidity"),
    _quality("qual-immutable-usage", "Immutable Usage",
             "Constructor-set state that could be immutable.", "gas", "low", chain="solidity"),
    # gas
    _quality("qual-storage-vs-memory", "Storage vs Memory Optimization",
             "Repeated storage reads that could be cached in memory.", "gas", "medium",
             chain="solidity"),
    _quality("qual-loop-optimization", "Loop Optimization",
             "Loops re-reading length or storage each iteration.", "gas", "medium",
             chain="solidity"),
    _quality("qual-struct-packing", "Struct Packing",
             "Struct fields ordered so they waste storage slots.", "gas", "low",
             chain="solidity"),
    _quality("qual-calldata-vs-memory", "Calldata vs Memory",
             "External function parameters copied to memory needlessly.", "gas", "low",
             chain="solidity"),
]
