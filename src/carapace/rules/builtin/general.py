"""Chain-agnostic rules applied to every language."""

from carapace.rules.models import Rule


def _general(id: str, name: str, description: str, category: str, severity: str) -> Rule:
    return Rule(
        id=id,
        name=name,
        description=description,
        category=category,
        ruleset="general",
        severity=severity,  # type: ignore[arg-type]
    )


ALL_GENERAL_RULES = [
    _general(
        "gen-code-quality", "Code Quality",
        "Code smells, overly complex functions, dead or duplicated logic.",
        "quality", "low",
    ),
    _general(
        "gen-potential-bugs", "Potential Bugs",
        "Off-by-one errors, null dereferences, wrong comparisons, race conditions.",
        "bugs", "high",
    ),
    _general(
        "gen-performance", "Performance",
        "Needless allocations, N+1 queries, missing memoization, slow algorithms.",
        "performance", "medium",
    ),
    _general(
        "gen-security", "Security",
        "Injection, hardcoded secrets, insecure defaults, missing input validation.",
        "security", "high",
    ),
    _general(
        "gen-error-handling", "Error Handling",
        "Swallowed errors, missing error paths, overly broad exception handlers.",
        "quality", "medium",
    ),
    _general(
        "gen-type-safety", "Type Safety",
        "Unsafe casts, implicit any, unchecked type assertions.",
        "quality", "medium",
    ),
]
