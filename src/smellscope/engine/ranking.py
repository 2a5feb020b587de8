"""Severity ranking and finding deduplication."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import SmellKind

if TYPE_CHECKING:
    from ..findings import Finding


# ── Finding Deduplication ─────────────────────────────────────────────

# Subsumption rules: parent ⊃ child
# If a parent finding exists on the same primary location, suppress child.
SUBSUMPTION_RULES: dict[SmellKind, set[SmellKind]] = {
    # Deleting dead code settles everything else wrong with it
    SmellKind.DEAD_CODE: {
        SmellKind.LONG_METHOD,
        SmellKind.LONG_PARAMETER_LIST,
        SmellKind.FEATURE_ENVY,
        SmellKind.MESSAGE_CHAINS,
        SmellKind.COMMENTS,
    },
    # A parameter object also absorbs the primitive parameters
    SmellKind.LONG_PARAMETER_LIST: {SmellKind.PRIMITIVE_OBSESSION},
}


def deduplicate_findings(findings: list[Finding]) -> list[Finding]:
    """Drop repeated ids and findings subsumed by a stronger one.

    Args:
        findings: Findings in registry order

    Returns:
        Deduplicated list, registry order preserved
    """
    if not findings:
        return findings

    best: dict[str, Finding] = {}
    for f in findings:
        current = best.get(f.id)
        if current is None or f.severity > current.severity:
            best[f.id] = f

    kinds_at: dict[str, set[SmellKind]] = {}
    for f in best.values():
        kinds_at.setdefault(f.primary, set()).add(f.kind)

    suppressed: set[tuple[str, SmellKind]] = set()
    for primary, kinds in kinds_at.items():
        for parent in kinds:
            for child in SUBSUMPTION_RULES.get(parent, set()) & kinds:
                suppressed.add((primary, child))

    seen: set[str] = set()
    result = []
    for f in findings:
        if f.id in seen or (f.primary, f.kind) in suppressed:
            continue
        seen.add(f.id)
        result.append(best[f.id])
    return result


def rank_findings(findings: list[Finding]) -> list[Finding]:
    """Most severe first; ties broken by id so output is stable."""
    return sorted(findings, key=lambda f: (-f.severity, f.id))
