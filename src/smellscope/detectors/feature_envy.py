"""FEATURE_ENVY: a method more interested in another class than its own.

Trigger: external access ratio > feature_envy_ratio, concentrated on one
class reached through >= 2 distinct members.
Severity: 0.5, rising with the ratio.

When the top class is tied with another, the finding is marked ambiguous
and both candidates are reported; no move target is suggested.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.method_metrics import calls_own_methods, envy_by_class, is_constructor
from .base import DetectorResult
from .helpers import join_ids, scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel

_MIN_DISTINCT_MEMBERS = 2


class FeatureEnvyDetector:
    """Detects methods that mostly manipulate another class's data."""

    name = "feature_envy"
    kind = SmellKind.FEATURE_ENVY

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for method in program.methods():
            if method.is_abstract or is_constructor(method):
                continue
            ratio = metrics.for_method(method.id).external_access_ratio
            if ratio <= thresholds.feature_envy_ratio:
                continue

            envy = envy_by_class(program, method)
            top_total = max(total for total, _ in envy.values())
            top = sorted(
                owner
                for owner, (total, distinct) in envy.items()
                if total == top_total and distinct >= _MIN_DISTINCT_MEMBERS
            )
            if not top:
                continue

            external = sum(total for total, _ in envy.values())
            total_accesses = len(method.accesses)
            partial = calls_own_methods(program, method)
            severity = scaled_severity(ratio, thresholds.feature_envy_ratio, self.BASE_SEVERITY)

            evidence = [
                Evidence(
                    "external_access_ratio",
                    round(ratio, 4),
                    f"{external} of {total_accesses} accesses leave {method.owner}",
                ),
                Evidence(
                    "calls_own_methods",
                    int(partial),
                    "also calls its own class" if partial else "uses only its own data",
                ),
            ]

            if len(top) > 1:
                rationale = (
                    f"{method.id} leans equally on {join_ids(top)} "
                    f"({top_total} accesses each); no single owner stands out"
                )
                ambiguous = True
            else:
                target = top[0]
                distinct = envy[target][1]
                evidence.append(
                    Evidence(
                        "envied_accesses",
                        top_total,
                        f"{top_total} accesses to {distinct} members of {target}",
                    )
                )
                rationale = (
                    f"{method.id} makes {top_total} of its {total_accesses} "
                    f"accesses to {target}"
                )
                ambiguous = False

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=severity,
                    primary=method.id,
                    secondary=tuple(top),
                    rationale=rationale,
                    evidence=tuple(evidence),
                    ambiguous=ambiguous,
                )
            )

        return result
