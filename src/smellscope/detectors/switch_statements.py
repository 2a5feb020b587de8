"""SWITCH_STATEMENTS: the same type-code switch repeated across methods.

Trigger: >= 2 methods of a class branch on the same type-code field.
One switch used once is ordinary conditional logic and is not flagged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import type_switch_groups
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel

_MIN_SWITCHING_METHODS = 2


class SwitchStatementsDetector:
    """Detects repeated switching on a type code."""

    name = "switch_statements"
    kind = SmellKind.SWITCH_STATEMENTS

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for cls in program:
            count = metrics.for_class(cls.id).type_switch_count
            if count < _MIN_SWITCHING_METHODS:
                continue

            groups = type_switch_groups(program, cls)
            discriminant, methods = max(
                sorted(groups.items()), key=lambda kv: len(kv[1])
            )
            label_sets = {frozenset(labels) for labels in methods.values()}
            identical = len(label_sets) == 1 and bool(next(iter(label_sets)))

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(count, _MIN_SWITCHING_METHODS, self.BASE_SEVERITY),
                    primary=cls.id,
                    secondary=(f"{cls.id}.{discriminant}",),
                    rationale=(
                        f"{count} methods of {cls.id} switch on type code '{discriminant}'"
                    ),
                    evidence=(
                        Evidence("type_switch_count", count, ", ".join(sorted(methods))),
                        Evidence("discriminant", discriminant, f"type-code field {discriminant}"),
                        Evidence(
                            "identical_labels",
                            int(identical),
                            "every switch covers the same cases"
                            if identical
                            else "switches cover different cases",
                        ),
                    ),
                )
            )

        return result
