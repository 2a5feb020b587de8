"""LONG_PARAMETER_LIST: signatures that are hard to read and call.

Trigger: parameter_count > long_parameter_list_threshold.
A signature whose parameters all belong to one data clump is left to the
Data Clumps detector so the same group is not reported once per method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import field_prefix_groups
from ..metrics.program_metrics import normalize_parameter_name
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import MethodEntity, ProgramModel


class LongParameterListDetector:
    """Detects methods with too many parameters."""

    name = "long_parameter_list"
    kind = SmellKind.LONG_PARAMETER_LIST

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        limit = thresholds.long_parameter_list_threshold

        for method in program.methods():
            count = metrics.for_method(method.id).parameter_count
            if count <= limit:
                continue
            if self._covered_by_clump(method, metrics):
                continue

            names = [p.name for p in method.parameters]
            groups = field_prefix_groups(names)
            prefix, members = max(groups.items(), key=lambda kv: (len(kv[1]), kv[0]))
            shared = len(members) if len(members) >= 2 else 0

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(count, limit, self.BASE_SEVERITY),
                    primary=method.id,
                    rationale=f"{method.id} takes {count} parameters (limit {limit})",
                    evidence=(
                        Evidence("parameter_count", count, ", ".join(names)),
                        Evidence(
                            "shared_prefix",
                            shared,
                            f"{shared} parameters start with '{prefix}'"
                            if shared
                            else "no parameters share a prefix",
                        ),
                    ),
                )
            )

        return result

    @staticmethod
    def _covered_by_clump(method: MethodEntity, metrics: MetricTable) -> bool:
        names = frozenset(normalize_parameter_name(p.name) for p in method.parameters)
        return any(
            method.id in clump.methods and names <= clump.key for clump in metrics.clumps
        )
