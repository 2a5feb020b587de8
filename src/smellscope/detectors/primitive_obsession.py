"""PRIMITIVE_OBSESSION: a concept spread over loose primitive values.

Trigger: >= primitive_obsession_min_group primitive fields of one class, or
primitive parameters of one method, sharing a name prefix
(``rangeStart``, ``rangeEnd``, ``rangeStep``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import field_prefix_groups
from ..model import TypeTag
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class PrimitiveObsessionDetector:
    """Detects prefix-grouped primitives that want to be an object."""

    name = "primitive_obsession"
    kind = SmellKind.PRIMITIVE_OBSESSION

    BASE_SEVERITY = 0.3

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        minimum = thresholds.primitive_obsession_min_group

        for cls in program:
            names = [f.name for f in cls.fields if f.type_tag is TypeTag.PRIMITIVE]
            for prefix, group in sorted(field_prefix_groups(names).items()):
                if len(group) >= minimum:
                    result.findings.append(
                        self._finding(
                            cls.id, prefix, tuple(f"{cls.id}.{n}" for n in group), "fields", minimum
                        )
                    )

            for method in cls.methods:
                names = [p.name for p in method.parameters if p.type_tag is TypeTag.PRIMITIVE]
                for prefix, group in sorted(field_prefix_groups(names).items()):
                    if len(group) >= minimum:
                        result.findings.append(
                            self._finding(method.id, prefix, tuple(group), "parameters", minimum)
                        )

        return result

    def _finding(
        self, primary: str, prefix: str, group: tuple[str, ...], source: str, minimum: int
    ) -> Finding:
        return Finding(
            kind=self.kind,
            severity=scaled_severity(len(group), minimum, self.BASE_SEVERITY, 0.7),
            primary=primary,
            secondary=group,
            rationale=f"{len(group)} primitive {source} of {primary} describe '{prefix}'",
            evidence=(
                Evidence("group_size", len(group), ", ".join(group)),
                Evidence("prefix", prefix, f"shared prefix '{prefix}'"),
                Evidence("source", source, f"primitive {source}"),
            ),
        )
