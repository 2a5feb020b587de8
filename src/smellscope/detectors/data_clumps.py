"""DATA_CLUMPS: the same group of values travelling together.

Trigger: a parameter-name group of >= data_clump_min_group_size names
shared by >= data_clump_min_recurrence signatures. ``zipCode`` and
``zipCode?`` are the same name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class DataClumpsDetector:
    """Reports each maximal recurring parameter group once."""

    name = "data_clumps"
    kind = SmellKind.DATA_CLUMPS

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for clump in metrics.clumps:
            recurrence = len(clump.methods)
            classes = sorted({program.class_of(m) for m in clump.methods} - {None})
            holders = self._field_holders(program, clump.key)
            group = ", ".join(clump.names)

            evidence = [
                Evidence("group_size", len(clump.key), group),
                Evidence("recurrence", recurrence, f"{recurrence} signatures"),
                Evidence("class_count", len(classes), ", ".join(classes)),
            ]
            if holders:
                evidence.append(
                    Evidence("field_holder", holders[0], f"{group} also stored as fields")
                )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        recurrence, thresholds.data_clump_min_recurrence, self.BASE_SEVERITY
                    ),
                    primary=clump.methods[0],
                    secondary=clump.methods[1:],
                    rationale=(
                        f"Parameters {{{group}}} appear together in {recurrence} "
                        f"signatures across {len(classes)} class(es)"
                    ),
                    evidence=tuple(evidence),
                )
            )

        return result

    @staticmethod
    def _field_holders(program: ProgramModel, key: frozenset[str]) -> list[str]:
        """Classes that already keep the whole group as fields."""
        return [
            cls.id
            for cls in program
            if key <= {f.name.lower() for f in cls.fields}
        ]
