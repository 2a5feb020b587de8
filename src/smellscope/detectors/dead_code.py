"""DEAD_CODE: private methods that nothing calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.method_metrics import is_constructor
from ..metrics.program_metrics import call_sites
from ..model import Visibility
from .base import DetectorResult

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class DeadCodeDetector:
    name = "dead_code"
    kind = SmellKind.DEAD_CODE

    BASE_SEVERITY = 0.3

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for method in program.methods():
            if method.visibility is not Visibility.PRIVATE:
                continue
            if method.is_abstract or is_constructor(method):
                continue
            if call_sites(program, method.owner, method.name):
                continue

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=self.BASE_SEVERITY,
                    primary=method.id,
                    rationale=f"private method {method.id} is never called",
                    evidence=(
                        Evidence(
                            "statement_count",
                            method.statement_count,
                            f"{method.statement_count} unreachable statements",
                        ),
                    ),
                )
            )

        return result
