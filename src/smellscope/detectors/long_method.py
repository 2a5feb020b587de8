"""LONG_METHOD: methods too long or too branchy to follow."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class LongMethodDetector:
    name = "long_method"
    kind = SmellKind.LONG_METHOD

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        statement_limit = thresholds.long_method_statement_threshold
        branch_limit = thresholds.long_method_branch_threshold

        for method in program.methods():
            long_body = method.statement_count > statement_limit
            branchy = method.branch_count > branch_limit
            if not (long_body or branchy):
                continue

            severity = max(
                scaled_severity(method.statement_count, statement_limit, self.BASE_SEVERITY)
                if long_body
                else 0.0,
                scaled_severity(method.branch_count, branch_limit, self.BASE_SEVERITY)
                if branchy
                else 0.0,
            )
            trigger = "branches" if branchy else "statements"

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=severity,
                    primary=method.id,
                    rationale=(
                        f"{method.id} has {method.statement_count} statements "
                        f"and {method.branch_count} branches"
                    ),
                    evidence=(
                        Evidence("statement_count", method.statement_count, f"limit {statement_limit}"),
                        Evidence("branch_count", method.branch_count, f"limit {branch_limit}"),
                        Evidence("trigger", trigger, f"too many {trigger}"),
                    ),
                )
            )

        return result
