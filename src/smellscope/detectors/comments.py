"""COMMENTS: method bodies that need comments to be understood.

Trigger: >= comments_min_lines comment lines that make up more than
comments_ratio of the body (comment lines plus statements). Abstract
methods have no body and are skipped.
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


class CommentsDetector:
    """Detects methods whose comments explain code that could explain itself."""

    name = "comments"
    kind = SmellKind.COMMENTS

    BASE_SEVERITY = 0.2
    MAX_SEVERITY = 0.6

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for method in program.methods():
            comments = method.comment_lines
            if method.is_abstract or comments < thresholds.comments_min_lines:
                continue
            share = comments / (comments + method.statement_count)
            if share <= thresholds.comments_ratio:
                continue

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        share, thresholds.comments_ratio, self.BASE_SEVERITY, self.MAX_SEVERITY
                    ),
                    primary=method.id,
                    rationale=(
                        f"{method.id} carries {comments} comment lines "
                        f"for {method.statement_count} statements"
                    ),
                    evidence=(
                        Evidence("comment_lines", comments, f"at least {thresholds.comments_min_lines}"),
                        Evidence("comment_share", round(share, 4), f"limit {thresholds.comments_ratio}"),
                        Evidence("branch_count", method.branch_count, "conditions being explained"),
                    ),
                )
            )

        return result
