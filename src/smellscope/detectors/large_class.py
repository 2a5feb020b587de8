"""LARGE_CLASS: too many fields or too much code in one class.

Trigger: field_count > large_class_field_threshold OR
statement_count > large_class_statement_threshold.

Whether a cohesive large class (every field sharing one name theme) is
worth splitting is decided by the suggester; the finding is always kept.
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


class LargeClassDetector:
    """Detects classes that are trying to do too much."""

    name = "large_class"
    kind = SmellKind.LARGE_CLASS

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        field_limit = thresholds.large_class_field_threshold
        statement_limit = thresholds.large_class_statement_threshold

        for cls in program:
            cm = metrics.for_class(cls.id)
            too_many_fields = cm.field_count > field_limit
            too_much_code = cm.statement_count > statement_limit
            if not (too_many_fields or too_much_code):
                continue

            severity = max(
                scaled_severity(cm.field_count, field_limit, self.BASE_SEVERITY)
                if too_many_fields
                else 0.0,
                scaled_severity(cm.statement_count, statement_limit, self.BASE_SEVERITY)
                if too_much_code
                else 0.0,
            )

            type_codes = [f.name for f in cls.fields if f.type_tag is TypeTag.TYPE_CODE]
            themes = field_prefix_groups([f.name for f in cls.fields])
            single_theme = len(cls.fields) >= 2 and len(themes) == 1

            reasons = []
            if too_many_fields:
                reasons.append(f"{cm.field_count} fields (limit {field_limit})")
            if too_much_code:
                reasons.append(f"{cm.statement_count} statements (limit {statement_limit})")

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=severity,
                    primary=cls.id,
                    rationale=f"{cls.id} has {' and '.join(reasons)}",
                    evidence=(
                        Evidence("field_count", cm.field_count, f"{cm.field_count} fields"),
                        Evidence(
                            "statement_count",
                            cm.statement_count,
                            f"{cm.statement_count} statements over {cm.method_count} methods",
                        ),
                        Evidence(
                            "type_code_fields",
                            len(type_codes),
                            ", ".join(type_codes) if type_codes else "none",
                        ),
                        Evidence(
                            "single_theme",
                            int(single_theme),
                            f"fields share the '{next(iter(themes))}' prefix"
                            if single_theme
                            else f"{len(themes)} field name themes",
                        ),
                    ),
                )
            )

        return result
