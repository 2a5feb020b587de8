"""TEMPORARY_FIELD: a field that only matters in rare circumstances.

Trigger: a private field touched by some, but fewer than
temporary_field_usage_ratio, of its class's methods (constructors aside).
Only classes with >= 3 such methods are considered; below that every
field looks rarely used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import field_usage_ratio, field_users
from ..metrics.method_metrics import is_constructor
from ..model import Visibility
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel

_MIN_METHODS = 3


class TemporaryFieldDetector:
    name = "temporary_field"
    kind = SmellKind.TEMPORARY_FIELD

    BASE_SEVERITY = 0.3

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for cls in program:
            methods = [m for m in cls.methods if not is_constructor(m)]
            if len(methods) < _MIN_METHODS:
                continue
            for f in cls.fields:
                if f.visibility is not Visibility.PRIVATE:
                    continue
                ratio = field_usage_ratio(cls, f.name)
                if ratio == 0.0 or ratio >= thresholds.temporary_field_usage_ratio:
                    continue
                users = [u for u in field_users(cls, f.name) if u in {m.id for m in methods}]

                result.findings.append(
                    Finding(
                        kind=self.kind,
                        severity=scaled_severity(
                            ratio,
                            thresholds.temporary_field_usage_ratio,
                            self.BASE_SEVERITY,
                            0.6,
                            inverse=True,
                        ),
                        primary=f.id,
                        rationale=(
                            f"{f.id} is used by {len(users)} of {len(methods)} methods"
                        ),
                        evidence=(
                            Evidence("field_usage_ratio", round(ratio, 4), ", ".join(users)),
                            Evidence("type_tag", f.type_tag.value, f"{f.type_tag.value} field"),
                        ),
                    )
                )

        return result
