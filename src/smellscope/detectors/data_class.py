"""DATA_CLASS: fields plus getters and setters, nothing else.

Trigger: every non-constructor method is an accessor, no method has a
branch, and no method calls out to another class. A single behavioral
method is enough to clear the class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.method_metrics import has_external_calls, is_accessor, is_constructor
from ..model import Visibility
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ClassEntity, ProgramModel

_SEVERITY_FIELDS = 2  # severity starts rising past this many fields


class DataClassDetector:
    """Detects classes that only hold data."""

    name = "data_class"
    kind = SmellKind.DATA_CLASS

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for cls in program:
            if cls.is_test or not cls.fields:
                continue
            if not self._is_data_class(program, cls):
                continue

            accessors = sum(1 for m in cls.methods if not is_constructor(m))
            public = [f.name for f in cls.fields if f.visibility is Visibility.PUBLIC]
            field_count = metrics.for_class(cls.id).field_count

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(field_count, _SEVERITY_FIELDS, self.BASE_SEVERITY, 0.8),
                    primary=cls.id,
                    rationale=(
                        f"{cls.id} has {field_count} field(s) and {accessors} accessor(s) "
                        "but no behavior of its own"
                    ),
                    evidence=(
                        Evidence("field_count", field_count, f"{field_count} fields"),
                        Evidence("accessor_count", accessors, f"{accessors} getters/setters"),
                        Evidence(
                            "public_fields",
                            len(public),
                            ", ".join(public) if public else "no public fields",
                        ),
                    ),
                )
            )

        return result

    @staticmethod
    def _is_data_class(program: ProgramModel, cls: ClassEntity) -> bool:
        if cls.has_control_flow:
            return False
        for method in cls.methods:
            if has_external_calls(program, method):
                return False
            if not is_constructor(method) and not is_accessor(program, method):
                return False
        return True
