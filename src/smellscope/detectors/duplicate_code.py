"""DUPLICATE_CODE: identical method bodies in more than one place.

Relies on the normalized body fingerprint supplied with each method;
methods without one are never compared.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from .base import DetectorResult
from .helpers import join_ids, scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel

_MIN_COPIES = 2


class DuplicateCodeDetector:
    name = "duplicate_code"
    kind = SmellKind.DUPLICATE_CODE

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        by_fingerprint: dict[str, list[str]] = defaultdict(list)
        for method in program.methods():
            if method.fingerprint and not method.is_abstract:
                by_fingerprint[method.fingerprint].append(method.id)

        for fingerprint, copies in sorted(by_fingerprint.items()):
            if len(copies) < _MIN_COPIES:
                continue
            copies = sorted(copies)
            classes = sorted({program.class_of(c) for c in copies})
            superclasses = {program.get_class(c).superclass for c in classes}
            shared_parent = (
                next(iter(superclasses))
                if len(classes) > 1 and len(superclasses) == 1
                else None
            )

            evidence = [
                Evidence("copies", len(copies), join_ids(copies)),
                Evidence("class_count", len(classes), join_ids(classes)),
            ]
            if shared_parent is not None:
                evidence.append(
                    Evidence("shared_superclass", shared_parent, f"all copies extend {shared_parent}")
                )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(len(copies), _MIN_COPIES, self.BASE_SEVERITY),
                    primary=copies[0],
                    secondary=tuple(copies[1:]),
                    rationale=f"{len(copies)} methods share the body {fingerprint}",
                    evidence=tuple(evidence),
                )
            )

        return result
