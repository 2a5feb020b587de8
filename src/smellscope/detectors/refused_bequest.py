"""REFUSED_BEQUEST: a subclass that ignores most of what it inherits.

Trigger: used inherited members / inherited members < refused_bequest_ratio.
A subclass overriding every inherited method is a full replacement, not a
refusal, and is exempt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import (
    inherited_members,
    overridden_methods,
    used_inherited_members,
)
from ..model import MethodEntity
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class RefusedBequestDetector:
    """Detects subclasses using little of their inheritance."""

    name = "refused_bequest"
    kind = SmellKind.REFUSED_BEQUEST

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for cls in program:
            if cls.superclass is None or cls.is_test:
                continue
            inherited = inherited_members(program, cls)
            if not inherited:
                continue

            inherited_methods = {n for n, m in inherited.items() if isinstance(m, MethodEntity)}
            overridden = overridden_methods(program, cls)
            if inherited_methods and inherited_methods <= overridden:
                continue

            used = used_inherited_members(program, cls)
            ratio = len(used) / len(inherited)
            if ratio >= thresholds.refused_bequest_ratio:
                continue

            refused = sorted(set(inherited) - used - overridden)
            siblings = [s for s in program.subclasses(cls.superclass) if s != cls.id]
            sibling_users = sorted(
                s
                for s in siblings
                if used_inherited_members(program, program.get_class(s)) & set(refused)
            )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        ratio, thresholds.refused_bequest_ratio, self.BASE_SEVERITY, inverse=True
                    ),
                    primary=cls.id,
                    secondary=(cls.superclass,),
                    rationale=(
                        f"{cls.id} uses {len(used)} of {len(inherited)} members "
                        f"inherited from {cls.superclass}"
                    ),
                    evidence=(
                        Evidence(
                            "inherited_usage_ratio",
                            round(ratio, 4),
                            f"{len(used)}/{len(inherited)} inherited members used",
                        ),
                        Evidence("refused_members", len(refused), ", ".join(refused)),
                        Evidence("siblings", len(siblings), ", ".join(sorted(siblings))),
                        Evidence(
                            "sibling_users",
                            len(sibling_users),
                            ", ".join(sibling_users) if sibling_users else "no sibling uses them",
                        ),
                    ),
                )
            )

        return result
