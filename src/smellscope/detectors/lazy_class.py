"""LAZY_CLASS: a class that no longer pays for itself.

Trigger: at most lazy_class_max_methods behavioral methods and at most
lazy_class_max_statements statements. Pure data holders (no behavioral
method at all), abstract classes and test classes are excluded.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.class_metrics import behavioral_methods
from .base import DetectorResult

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class LazyClassDetector:
    """Detects classes with almost no behavior."""

    name = "lazy_class"
    kind = SmellKind.LAZY_CLASS

    BASE_SEVERITY = 0.3

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        users = self._users(program)

        for cls in program:
            if cls.is_abstract or cls.is_test:
                continue
            behavioral = behavioral_methods(program, cls)
            if not behavioral or len(behavioral) > thresholds.lazy_class_max_methods:
                continue
            statements = metrics.for_class(cls.id).statement_count
            if statements > thresholds.lazy_class_max_statements:
                continue

            in_hierarchy = cls.superclass is not None or bool(program.subclasses(cls.id))
            evidence = [
                Evidence("behavioral_methods", len(behavioral), ", ".join(m.name for m in behavioral)),
                Evidence("statement_count", statements, f"{statements} statements"),
                Evidence("in_hierarchy", int(in_hierarchy), cls.superclass or "no superclass"),
            ]
            main_user = users.get(cls.id)
            if main_user is not None:
                evidence.append(Evidence("main_user", main_user, f"{main_user} uses it most"))

            # Fewer statements means less reason to exist
            severity = self.BASE_SEVERITY + 0.2 * (
                1 - statements / max(thresholds.lazy_class_max_statements, 1)
            )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=round(severity, 4),
                    primary=cls.id,
                    rationale=(
                        f"{cls.id} has {len(behavioral)} behavioral method(s) "
                        f"and {statements} statement(s)"
                    ),
                    evidence=tuple(evidence),
                )
            )

        return result

    @staticmethod
    def _users(program: ProgramModel) -> dict[str, str]:
        """Class id -> the other class accessing it most (ties by id)."""
        counts: dict[str, Counter[str]] = {}
        for cls in program:
            for method in cls.methods:
                for access in method.accesses:
                    if access.owner != cls.id:
                        counts.setdefault(access.owner, Counter())[cls.id] += 1
        return {
            target: min(counter.items(), key=lambda kv: (-kv[1], kv[0]))[0]
            for target, counter in counts.items()
        }
