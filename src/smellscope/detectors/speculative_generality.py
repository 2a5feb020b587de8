"""SPECULATIVE_GENERALITY: abstractions nobody uses outside tests.

Trigger: an abstract class, or an abstract method, with zero call sites in
non-test code. Callers in test-only classes do not count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..metrics.program_metrics import call_sites
from .base import DetectorResult

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ClassEntity, ProgramModel


class SpeculativeGeneralityDetector:
    """Detects unused abstract classes and hooks."""

    name = "speculative_generality"
    kind = SmellKind.SPECULATIVE_GENERALITY

    CLASS_SEVERITY = 0.5
    METHOD_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()

        for cls in program:
            if cls.is_test:
                continue
            subclasses = program.subclasses(cls.id)

            if cls.is_abstract:
                production, tests = self._class_sites(program, cls)
                if production == 0:
                    result.findings.append(
                        Finding(
                            kind=self.kind,
                            severity=self.CLASS_SEVERITY,
                            primary=cls.id,
                            secondary=tuple(subclasses),
                            rationale=self._rationale(cls.id, "abstract class", tests),
                            evidence=(
                                Evidence("scope", "class", "abstract class"),
                                Evidence("subclass_count", len(subclasses), ", ".join(subclasses)),
                                Evidence("test_call_sites", tests, f"{tests} call(s) from tests"),
                            ),
                        )
                    )
                    continue

            for method in cls.methods:
                if not method.is_abstract:
                    continue
                sites = call_sites(program, cls.id, method.name)
                tests = sum(1 for _, owner in sites if program.get_class(owner).is_test)
                if len(sites) - tests > 0:
                    continue
                result.findings.append(
                    Finding(
                        kind=self.kind,
                        severity=self.METHOD_SEVERITY,
                        primary=method.id,
                        rationale=self._rationale(method.id, "abstract method", tests),
                        evidence=(
                            Evidence("scope", "method", "abstract method"),
                            Evidence("subclass_count", len(subclasses), ", ".join(subclasses)),
                            Evidence("test_call_sites", tests, f"{tests} call(s) from tests"),
                        ),
                    )
                )

        return result

    @staticmethod
    def _class_sites(program: ProgramModel, cls: ClassEntity) -> tuple[int, int]:
        """(production, test) call sites over all methods of the class."""
        production = tests = 0
        for method in cls.methods:
            for _, owner in call_sites(program, cls.id, method.name):
                if program.get_class(owner).is_test:
                    tests += 1
                else:
                    production += 1
        return production, tests

    @staticmethod
    def _rationale(entity: str, what: str, tests: int) -> str:
        if tests:
            return f"{what} {entity} is only exercised by tests ({tests} call site(s))"
        return f"{what} {entity} has no call sites"
