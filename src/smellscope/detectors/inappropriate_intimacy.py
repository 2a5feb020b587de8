"""INAPPROPRIATE_INTIMACY: two classes reaching into each other's internals.

Trigger: each class accesses >= intimacy_min_accesses non-public members
of the other. Superclass/subclass pairs are excluded; that traffic is
Refused Bequest territory.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from ..model import FieldEntity, Receiver, Visibility
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


@dataclass
class _Traffic:
    fields: int = 0
    methods: int = 0
    chained: int = 0

    @property
    def total(self) -> int:
        return self.fields + self.methods


class InappropriateIntimacyDetector:
    """Detects class pairs with bidirectional access to non-public members."""

    name = "inappropriate_intimacy"
    kind = SmellKind.INAPPROPRIATE_INTIMACY

    BASE_SEVERITY = 0.6

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        traffic = self._private_traffic(program)

        for (a, b), ab in sorted(traffic.items()):
            if a >= b:
                continue
            ba = traffic.get((b, a))
            if ba is None:
                continue
            if program.related_by_inheritance(a, b):
                continue
            weaker = min(ab.total, ba.total)
            if weaker < thresholds.intimacy_min_accesses:
                continue

            fields = ab.fields + ba.fields
            methods = ab.methods + ba.methods
            chained = ab.chained + ba.chained
            # The heavier side is the natural home for the shared members
            heavier = a if ab.total >= ba.total else b

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        weaker, thresholds.intimacy_min_accesses, self.BASE_SEVERITY
                    ),
                    primary=a,
                    secondary=(b,),
                    rationale=(
                        f"{a} touches {ab.total} non-public member(s) of {b}; "
                        f"{b} touches {ba.total} of {a}"
                    ),
                    evidence=(
                        Evidence("accesses_forward", ab.total, f"{a} -> {b}"),
                        Evidence("accesses_backward", ba.total, f"{b} -> {a}"),
                        Evidence("field_accesses", fields, f"{fields} field access(es)"),
                        Evidence("method_accesses", methods, f"{methods} method access(es)"),
                        Evidence("chained_accesses", chained, f"{chained} via returned objects"),
                        Evidence("heavier_side", heavier, f"{heavier} reaches in more often"),
                    ),
                )
            )

        return result

    @staticmethod
    def _private_traffic(program: ProgramModel) -> dict[tuple[str, str], _Traffic]:
        """(accessing class, accessed class) -> non-public access counts."""
        traffic: dict[tuple[str, str], _Traffic] = defaultdict(_Traffic)
        for cls in program:
            own = program.self_owners(cls.id)
            for method in cls.methods:
                for access in method.accesses:
                    if access.owner in own:
                        continue
                    resolved = program.resolve_member(access.owner, access.target)
                    if resolved is None:
                        continue
                    declaring, member = resolved
                    if member.visibility is Visibility.PUBLIC or declaring in own:
                        continue
                    entry = traffic[(cls.id, declaring)]
                    if isinstance(member, FieldEntity):
                        entry.fields += 1
                    else:
                        entry.methods += 1
                    if access.receiver is Receiver.RESULT:
                        entry.chained += 1
        return dict(traffic)
