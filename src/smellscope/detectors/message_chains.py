"""MESSAGE_CHAINS: a client navigating object structure call by call.

Trigger: chain depth >= message_chain_min_depth
Severity: 0.5, rising with depth; escalated when several chains pass
through the same intermediate access.

``person.getDepartment().getManager()`` couples the client to Person *and*
Department. The fix (Hide Delegate) goes on the class owning the first
hop, not on the far end of the chain.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from ..exceptions import MetricComputationError
from ..findings import Evidence, Finding, SmellKind
from ..metrics.method_metrics import chain_runs, hops
from .base import DetectorResult
from .helpers import scaled_severity, skip_entity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import AccessEntity, MethodEntity, ProgramModel

_ESCALATION = 0.2


class MessageChainsDetector:
    """Detects methods that walk chains of returned objects."""

    name = "message_chains"
    kind = SmellKind.MESSAGE_CHAINS

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        candidates: list[tuple[MethodEntity, int, list[AccessEntity]]] = []

        for method in program.methods():
            try:
                depth = metrics.chain_depth(method.id)
            except MetricComputationError as e:
                result.skipped.append(skip_entity(self.name, e))
                continue
            if depth < thresholds.message_chain_min_depth:
                continue
            candidates.append((method, depth, self._deepest_run(program, method)))

        # Intermediates are the first hop of each chain: Person.getDepartment
        through = Counter(f"{run[0].owner}.{run[0].target}" for _, _, run in candidates)

        for method, depth, run in candidates:
            first = run[0]
            intermediate = f"{first.owner}.{first.target}"
            sites = through[intermediate]
            severity = scaled_severity(
                depth, thresholds.message_chain_min_depth, self.BASE_SEVERITY
            )
            escalated = sites >= thresholds.message_chain_escalation_sites
            if escalated:
                severity = round(min(1.0, severity + _ESCALATION), 4)

            expression = self._render(run)
            rationale = f"{method.id} navigates {expression} ({depth} hops)"
            if escalated:
                rationale += f"; {sites} chains pass through {intermediate}"

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=severity,
                    primary=method.id,
                    secondary=(first.owner,),
                    rationale=rationale,
                    evidence=(
                        Evidence("chain_depth", depth, f"{depth} dependent hops"),
                        Evidence("intermediate", intermediate, expression),
                        Evidence(
                            "intermediate_sites",
                            sites,
                            f"{sites} chain(s) through {intermediate}",
                        ),
                    ),
                )
            )

        return result

    @staticmethod
    def _deepest_run(program: ProgramModel, method: MethodEntity) -> list[AccessEntity]:
        """Non-self hops of the longest chain (first one wins ties)."""
        best: list[AccessEntity] = []
        for run in chain_runs(program, method):
            run_hops = hops(program, method, run)
            if len(run_hops) > len(best):
                best = run_hops
        return best

    @staticmethod
    def _render(run: list[AccessEntity]) -> str:
        parts = [f"{run[0].owner}.{run[0].target}()"]
        parts.extend(f"{a.target}()" for a in run[1:])
        return ".".join(parts)
