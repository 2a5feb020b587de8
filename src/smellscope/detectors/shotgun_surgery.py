"""SHOTGUN_SURGERY: one kind of change forces edits across many classes.

Trigger: the same set of >= shotgun_min_classes classes is touched together
in >= shotgun_min_recurrence change sets. Requires change history; a model
without change sets yields nothing.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from ..findings import Evidence, Finding, SmellKind
from .base import DetectorResult
from .helpers import join_ids, scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


class ShotgunSurgeryDetector:
    """Detects recurring co-changes scattered over several classes."""

    name = "shotgun_surgery"
    kind = SmellKind.SHOTGUN_SURGERY

    BASE_SEVERITY = 0.5

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        if not program.change_sets:
            return result

        recurring: Counter[frozenset[str]] = Counter()
        touched_members: dict[frozenset[str], set[str]] = defaultdict(set)
        for change in program.change_sets:
            classes = frozenset(c for c in map(program.class_of, change.touched) if c)
            if len(classes) < thresholds.shotgun_min_classes:
                continue
            recurring[classes] += 1
            touched_members[classes].update(e for e in change.touched if e not in program)

        for classes, count in sorted(recurring.items(), key=lambda kv: sorted(kv[0])):
            if count < thresholds.shotgun_min_recurrence:
                continue
            ordered = sorted(classes)
            members = sorted(touched_members[classes])
            dominant, share = self._dominant(program, members)
            field_edits = sum(1 for m in members if self._is_field(program, m))

            evidence = [
                Evidence("co_changes", count, f"changed together {count} times"),
                Evidence("class_count", len(ordered), join_ids(ordered)),
                Evidence(
                    "field_share",
                    round(field_edits / len(members), 4) if members else 0.0,
                    f"{field_edits} of {len(members)} touched members are fields",
                ),
            ]
            if dominant is not None:
                evidence.append(
                    Evidence("dominant_class", dominant, f"holds {share:.0%} of touched members")
                )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        count, thresholds.shotgun_min_recurrence, self.BASE_SEVERITY
                    ),
                    primary=ordered[0],
                    secondary=tuple(ordered[1:]),
                    rationale=(
                        f"{join_ids(ordered)} were changed together in {count} change sets"
                    ),
                    evidence=tuple(evidence),
                )
            )

        return result

    @staticmethod
    def _dominant(program: ProgramModel, members: list[str]) -> tuple[str | None, float]:
        """Class holding at least half the touched members, if any."""
        if not members:
            return None, 0.0
        counts = Counter(program.class_of(m) for m in members)
        owner, count = min(counts.items(), key=lambda kv: (-kv[1], kv[0] or ""))
        share = count / len(members)
        return (owner, share) if share >= 0.5 else (None, share)

    @staticmethod
    def _is_field(program: ProgramModel, member_id: str) -> bool:
        class_id, _, name = member_id.rpartition(".")
        return program.get_class(class_id).get_field(name) is not None
