"""DIVERGENT_CHANGE: one class changed for several unrelated reasons.

Members of a class that were ever changed together are joined into one
cluster. The class is flagged when >= 2 such clusters each show up in
>= divergent_min_changes change sets: the clusters never move together,
so they answer to different reasons for change. Requires change history.

When one method is edited alongside both groups it glues them into a single
cluster. If dropping that method leaves >= 2 such clusters, the class is
flagged too and the method is reported as the one mixing the reasons.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Optional

from ..findings import Evidence, Finding, SmellKind
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ClassEntity, ProgramModel

_MIN_CLUSTERS = 2


class _DisjointSet:
    def __init__(self) -> None:
        self._parent: dict[str, str] = {}

    def find(self, item: str) -> str:
        self._parent.setdefault(item, item)
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: str, b: str) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            # Smaller id as root keeps cluster naming deterministic
            lo, hi = sorted((ra, rb))
            self._parent[hi] = lo

    def groups(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = defaultdict(list)
        for item in sorted(self._parent):
            out[self.find(item)].append(item)
        return dict(out)


class DivergentChangeDetector:
    """Detects classes whose members change in independent clusters."""

    name = "divergent_change"
    kind = SmellKind.DIVERGENT_CHANGE

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

        # class id -> one set of touched member names per change set
        edits: dict[str, list[set[str]]] = defaultdict(list)
        for change in program.change_sets:
            per_class: dict[str, set[str]] = defaultdict(set)
            for entity in change.touched:
                if entity in program:
                    continue
                class_id, _, member = entity.rpartition(".")
                per_class[class_id].add(member)
            for class_id, members in per_class.items():
                edits[class_id].append(members)

        for class_id in sorted(edits):
            clusters = self._clusters(edits[class_id])
            active = [
                (members, changes)
                for members, changes in clusters
                if changes >= thresholds.divergent_min_changes
            ]
            cls = program.get_class(class_id)
            mixer = None
            if len(active) < _MIN_CLUSTERS:
                mixer, active = self._split_by_mixer(cls, edits[class_id], thresholds)
                if mixer is None:
                    continue

            field_only = [members for members, _ in active if all(cls.get_field(m) for m in members)]
            method_only = [
                members for members, _ in active if all(cls.get_method(m) for m in members)
            ]
            described = "; ".join(
                f"{{{', '.join(members)}}} x{changes}" for members, changes in active
            )

            evidence = [
                Evidence("change_clusters", len(active), described),
                Evidence(
                    "method_only_clusters",
                    len(method_only),
                    f"{len(method_only)} cluster(s) touch only methods",
                ),
                Evidence(
                    "field_only_clusters",
                    len(field_only),
                    f"{len(field_only)} cluster(s) touch only fields",
                ),
            ]
            if mixer is not None:
                evidence.append(
                    Evidence("mixing_method", mixer, f"{mixer} is edited for every reason")
                )

            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(len(active), _MIN_CLUSTERS, self.BASE_SEVERITY),
                    primary=class_id,
                    rationale=(
                        f"{class_id} changes for {len(active)} independent reasons: {described}"
                    ),
                    evidence=tuple(evidence),
                )
            )

        return result

    @staticmethod
    def _clusters(edits: list[set[str]]) -> list[tuple[list[str], int]]:
        """Co-change clusters and how many change sets touched each."""
        members = _DisjointSet()
        for touched in edits:
            ordered = sorted(touched)
            members.find(ordered[0])
            for other in ordered[1:]:
                members.union(ordered[0], other)

        clusters = []
        for _, group in sorted(members.groups().items()):
            group_set = set(group)
            changes = sum(1 for touched in edits if touched & group_set)
            clusters.append((group, changes))
        return clusters

    def _split_by_mixer(
        self, cls: ClassEntity, edits: list[set[str]], thresholds: DetectionThresholds
    ) -> tuple[Optional[str], list[tuple[list[str], int]]]:
        """First method whose removal leaves >= 2 active clusters, and those clusters."""
        methods = sorted({m for touched in edits for m in touched if cls.get_method(m)})
        for method in methods:
            remaining = [touched - {method} for touched in edits if touched - {method}]
            active = [
                (members, changes)
                for members, changes in self._clusters(remaining)
                if changes >= thresholds.divergent_min_changes
            ]
            if len(active) >= _MIN_CLUSTERS:
                return method, active
        return None, []
