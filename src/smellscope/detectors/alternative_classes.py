"""ALTERNATIVE_CLASSES: two classes doing the same job behind different names.

Trigger: signature similarity >= alternative_similarity_threshold and no
method name in common. Any shared name disqualifies the pair.

A method signature is its parameter type tags (in order), return tag,
side-effect tags and whether it writes state. Similarity is the smaller of
the two coverage fractions: the share of A's methods with a structural
twin in B, and the share of B's methods with a twin in A.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import numpy as np

from ..findings import Evidence, Finding, SmellKind
from ..metrics.method_metrics import is_behavioral, is_constructor
from ..model import AccessKind, Visibility
from .base import DetectorResult
from .helpers import scaled_severity

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ClassEntity, MethodEntity, ProgramModel

_MIN_METHODS = 2

Signature = tuple[tuple[str, ...], str, tuple[str, ...], bool]


def method_signature(method: MethodEntity) -> Signature:
    params = tuple(p.type_tag.value for p in sorted(method.parameters, key=lambda p: p.position))
    returns = method.return_tag.value if method.return_tag is not None else ""
    writes = any(a.kind is AccessKind.WRITE for a in method.accesses)
    return params, returns, tuple(sorted(method.effects)), writes


def _is_trivial(signature: Signature) -> bool:
    params, returns, effects, writes = signature
    return not (params or returns or effects or writes)


class AlternativeClassesDetector:
    """Detects structurally equivalent classes with disjoint vocabularies."""

    name = "alternative_classes"
    kind = SmellKind.ALTERNATIVE_CLASSES

    BASE_SEVERITY = 0.4

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult:
        result = DetectorResult()
        profiles = self._profiles(program)
        codes = {sig: i for i, sig in enumerate(sorted({s for p in profiles.values() for _, s in p}))}

        for a, b in itertools.combinations(sorted(profiles), 2):
            if program.related_by_inheritance(a, b):
                continue
            names_a = self._method_names(program.get_class(a))
            names_b = self._method_names(program.get_class(b))
            if names_a & names_b:
                continue

            matches = self._match_matrix(profiles[a], profiles[b], codes)
            similarity = float(
                min(matches.any(axis=1).mean(), matches.any(axis=0).mean())
            )
            if similarity < thresholds.alternative_similarity_threshold:
                continue

            pairs = [
                f"{profiles[a][i][0]}~{profiles[b][j][0]}"
                for i, j in zip(*np.nonzero(matches))
            ]
            result.findings.append(
                Finding(
                    kind=self.kind,
                    severity=scaled_severity(
                        similarity, thresholds.alternative_similarity_threshold, self.BASE_SEVERITY
                    ),
                    primary=a,
                    secondary=(b,),
                    rationale=(
                        f"{a} and {b} offer {similarity:.0%} equivalent operations "
                        "under different names"
                    ),
                    evidence=(
                        Evidence("signature_similarity", round(similarity, 4), ", ".join(pairs)),
                        Evidence("method_count_a", len(profiles[a]), a),
                        Evidence("method_count_b", len(profiles[b]), b),
                    ),
                )
            )

        return result

    @staticmethod
    def _profiles(program: ProgramModel) -> dict[str, list[tuple[str, Signature]]]:
        """Public behavioral methods with a non-trivial signature, per class."""
        profiles: dict[str, list[tuple[str, Signature]]] = {}
        for cls in program:
            if cls.is_test:
                continue
            methods = []
            for m in cls.methods:
                if m.visibility is not Visibility.PUBLIC or not is_behavioral(program, m):
                    continue
                sig = method_signature(m)
                if not _is_trivial(sig):
                    methods.append((m.name, sig))
            if len(methods) >= _MIN_METHODS:
                profiles[cls.id] = methods
        return profiles

    @staticmethod
    def _method_names(cls: ClassEntity) -> set[str]:
        return {m.name for m in cls.methods if not is_constructor(m)}

    @staticmethod
    def _match_matrix(
        left: list[tuple[str, Signature]],
        right: list[tuple[str, Signature]],
        codes: dict[Signature, int],
    ) -> np.ndarray:
        """Boolean matrix: left method i has the same signature as right method j."""
        lcodes = np.array([codes[sig] for _, sig in left])
        rcodes = np.array([codes[sig] for _, sig in right])
        return lcodes[:, None] == rcodes[None, :]
