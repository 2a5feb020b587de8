"""Protocol and result type shared by all smell detectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from ..findings import Finding, SkippedFinding, SmellKind

if TYPE_CHECKING:
    from ..config import DetectionThresholds
    from ..metrics import MetricTable
    from ..model import ProgramModel


@dataclass
class DetectorResult:
    findings: list[Finding] = field(default_factory=list)
    skipped: list[SkippedFinding] = field(default_factory=list)


class Detector(Protocol):
    """Detectors read the model and metrics (NEVER write) and return findings."""

    name: str
    kind: SmellKind

    def detect(
        self,
        program: ProgramModel,
        metrics: MetricTable,
        thresholds: DetectionThresholds,
    ) -> DetectorResult: ...
