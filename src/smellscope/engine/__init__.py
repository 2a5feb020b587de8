"""Analysis orchestration."""

from .kernel import DetectorTimeoutError, SmellKernel
from .ranking import SUBSUMPTION_RULES, deduplicate_findings, rank_findings

__all__ = [
    "DetectorTimeoutError",
    "SUBSUMPTION_RULES",
    "SmellKernel",
    "deduplicate_findings",
    "rank_findings",
]
