"""Detector output models."""

from .models import (
    AnalysisResult,
    AnalysisSummary,
    Evidence,
    Finding,
    RefactoringKind,
    RefactoringPlan,
    SkippedFinding,
    SmellKind,
)

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "Evidence",
    "Finding",
    "RefactoringKind",
    "RefactoringPlan",
    "SkippedFinding",
    "SmellKind",
]
