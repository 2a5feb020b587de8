"""
smellscope - static code smell detection and refactoring suggestions

Works on a language-agnostic program model (classes, fields, methods,
accesses) and maps every detected smell to a catalogued refactoring.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import AnalysisConfig, DetectionThresholds, load_config
from .engine import SmellKernel
from .findings import AnalysisResult, Finding, RefactoringKind, RefactoringPlan, SmellKind
from .model import ProgramModel, load_program, program_from_dict

__all__ = [
    "analyze",  # Main entry point
    "SmellKernel",  # Advanced usage (direct kernel access)
    "AnalysisConfig",
    "AnalysisResult",
    "DetectionThresholds",
    "Finding",
    "ProgramModel",
    "RefactoringKind",
    "RefactoringPlan",
    "SmellKind",
    "load_config",
    "load_program",
    "program_from_dict",
]
