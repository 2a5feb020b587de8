"""Exception hierarchy for smellscope."""

from .analysis import MetricComputationError, UnmappedSmellError
from .base import FatalAnalysisError, SmellScopeError
from .config import ConfigurationError, InvalidConfigError
from .model import ModelIntegrityError, ModelLoadError

__all__ = [
    "SmellScopeError",
    "FatalAnalysisError",
    "ModelIntegrityError",
    "ModelLoadError",
    "MetricComputationError",
    "UnmappedSmellError",
    "ConfigurationError",
    "InvalidConfigError",
]
