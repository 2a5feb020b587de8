"""Base exception for smellscope."""

from typing import Dict, Optional


class SmellScopeError(Exception):
    """Base exception for all smellscope errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class FatalAnalysisError(SmellScopeError):
    """An error that halts the whole run.

    ``stage`` names the pipeline phase the error originated in
    ("model", "metrics", "detect", "suggest").
    """

    stage = "analysis"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        details = dict(details or {})
        details.setdefault("stage", self.stage)
        super().__init__(message, details=details)
