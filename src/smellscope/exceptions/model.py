"""Program model exceptions: integrity violations and unreadable input."""

from pathlib import Path
from typing import Optional

from .base import FatalAnalysisError, SmellScopeError


class ModelIntegrityError(FatalAnalysisError):
    """Raised when the program model references entities that do not exist.

    Detectors walk the access graph without re-checking it, so a dangling
    reference aborts the run before any detector starts.
    """

    stage = "model"

    def __init__(self, reason: str, entity: Optional[str] = None):
        details = {"reason": reason}
        if entity is not None:
            details["entity"] = entity
        super().__init__(f"Program model is inconsistent: {reason}", details=details)
        self.reason = reason
        self.entity = entity


class ModelLoadError(SmellScopeError):
    """Raised when a serialized program model cannot be read or decoded."""

    def __init__(self, reason: str, source: Optional[Path] = None):
        details = {"reason": reason}
        if source is not None:
            details["source"] = str(source)
        super().__init__("Cannot load program model", details=details)
        self.reason = reason
        self.source = source
