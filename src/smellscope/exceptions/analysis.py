"""Analysis-related exceptions: metric failures and suggestion table gaps."""

from .base import FatalAnalysisError, SmellScopeError


class MetricComputationError(SmellScopeError):
    """Raised when one metric cannot be computed for one entity.

    This is a local failure: only findings depending on the metric for that
    entity are skipped.
    """

    def __init__(self, metric: str, entity: str, reason: str):
        super().__init__(
            f"Failed to compute {metric} for {entity}",
            details={"metric": metric, "entity": entity, "reason": reason},
        )
        self.metric = metric
        self.entity = entity
        self.reason = reason


class UnmappedSmellError(FatalAnalysisError):
    """Raised when a smell kind has no entry in the refactoring catalogue."""

    stage = "suggest"

    def __init__(self, smell: str):
        super().__init__(
            f"No refactoring mapped for smell: {smell}",
            details={"smell": smell},
        )
        self.smell = smell
