"""Helper functions for detectors."""

from __future__ import annotations

from ..exceptions import MetricComputationError
from ..findings import SkippedFinding
from ..logging_config import get_logger

logger = get_logger(__name__)


def scaled_severity(
    value: float,
    threshold: float,
    base: float,
    ceiling: float = 1.0,
    inverse: bool = False,
) -> float:
    """Severity for a metric that crossed its threshold.

    Starts at ``base`` when ``value`` sits on the threshold and reaches
    ``ceiling`` once the value is twice the threshold (or zero, for an
    ``inverse`` metric where lower is worse). Non-decreasing in how far
    the value is past the threshold; always within [0, 1].

    Args:
        value: Observed metric value
        threshold: The trigger threshold
        base: Severity at the threshold
        ceiling: Maximum severity
        inverse: True when smaller values are worse (usage ratios)
    """
    if threshold > 0:
        excess = (threshold - value) / threshold if inverse else (value - threshold) / threshold
    else:
        excess = -value if inverse else value
    excess = min(1.0, max(0.0, excess))
    severity = base + (ceiling - base) * excess
    return round(min(1.0, max(0.0, severity)), 4)


def skip_entity(detector: str, error: MetricComputationError) -> SkippedFinding:
    """Downgrade a metric failure to a skipped-finding record."""
    logger.warning(f"{detector}: skipping {error.entity} ({error.metric}: {error.reason})")
    return SkippedFinding(
        detector=detector,
        entity=error.entity,
        reason=f"{error.metric}: {error.reason}",
    )


def join_ids(ids) -> str:
    """``A, B and C`` for rationales."""
    ids = list(ids)
    if len(ids) <= 1:
        return "".join(ids)
    return f"{', '.join(ids[:-1])} and {ids[-1]}"
