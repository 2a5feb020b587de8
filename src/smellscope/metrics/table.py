"""MetricTable: metrics computed once per run and shared by every detector.

Collection is parallel per class: classes are read-only, so each task only
reads the model. A metric that fails for one entity is stored as an error
and re-raised to whichever detector asks for it.
"""

from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..config import DEFAULT_THRESHOLDS, DetectionThresholds
from ..exceptions import MetricComputationError
from ..logging_config import get_logger
from ..model import ClassEntity
from . import class_metrics, method_metrics
from .program_metrics import DataClump, clump_candidates

if TYPE_CHECKING:
    from ..model import ProgramModel

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClassMetrics:
    class_id: str
    field_count: int
    method_count: int
    statement_count: int
    type_switch_count: int


@dataclass(frozen=True)
class MethodMetrics:
    method_id: str
    parameter_count: int
    external_access_ratio: float
    chain_depth: Optional[int]  # None when the chain could not be resolved


@dataclass
class _ClassBatch:
    metrics: ClassMetrics
    methods: list[MethodMetrics] = field(default_factory=list)
    errors: list[MetricComputationError] = field(default_factory=list)


class MetricTable:
    """Read-only lookup of precomputed metrics."""

    def __init__(
        self,
        classes: dict[str, ClassMetrics],
        methods: dict[str, MethodMetrics],
        errors: dict[tuple[str, str], MetricComputationError],
        clumps: list[DataClump],
    ) -> None:
        self._classes = classes
        self._methods = methods
        self._errors = errors
        self._clumps = tuple(clumps)

    @classmethod
    def build(
        cls,
        program: ProgramModel,
        thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
        workers: Optional[int] = None,
    ) -> MetricTable:
        """Compute every metric for the program.

        Args:
            program: Validated program model
            thresholds: Needed for the data clump group size/recurrence
            workers: Thread pool size; None or 1 computes sequentially
        """
        entities = program.classes
        if workers is not None and workers > 1 and len(entities) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
                batches = list(executor.map(lambda c: _collect_class(program, c), entities))
        else:
            batches = [_collect_class(program, c) for c in entities]

        classes: dict[str, ClassMetrics] = {}
        methods: dict[str, MethodMetrics] = {}
        errors: dict[tuple[str, str], MetricComputationError] = {}
        for batch in batches:
            classes[batch.metrics.class_id] = batch.metrics
            for mm in batch.methods:
                methods[mm.method_id] = mm
            for error in batch.errors:
                errors[(error.metric, error.entity)] = error
                logger.warning(f"Metric {error.metric} unavailable for {error.entity}: {error.reason}")

        clumps = clump_candidates(
            program,
            min_group_size=thresholds.data_clump_min_group_size,
            min_recurrence=thresholds.data_clump_min_recurrence,
        )
        logger.debug(
            f"Metrics collected: {len(classes)} classes, {len(methods)} methods, "
            f"{len(errors)} failures, {len(clumps)} clumps"
        )
        return cls(classes, methods, errors, clumps)

    def for_class(self, class_id: str) -> ClassMetrics:
        return self._classes[class_id]

    def for_method(self, method_id: str) -> MethodMetrics:
        return self._methods[method_id]

    def chain_depth(self, method_id: str) -> int:
        """Chain depth of a method.

        Raises:
            MetricComputationError: If the method's chains were malformed
        """
        error = self._errors.get(("chain_depth", method_id))
        if error is not None:
            raise error
        depth = self._methods[method_id].chain_depth
        return depth if depth is not None else 0

    @property
    def clumps(self) -> tuple[DataClump, ...]:
        return self._clumps

    @property
    def errors(self) -> dict[tuple[str, str], MetricComputationError]:
        return dict(self._errors)


def _collect_class(program: ProgramModel, entity: ClassEntity) -> _ClassBatch:
    batch = _ClassBatch(
        metrics=ClassMetrics(
            class_id=entity.id,
            field_count=class_metrics.field_count(entity),
            method_count=class_metrics.method_count(entity),
            statement_count=class_metrics.statement_count(entity),
            type_switch_count=class_metrics.type_switch_count(program, entity),
        )
    )
    for method in entity.methods:
        depth: Optional[int]
        try:
            depth = method_metrics.chain_depth(program, method)
        except MetricComputationError as e:
            batch.errors.append(e)
            depth = None
        batch.methods.append(
            MethodMetrics(
                method_id=method.id,
                parameter_count=method_metrics.parameter_count(method),
                external_access_ratio=method_metrics.external_access_ratio(program, method),
                chain_depth=depth,
            )
        )
    return batch
