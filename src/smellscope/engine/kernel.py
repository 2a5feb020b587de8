"""SmellKernel: orchestrates metrics, detectors and suggestions."""

from __future__ import annotations

import concurrent.futures
import dataclasses
from collections import Counter
from typing import TYPE_CHECKING, Callable, Optional

from ..config import AnalysisConfig
from ..detectors import Detector, DetectorResult, get_default_detectors
from ..detectors.helpers import skip_entity
from ..exceptions import FatalAnalysisError, MetricComputationError
from ..findings import AnalysisResult, AnalysisSummary, SkippedFinding
from ..logging_config import get_logger
from ..metrics import MetricTable
from ..suggest import RefactoringSuggester
from .ranking import deduplicate_findings, rank_findings

if TYPE_CHECKING:
    from ..model import ProgramModel

ProgressCallback = Optional[Callable[[str], None]]

logger = get_logger(__name__)


class DetectorTimeoutError(Exception):
    """Raised when a detector exceeds its time limit."""

    pass


def _run_with_timeout(func: Callable, timeout: float, name: str):
    """Run a function with a timeout. Raises DetectorTimeoutError if exceeded."""
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        raise DetectorTimeoutError(f"Detector '{name}' exceeded {timeout}s timeout")
    finally:
        # A stuck detector keeps its thread; the run no longer waits for it
        executor.shutdown(wait=False)


class SmellKernel:
    """Orchestrate analysis: metrics -> detect -> rank -> suggest."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        detectors: list[Detector] | None = None,
        suggester: RefactoringSuggester | None = None,
    ):
        self.config = config or AnalysisConfig()
        all_detectors = detectors if detectors is not None else get_default_detectors()
        self._detectors = [d for d in all_detectors if self.config.detector_enabled(d.name)]
        # Built eagerly so a catalogue gap fails before any analysis work
        self._suggester = suggester or RefactoringSuggester()

    @property
    def detectors(self) -> list[Detector]:
        return list(self._detectors)

    def run(
        self,
        program: ProgramModel,
        on_progress: ProgressCallback = None,
    ) -> AnalysisResult:
        """Execute the full pipeline over a validated program model.

        Parameters
        ----------
        program : ProgramModel
            Built and validated model; never mutated.
        on_progress : callable, optional
            Called with a status message at each phase transition.

        Returns
        -------
        AnalysisResult
            Ranked findings, one plan per finding, skipped records, summary.

        Raises
        ------
        FatalAnalysisError
            ModelIntegrityError or UnmappedSmellError; the run is abandoned.
        """

        def _progress(msg: str) -> None:
            if on_progress is not None:
                on_progress(msg)

        thresholds = self.config.thresholds

        # Phase 1: Metrics (the model is complete before any detector starts)
        _progress("Computing metrics...")
        metrics = MetricTable.build(
            program,
            thresholds,
            workers=self.config.workers if self.config.parallel else None,
        )

        # Phase 2: Detectors
        _progress("Detecting smells...")
        outcomes = self._run_detectors(program, metrics)

        findings = []
        skipped: list[SkippedFinding] = []
        failed: list[str] = []
        for detector, (result, ok) in zip(self._detectors, outcomes):
            findings.extend(result.findings)
            skipped.extend(result.skipped)
            if not ok:
                failed.append(detector.name)
            logger.debug(
                f"Detector {detector.name}: {len(result.findings)} findings, "
                f"{len(result.skipped)} skipped"
            )

        # Phase 3: Deduplicate and rank
        _progress("Ranking findings...")
        findings = rank_findings(deduplicate_findings(findings))

        # Phase 4: Suggest (every finding, so a catalogue gap never hides)
        _progress("Suggesting refactorings...")
        plans = self._suggester.suggest_all(findings)
        findings = [
            dataclasses.replace(f, refactoring=p.kind) for f, p in zip(findings, plans)
        ]

        summary = AnalysisSummary(
            total_classes=len(program),
            total_methods=sum(1 for _ in program.methods()),
            change_sets=len(program.change_sets),
            detectors_run=[d.name for d in self._detectors],
            detectors_failed=failed,
            findings_by_kind=dict(Counter(f.kind.value for f in findings)),
        )

        cap = self.config.max_findings
        logger.info(
            f"Analysis complete: {len(findings)} findings "
            f"({min(len(findings), cap)} reported), {len(skipped)} skipped"
        )
        return AnalysisResult(
            findings=findings[:cap],
            plans=plans[:cap],
            skipped=skipped,
            summary=summary,
        )

    # ── Detector fan-out ──────────────────────────────────────────────

    def _run_detectors(
        self, program: ProgramModel, metrics: MetricTable
    ) -> list[tuple[DetectorResult, bool]]:
        """Run every detector; results come back in registry order.

        Sequentially the timeout bounds each detector on its own. In parallel
        it is one deadline counted from submission: whatever has not finished
        by then, queued detectors included, is reported as timed out.
        """
        timeout = self.config.detector_timeout_seconds

        if self.config.parallel:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.config.workers)
            try:
                futures = [
                    executor.submit(self._run_one, d, program, metrics) for d in self._detectors
                ]
                _, pending = concurrent.futures.wait(futures, timeout=timeout)
                outcomes = []
                for detector, future in zip(self._detectors, futures):
                    if future in pending:
                        future.cancel()
                        outcomes.append(self._timed_out(detector.name, timeout))
                    else:
                        outcomes.append(future.result())
                return outcomes
            finally:
                executor.shutdown(wait=False)

        outcomes = []
        for detector in self._detectors:
            if timeout is None:
                outcomes.append(self._run_one(detector, program, metrics))
                continue
            try:
                outcomes.append(
                    _run_with_timeout(
                        lambda d=detector: self._run_one(d, program, metrics),
                        timeout,
                        detector.name,
                    )
                )
            except DetectorTimeoutError:
                outcomes.append(self._timed_out(detector.name, timeout))
        return outcomes

    def _run_one(
        self, detector: Detector, program: ProgramModel, metrics: MetricTable
    ) -> tuple[DetectorResult, bool]:
        """Run one detector behind its failure boundary.

        Returns:
            (result, ok); ok is False when the whole detector failed
        """
        try:
            return detector.detect(program, metrics, self.config.thresholds), True
        except FatalAnalysisError:
            raise
        except MetricComputationError as e:
            return DetectorResult(skipped=[skip_entity(detector.name, e)]), True
        except Exception as e:
            logger.warning(f"Detector {detector.name} failed: {e}")
            return (
                DetectorResult(
                    skipped=[
                        SkippedFinding(
                            detector=detector.name,
                            entity=None,
                            reason=f"{type(e).__name__}: {e}",
                        )
                    ]
                ),
                False,
            )

    @staticmethod
    def _timed_out(name: str, timeout: Optional[float]) -> tuple[DetectorResult, bool]:
        logger.warning(f"Detector '{name}' exceeded {timeout}s timeout")
        return (
            DetectorResult(
                skipped=[SkippedFinding(detector=name, entity=None, reason=f"timed out after {timeout}s")]
            ),
            False,
        )
