"""JSON formatter for smellscope."""

import json
from dataclasses import asdict
from enum import Enum
from typing import Any

from ..findings import AnalysisResult
from .base import BaseFormatter


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_to_dict(result: AnalysisResult) -> dict:
    """Plain-data form of a result: one entry per finding with its plan."""
    findings = []
    for finding, plan in result.pairs():
        entry = asdict(finding)
        entry["id"] = finding.id
        entry["category"] = finding.kind.category
        entry["plan"] = asdict(plan)
        findings.append(entry)
    return {
        "summary": asdict(result.summary),
        "findings": findings,
        "skipped": [asdict(s) for s in result.skipped],
    }


class JsonFormatter(BaseFormatter):
    """Render the result as JSON."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        return json.dumps(result_to_dict(result), indent=2, default=_encode)
