"""CSV formatter for smellscope."""

import csv
import io

from ..findings import AnalysisResult
from .base import BaseFormatter

COLUMNS = [
    "id", "kind", "category", "severity", "primary", "secondary",
    "refactoring", "target_class", "suppressed", "ambiguous", "rationale",
]


class CsvFormatter(BaseFormatter):
    """Render findings as CSV, one row per finding."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result), end="")

    def format(self, result: AnalysisResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(COLUMNS)
        for f, plan in result.pairs():
            writer.writerow([
                f.id, f.kind.value, f.kind.category, f"{f.severity:.4f}",
                f.primary, ";".join(f.secondary),
                plan.kind.value, plan.target_class or "",
                int(plan.suppressed), int(f.ambiguous), f.rationale,
            ])
        return output.getvalue()
