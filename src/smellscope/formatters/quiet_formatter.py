"""Quiet formatter: finding ids only."""

from ..findings import AnalysisResult
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render just finding ids, one per line."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        return "\n".join(f.id for f in result.findings)
