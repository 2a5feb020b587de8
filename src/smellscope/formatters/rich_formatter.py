"""Rich terminal formatter for smellscope."""

import io
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..findings import AnalysisResult
from .base import BaseFormatter


def _severity_label(severity: float) -> str:
    if severity >= 0.8:
        return "[red bold]critical[/red bold]"
    elif severity >= 0.6:
        return "[red]high[/red]"
    elif severity >= 0.4:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]low[/green]"


class RichFormatter(BaseFormatter):
    """Rich terminal output with summary panel, findings table and skips."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def render(self, result: AnalysisResult) -> None:
        self._print_summary(result, self.console)
        self._print_findings(result, self.console)
        self._print_skipped(result, self.console)

    def format(self, result: AnalysisResult) -> str:
        recorder = Console(record=True, width=160, file=io.StringIO())
        self._print_summary(result, recorder)
        self._print_findings(result, recorder)
        self._print_skipped(result, recorder)
        return recorder.export_text()

    # -- private helpers --

    def _print_summary(self, result: AnalysisResult, console: Console) -> None:
        s = result.summary
        summary_text = (
            f"Analyzed [bold]{s.total_classes}[/bold] classes, "
            f"[bold]{s.total_methods}[/bold] methods"
            + (f", [bold]{s.change_sets}[/bold] change sets" if s.change_sets else "")
            + f"  |  [yellow]{sum(s.findings_by_kind.values())}[/yellow] smells"
            + f"  |  {len(s.detectors_run)} detectors"
        )
        if s.detectors_failed:
            summary_text += f" ([red]{len(s.detectors_failed)} failed[/red])"
        console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        console.print()

    def _print_findings(self, result: AnalysisResult, console: Console) -> None:
        if not result.findings:
            console.print("[green]No code smells found.[/green]")
            return

        table = Table(title=f"{len(result.findings)} Code Smells", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Smell", style="cyan", no_wrap=True)
        table.add_column("Location", style="yellow", ratio=2)
        table.add_column("Severity", justify="right")
        table.add_column("Refactoring", style="green", ratio=2)
        table.add_column("Why", ratio=3)

        for i, (finding, plan) in enumerate(result.pairs(), 1):
            location = finding.primary
            if finding.secondary:
                location += f" [dim]-> {', '.join(finding.secondary)}[/dim]"
            refactoring = plan.kind.value
            if plan.target_class:
                refactoring += f" [dim]({plan.target_class})[/dim]"
            if plan.suppressed:
                refactoring = f"[dim]{refactoring} (optional)[/dim]"
            if finding.ambiguous:
                refactoring += " [magenta]ambiguous[/magenta]"
            table.add_row(
                str(i),
                finding.kind.label,
                location,
                f"{finding.severity:.2f} {_severity_label(finding.severity)}",
                refactoring,
                plan.rationale,
            )
        console.print(table)

    def _print_skipped(self, result: AnalysisResult, console: Console) -> None:
        if not result.skipped:
            return
        console.print()
        console.print(f"[yellow]Skipped {len(result.skipped)} check(s):[/yellow]")
        for skip in result.skipped:
            where = skip.entity or "(whole detector)"
            console.print(f"  [yellow]-[/yellow] {skip.detector}: {where} [dim]{skip.reason}[/dim]")

