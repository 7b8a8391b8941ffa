"""Rich terminal renderer for discovery results.

Color scheme
------------
- bold red : error issues, failed passes
- yellow   : warnings, skipped components
- green    : successful passes
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dropin.models.issues import Severity

if TYPE_CHECKING:
    from dropin.bench import BenchmarkReport
    from dropin.models.artifacts import PassResult
    from dropin.models.issues import SkippedComponent, ValidationIssue
    from dropin.models.navigation import NavigationEntry


_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


class DiagnosticsRenderer:
    """Renders discovery outcomes as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Renderables
    # ------------------------------------------------------------------

    def issues_table(self, issues: list[ValidationIssue]) -> Table:
        table = Table(title="Validation Issues", show_lines=False)
        table.add_column("Severity", justify="center")
        table.add_column("Component", style="cyan")
        table.add_column("Field")
        table.add_column("Message")
        table.add_column("Location", style="dim")

        for issue in issues:
            style = _SEVERITY_STYLES[issue.severity]
            table.add_row(
                Text(issue.severity.value.upper(), style=style),
                issue.component_id,
                issue.field,
                issue.message,
                issue.location,
            )
        return table

    def skipped_table(self, skipped: list[SkippedComponent]) -> Table:
        table = Table(title="Skipped Components")
        table.add_column("Descriptor", style="yellow")
        table.add_column("Reason")
        for item in skipped:
            table.add_row(item.location, item.reason)
        return table

    def navigation_table(self, navigation: list[NavigationEntry]) -> Table:
        table = Table(title="Navigation")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Label", style="cyan")
        table.add_column("Path", style="green")
        table.add_column("Order", justify="right")
        for position, entry in enumerate(navigation, start=1):
            order = "-" if entry.order is None else str(entry.order)
            table.add_row(str(position), entry.label, entry.path, order)
        return table

    def pass_panel(self, result: PassResult) -> Panel:
        snapshot = result.snapshot
        written = ", ".join(p.name for p in result.artifacts.written) or "unchanged"
        lines = [
            f"[bold]Components:[/bold]   {len(snapshot.components)}",
            f"[bold]Navigation:[/bold]   {len(snapshot.navigation)}",
            f"[bold]Warnings:[/bold]     {len(result.validation.warnings)}",
            f"[bold]Skipped:[/bold]      {len(result.scan.skipped)}",
            f"[bold]Written:[/bold]      {written}",
            f"[bold]Digest:[/bold]       {result.artifacts.digest}",
            f"[bold]Duration:[/bold]     {result.duration_ms:.0f}ms",
        ]
        return Panel(
            "\n".join(lines),
            title="[bold green]Discovery succeeded[/bold green]",
            border_style="green",
            padding=(1, 2),
        )

    def benchmark_table(self, report: BenchmarkReport) -> Table:
        table = Table(title="Discovery Performance")
        table.add_column("Phase")
        table.add_column("Time (ms)", justify="right")
        table.add_row("Scan", f"{report.scan_ms:.0f}")
        table.add_row("Validate", f"{report.validate_ms:.0f}")
        table.add_row("Generate", f"{report.generate_ms:.0f}")
        table.add_row("[bold]Total[/bold]", f"[bold]{report.total_ms:.0f}[/bold]")
        table.add_row("Per component", f"{report.per_component_ms:.2f}")
        return table

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_issues(
        self,
        issues: list[ValidationIssue],
        skipped: list[SkippedComponent] | None = None,
    ) -> None:
        if skipped:
            self.console.print(self.skipped_table(skipped))
        if issues:
            self.console.print(self.issues_table(issues))
        elif not skipped:
            self.console.print("[green]No validation issues.[/green]")

    def print_pass(self, result: PassResult) -> None:
        self.print_issues(result.validation.issues, result.scan.skipped)
        self.console.print(self.pass_panel(result))

    def print_failure(self, title: str, message: str) -> None:
        self.console.print(
            Panel(
                Group(Text(message)),
                title=f"[bold red]{title}[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )

    def print_benchmark(self, report: BenchmarkReport) -> None:
        self.console.print(self.benchmark_table(report))
        if report.within_budget:
            self.console.print(
                f"[green]PASS[/green] {report.total_ms:.0f}ms for "
                f"{report.component_count} components "
                f"(budget {report.budget_ms:.0f}ms)"
            )
        else:
            self.console.print(
                f"[bold red]FAIL[/bold red] {report.total_ms:.0f}ms for "
                f"{report.component_count} components "
                f"(budget {report.budget_ms:.0f}ms)"
            )
