"""``dropin bench`` — time one discovery pass over synthetic components."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dropin.bench import REBUILD_BUDGET_MS, run_benchmark
from dropin.cli.commands.common import VERBOSE_OPTION, setup_logging
from dropin.monitor.renderer import DiagnosticsRenderer

console = Console()


def bench_cmd(
    count: int = typer.Option(
        1000,
        "--count",
        "-n",
        min=1,
        help="Number of mock components to generate.",
    ),
    budget_ms: float = typer.Option(
        REBUILD_BUDGET_MS,
        "--budget-ms",
        help="Fail if the pass takes this long or longer.",
    ),
    workdir: Optional[Path] = typer.Option(
        None,
        "--workdir",
        "-w",
        help="Keep the mock tree here instead of a temporary directory.",
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Measure scan, validate and generate time at scale."""
    setup_logging("DEBUG" if verbose else "WARNING")
    renderer = DiagnosticsRenderer(console=console)

    console.print(f"[bold cyan]Benchmarking discovery of {count} components...[/bold cyan]")
    if workdir is not None:
        workdir.mkdir(parents=True, exist_ok=True)
        report = run_benchmark(count, workdir, budget_ms=budget_ms)
    else:
        with tempfile.TemporaryDirectory(prefix="dropin-bench-") as tmp:
            report = run_benchmark(count, Path(tmp), budget_ms=budget_ms)

    renderer.print_benchmark(report)
    if report.error_count or not report.within_budget:
        raise typer.Exit(code=1)
