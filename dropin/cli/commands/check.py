"""``dropin check`` — scan and validate without writing artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dropin.cli.commands.common import (
    COMPONENTS_OPTION,
    OUTPUT_OPTION,
    PROFILE_OPTION,
    ROOT_OPTION,
    STRICT_NAV_OPTION,
    VERBOSE_OPTION,
    load_settings,
)
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.monitor.renderer import DiagnosticsRenderer

console = Console()


def check_cmd(
    root: Optional[Path] = ROOT_OPTION,
    components_dir: Optional[Path] = COMPONENTS_OPTION,
    output_dir: Optional[Path] = OUTPUT_OPTION,
    profile: Optional[str] = PROFILE_OPTION,
    strict_nav: bool = STRICT_NAV_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Validate every component descriptor.

    Exits with code 1 if any error-severity issue is found.  Warnings and
    skipped folders are reported but do not fail the check.
    """
    settings = load_settings(root, components_dir, output_dir, profile, strict_nav, verbose)
    orchestrator = DiscoveryOrchestrator(settings)
    renderer = DiagnosticsRenderer(console=console)

    scan, validation = orchestrator.check()
    renderer.print_issues(validation.issues, scan.skipped)

    console.print(
        f"[bold]{len(scan.records)}[/bold] {settings.profile}(s) scanned, "
        f"[bold]{len(validation.errors)}[/bold] error(s), "
        f"[bold]{len(validation.warnings)}[/bold] warning(s)"
    )
    if validation.has_errors:
        raise typer.Exit(code=1)
