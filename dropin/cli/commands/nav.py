"""``dropin nav`` — preview the composed navigation list."""

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
from dropin.core.navigation import compose_navigation
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.monitor.renderer import DiagnosticsRenderer

console = Console()


def nav_cmd(
    root: Optional[Path] = ROOT_OPTION,
    components_dir: Optional[Path] = COMPONENTS_OPTION,
    output_dir: Optional[Path] = OUTPUT_OPTION,
    profile: Optional[str] = PROFILE_OPTION,
    strict_nav: bool = STRICT_NAV_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the navigation entries a build would generate, in order."""
    settings = load_settings(root, components_dir, output_dir, profile, strict_nav, verbose)
    orchestrator = DiscoveryOrchestrator(settings)
    renderer = DiagnosticsRenderer(console=console)

    _, validation = orchestrator.check()
    if validation.has_errors:
        renderer.print_issues(validation.errors)
        console.print("[bold red]Fix the errors above before previewing navigation.[/bold red]")
        raise typer.Exit(code=1)

    navigation = compose_navigation(validation.admissible)
    if not navigation:
        console.print("[dim]No navigation entries.[/dim]")
        return
    console.print(renderer.navigation_table(navigation))
