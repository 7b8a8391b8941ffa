"""``dropin build`` — run one discovery pass through the build hooks.

Scans the components directory, validates every descriptor, and regenerates
the registry and aggregator.  Exits non-zero without writing anything when
validation fails.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dropin.build import BuildHooks, ComponentDiscoveryPlugin, run_build
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
from dropin.errors import DropinError
from dropin.monitor.renderer import DiagnosticsRenderer

console = Console()


def build_cmd(
    root: Optional[Path] = ROOT_OPTION,
    components_dir: Optional[Path] = COMPONENTS_OPTION,
    output_dir: Optional[Path] = OUTPUT_OPTION,
    profile: Optional[str] = PROFILE_OPTION,
    strict_nav: bool = STRICT_NAV_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Discover components and regenerate the registry and aggregator."""
    settings = load_settings(root, components_dir, output_dir, profile, strict_nav, verbose)
    orchestrator = DiscoveryOrchestrator(settings)
    plugin = ComponentDiscoveryPlugin(orchestrator)
    renderer = DiagnosticsRenderer(console=console)

    hooks = BuildHooks()
    plugin.apply(hooks)
    try:
        compilation = run_build(hooks)
    except DropinError as exc:
        renderer.print_failure("Discovery failed", str(exc))
        raise typer.Exit(code=1)

    renderer.print_pass(plugin.last_result)
    for dependency in sorted(compilation.context_dependencies):
        console.print(f"[dim]Watching {dependency}[/dim]")
