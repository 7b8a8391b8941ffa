"""``dropin watch`` — rebuild on every change under the components directory.

Runs an initial pass, then polls the tree.  Bursts of edits are debounced
into one pass, and passes never overlap.  A failed pass is reported and the
previous artifacts stay in place until the tree validates again.
"""

from __future__ import annotations

import threading
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
from dropin.errors import DropinError
from dropin.models.artifacts import PassResult
from dropin.monitor.renderer import DiagnosticsRenderer
from dropin.watch import WatchSession

console = Console()


def watch_cmd(
    root: Optional[Path] = ROOT_OPTION,
    components_dir: Optional[Path] = COMPONENTS_OPTION,
    output_dir: Optional[Path] = OUTPUT_OPTION,
    profile: Optional[str] = PROFILE_OPTION,
    strict_nav: bool = STRICT_NAV_OPTION,
    verbose: bool = VERBOSE_OPTION,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between polls of the components tree.",
    ),
) -> None:
    """Watch the components directory and rebuild on change (Ctrl+C to exit)."""
    settings = load_settings(root, components_dir, output_dir, profile, strict_nav, verbose)
    if interval is not None:
        settings.watch_interval_seconds = interval
    renderer = DiagnosticsRenderer(console=console)

    def on_result(result: PassResult | None, error: DropinError | None) -> None:
        if result is not None:
            renderer.print_pass(result)
        else:
            renderer.print_failure("Discovery failed", str(error))

    session = WatchSession(DiscoveryOrchestrator(settings), on_result=on_result)
    stop_event = threading.Event()

    console.print(
        f"[dim]Watching {settings.components_path} every "
        f"{settings.watch_interval_seconds}s. Press Ctrl+C to exit.[/dim]"
    )
    try:
        session.start(stop_event)
    except KeyboardInterrupt:
        stop_event.set()
        console.print("\n[dim]Watch stopped.[/dim]")
