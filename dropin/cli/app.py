"""Main Typer application — imports and registers all CLI commands.

Entry point: ``dropin`` (configured via pyproject.toml scripts).

Commands: build, check, nav, watch, bench, profiles.
"""

from __future__ import annotations

import typer

from dropin.cli.commands.bench import bench_cmd
from dropin.cli.commands.build import build_cmd
from dropin.cli.commands.check import check_cmd
from dropin.cli.commands.nav import nav_cmd
from dropin.cli.commands.watch import watch_cmd

app = typer.Typer(
    name="dropin",
    help="Dropin: zero-registration component discovery and registry generation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="build", help="Discover components and regenerate artifacts.")(build_cmd)
app.command(name="check", help="Validate component descriptors without writing.")(check_cmd)
app.command(name="nav", help="Preview the generated navigation order.")(nav_cmd)
app.command(name="watch", help="Rebuild whenever the components tree changes.")(watch_cmd)
app.command(name="bench", help="Benchmark discovery over mock components.")(bench_cmd)


@app.command(name="profiles", help="List the available discovery profiles.")
def profiles_cmd() -> None:
    """List discovery profiles and the file names each one looks for."""
    from rich.console import Console
    from rich.table import Table

    from dropin.models.config import PROFILES

    console = Console()
    table = Table(title="Discovery Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Metadata")
    table.add_column("Module")
    table.add_column("Symbol suffix", style="green")
    table.add_column("Artifacts", style="dim")

    for name, profile in sorted(PROFILES.items()):
        table.add_row(
            name,
            profile.meta_filename,
            profile.module_filename,
            profile.symbol_suffix,
            f"{profile.registry_filename}, {profile.aggregator_filename}",
        )
    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
