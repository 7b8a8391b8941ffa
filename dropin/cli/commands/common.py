"""Options shared by every discovery command and the settings they build."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from dropin.config import DiscoverySettings
from dropin.models.config import PROFILES
from dropin.models.issues import NavPrimaryPolicy

log_console = Console(stderr=True)

ROOT_OPTION = typer.Option(
    None,
    "--root",
    "-r",
    help="Project root; relative directories resolve against it.",
)
COMPONENTS_OPTION = typer.Option(
    None,
    "--components-dir",
    "-c",
    help="Directory scanned for component folders.",
)
OUTPUT_OPTION = typer.Option(
    None,
    "--output-dir",
    "-o",
    help="Directory the registry and aggregator are written to.",
)
PROFILE_OPTION = typer.Option(
    None,
    "--profile",
    "-p",
    help=f"Discovery profile ({', '.join(sorted(PROFILES))}).",
)
STRICT_NAV_OPTION = typer.Option(
    False,
    "--strict-nav",
    help="Treat 'nav' without an explicit primary route as an error.",
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging.",
)


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging with a Rich handler on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=log_console, rich_tracebacks=True, show_path=False)],
    )
    logging.getLogger("dropin").setLevel(level)


def load_settings(
    root: Path | None,
    components_dir: Path | None,
    output_dir: Path | None,
    profile: str | None,
    strict_nav: bool,
    verbose: bool,
) -> DiscoverySettings:
    """Merge CLI overrides on top of env/.env settings and set up logging."""
    overrides: dict[str, object] = {}
    if root is not None:
        overrides["root_dir"] = root
    if components_dir is not None:
        overrides["components_dir"] = components_dir
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if profile is not None:
        overrides["profile"] = profile
    if strict_nav:
        overrides["nav_primary_policy"] = NavPrimaryPolicy.STRICT

    try:
        settings = DiscoverySettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if settings.profile not in PROFILES:
        raise typer.BadParameter(
            f"Unknown discovery profile '{settings.profile}'. "
            f"Choose one of: {', '.join(sorted(PROFILES))}.",
            param_hint="--profile",
        )

    setup_logging(logging.DEBUG if verbose else settings.log_level.upper())
    return settings
