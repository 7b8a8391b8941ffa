"""Discovery configuration — env-driven via pydantic-settings.

Reads from a .env file and DROPIN_* environment variables.  CLI options
construct a ``DiscoverySettings`` with explicit overrides on top of these.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from dropin.models.config import PROFILES, DiscoveryProfile
from dropin.models.issues import DEFAULT_NAV_PRIMARY_POLICY, NavPrimaryPolicy

# Directory names never descended into, on top of hidden (dot) directories
# and the generated-output directory itself.
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    "node_modules",
    "__pycache__",
    "site-packages",
    "venv",
)


class DiscoverySettings(BaseSettings):
    """Settings for a discovery pass.

    Examples
    --------
    Override via environment::

        export DROPIN_COMPONENTS_DIR=app/components
        export DROPIN_NAV_PRIMARY_POLICY=strict
        export DROPIN_LOG_LEVEL=DEBUG

    Or via .env file::

        DROPIN_PROFILE=feature
        DROPIN_DEBOUNCE_SECONDS=0.5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DROPIN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Layout, relative paths resolve against root_dir
    root_dir: Path = Path(".")
    components_dir: Path = Path("src/components")
    output_dir: Path = Path("src/components_generated")
    profile: str = "component"
    excluded_dirs: list[str] = list(DEFAULT_EXCLUDED_DIRS)

    # Validation
    nav_primary_policy: NavPrimaryPolicy = DEFAULT_NAV_PRIMARY_POLICY

    # Watch mode
    watch_interval_seconds: float = 0.5
    debounce_seconds: float = 0.3

    # Observability
    log_level: str = "INFO"

    @property
    def components_path(self) -> Path:
        """Absolute directory scanned for components."""
        return (self.root_dir / self.components_dir).resolve()

    @property
    def output_path(self) -> Path:
        """Absolute directory the generated artifacts are written to."""
        return (self.root_dir / self.output_dir).resolve()

    @property
    def discovery_profile(self) -> DiscoveryProfile:
        try:
            return PROFILES[self.profile]
        except KeyError:
            raise ValueError(
                f"Unknown discovery profile '{self.profile}'. "
                f"Choose one of: {', '.join(sorted(PROFILES))}."
            ) from None
