"""Generated artifact and pass outcome models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dropin.models.issues import ScanResult, ValidationResult
from dropin.models.navigation import RegistrySnapshot


class GeneratedArtifacts(BaseModel):
    """Where a pass wrote its two artifacts.

    ``written`` lists only the paths whose content actually changed; an
    unchanged tree leaves it empty.
    """

    model_config = ConfigDict(frozen=True)

    registry_path: Path
    aggregator_path: Path
    digest: str
    written: list[Path] = Field(default_factory=list)


class PassResult(BaseModel):
    """Outcome of one successful discovery pass."""

    model_config = ConfigDict(frozen=True)

    scan: ScanResult
    validation: ValidationResult
    snapshot: RegistrySnapshot
    artifacts: GeneratedArtifacts
    duration_ms: float = 0.0
