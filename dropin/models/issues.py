"""Discovery and validation outcome models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dropin.models.components import ComponentRecord


class Severity(str, Enum):
    """How a validation issue affects the build.

    * ``error`` — blocks the build; no artifacts are written.
    * ``warning`` — logged; generation proceeds with the documented fallback.
    """

    ERROR = "error"
    WARNING = "warning"


class NavPrimaryPolicy(str, Enum):
    """What to do when a component has ``nav`` but no explicit primary route.

    * ``fallback`` — warn and link navigation to the first declared route.
    * ``strict`` — error; the author must mark one route ``is_primary``.
    """

    FALLBACK = "fallback"
    STRICT = "strict"


DEFAULT_NAV_PRIMARY_POLICY: NavPrimaryPolicy = NavPrimaryPolicy.FALLBACK


class ValidationIssue(BaseModel):
    """A single problem found in a component descriptor."""

    model_config = ConfigDict(frozen=True)

    component_id: str
    severity: Severity
    message: str
    location: str  # descriptor file path
    field: str  # dotted path, e.g. "routes[].path"

    def format_line(self) -> str:
        """``SEVERITY: message`` — the build-log form of the issue."""
        return f"{self.severity.value.upper()}: {self.message}"


class SkippedComponent(BaseModel):
    """A component folder whose descriptor could not be turned into a record."""

    model_config = ConfigDict(frozen=True)

    location: str
    reason: str


class ScanResult(BaseModel):
    """Everything one scanner walk produced."""

    model_config = ConfigDict(frozen=True)

    root: Path
    records: list[ComponentRecord] = Field(default_factory=list)
    skipped: list[SkippedComponent] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Admissible records plus every issue filed during validation."""

    model_config = ConfigDict(frozen=True)

    admissible: list[ComponentRecord] = Field(default_factory=list)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == Severity.ERROR for i in self.issues)
