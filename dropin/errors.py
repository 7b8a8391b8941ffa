"""Build-aborting errors raised by the orchestrator and artifact writers."""

from __future__ import annotations

from dropin.models.issues import ValidationIssue


class DropinError(RuntimeError):
    """Base class for errors that must fail the build."""


class ComponentValidationError(DropinError):
    """Raised when a discovery pass finds error-severity validation issues.

    Carries every error of the pass, not just the first, so a single build
    run reports all offending components.
    """

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = list(issues)
        lines = "\n".join(
            f"{issue.message} ({issue.location}, {issue.field})" for issue in self.issues
        )
        super().__init__(f"Component validation failed:\n{lines}")


class ArtifactWriteError(DropinError):
    """Raised when a generated artifact cannot be written to disk."""
