"""Discovery orchestrator — the central coordinator for discovery passes.

The orchestrator wires the scanner, validator, navigation composer and
artifact generator into one pass:

    scan -> validate -> (abort on errors) -> compose navigation
        -> snapshot -> generate artifacts

A pass either regenerates both artifacts or raises before writing anything.
Artifacts from an earlier successful pass are left in place when a later one
aborts.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import MutableSet
from pathlib import Path

from dropin.config import DiscoverySettings
from dropin.core.generator import ArtifactGenerator
from dropin.core.navigation import compose_navigation
from dropin.core.scanner import ComponentScanner
from dropin.core.validator import ComponentValidator
from dropin.errors import ComponentValidationError
from dropin.models.artifacts import PassResult
from dropin.models.issues import ScanResult, Severity, ValidationResult
from dropin.models.navigation import RegistrySnapshot

logger = logging.getLogger(__name__)


class DiscoveryOrchestrator:
    """Runs discovery passes for one components directory.

    Passes are serialized: a second caller blocks until the pass in flight
    has finished writing.

    Parameters
    ----------
    settings:
        Discovery settings.  Uses defaults (and DROPIN_* env) if not provided.
    """

    def __init__(self, settings: DiscoverySettings | None = None) -> None:
        self.settings = settings or DiscoverySettings()
        self.profile = self.settings.discovery_profile

        self.scanner = ComponentScanner(
            self.profile,
            excluded_dirs=self.settings.excluded_dirs,
            output_dir=self.settings.output_path,
        )
        self.validator = ComponentValidator(
            self.settings.nav_primary_policy,
            meta_filename=self.profile.meta_filename,
            kind=self.profile.name,
            symbol_suffix=self.profile.symbol_suffix,
        )
        self.generator = ArtifactGenerator(self.settings.output_path, self.profile)

        self._lock = threading.Lock()
        self.last_result: PassResult | None = None

    @property
    def components_dir(self) -> Path:
        return self.settings.components_path

    # ------------------------------------------------------------------
    # Pass lifecycle
    # ------------------------------------------------------------------

    def check(self) -> tuple[ScanResult, ValidationResult]:
        """Scan and validate without generating anything."""
        scan = self.scanner.scan(self.components_dir)
        validation = self.validator.validate(scan.records)
        return scan, validation

    def run_pass(self) -> PassResult:
        """Run one full discovery pass.

        Raises
        ------
        ComponentValidationError
            If any error-severity issue was found.  No artifact is written.
        ArtifactWriteError
            If writing either artifact fails.
        """
        with self._lock:
            started = time.perf_counter()
            logger.info("Starting %s discovery in %s", self.profile.name, self.components_dir)

            scan, validation = self.check()
            report_issues(validation)

            if validation.has_errors:
                raise ComponentValidationError(validation.errors)

            snapshot = RegistrySnapshot(
                components=tuple(validation.admissible),
                navigation=tuple(compose_navigation(validation.admissible)),
            )
            artifacts = self.generator.generate(snapshot)

            duration_ms = (time.perf_counter() - started) * 1000.0
            logger.info(
                "Discovered %d %s(s) in %.0fms",
                len(snapshot.components),
                self.profile.name,
                duration_ms,
            )
            result = PassResult(
                scan=scan,
                validation=validation,
                snapshot=snapshot,
                artifacts=artifacts,
                duration_ms=duration_ms,
            )
            self.last_result = result
            return result

    def register_dependencies(self, context_dependencies: MutableSet[Path]) -> None:
        """Add the scanned directory to a build's watched dependencies."""
        context_dependencies.add(self.components_dir)


def report_issues(validation: ValidationResult) -> None:
    """Log every issue as ``SEVERITY: message``."""
    for issue in validation.issues:
        if issue.severity == Severity.ERROR:
            logger.error("%s", issue.format_line())
        else:
            logger.warning("%s", issue.format_line())
