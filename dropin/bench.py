"""Discovery performance check at synthetic scale.

Creates ``count`` mock components, then times scanning, validation and
generation separately against an incremental-rebuild budget.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from dropin.config import DiscoverySettings
from dropin.core.navigation import compose_navigation
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.models.navigation import RegistrySnapshot

logger = logging.getLogger(__name__)

REBUILD_BUDGET_MS = 3000.0


class BenchmarkReport(BaseModel):
    """Timings of one benchmark run, in milliseconds."""

    model_config = ConfigDict(frozen=True)

    component_count: int
    discovered: int
    error_count: int
    scan_ms: float
    validate_ms: float
    generate_ms: float
    budget_ms: float = REBUILD_BUDGET_MS

    @property
    def total_ms(self) -> float:
        return self.scan_ms + self.validate_ms + self.generate_ms

    @property
    def per_component_ms(self) -> float:
        return self.total_ms / self.discovered if self.discovered else 0.0

    @property
    def within_budget(self) -> bool:
        return self.total_ms < self.budget_ms


def write_mock_components(components_dir: Path, count: int, settings: DiscoverySettings) -> None:
    """Create *count* mock component folders under *components_dir*."""
    profile = settings.discovery_profile
    for index in range(1, count + 1):
        component_id = f"perf-test-{index}"
        folder = components_dir / component_id
        folder.mkdir(parents=True, exist_ok=True)
        meta = {
            "id": component_id,
            "title": f"Performance Test Component {index}",
            "description": "Generated for performance testing",
            "routes": [
                {"path": f"/{component_id}", "title": f"Test Page {index}", "isPrimary": True},
                {"path": f"/{component_id}/detail", "title": f"Detail Page {index}"},
            ],
            "nav": {"label": f"Test {index}", "order": index * 10},
        }
        (folder / profile.meta_filename).write_text(json.dumps(meta, indent=2), encoding="utf-8")
        (folder / profile.module_filename).write_text(
            f"class PerfTest{index}{profile.symbol_suffix}:\n"
            "    def __init__(self, *args, **kwargs):\n"
            "        pass\n",
            encoding="utf-8",
        )


def run_benchmark(
    count: int, workdir: Path, *, budget_ms: float = REBUILD_BUDGET_MS
) -> BenchmarkReport:
    """Populate *workdir* with *count* components and time one pass."""
    settings = DiscoverySettings(
        root_dir=workdir,
        components_dir=Path("components"),
        output_dir=Path("components_generated"),
    )
    write_mock_components(settings.components_path, count, settings)
    orchestrator = DiscoveryOrchestrator(settings)

    started = time.perf_counter()
    scan = orchestrator.scanner.scan(orchestrator.components_dir)
    scanned = time.perf_counter()
    validation = orchestrator.validator.validate(scan.records)
    validated = time.perf_counter()
    snapshot = RegistrySnapshot(
        components=tuple(validation.admissible),
        navigation=tuple(compose_navigation(validation.admissible)),
    )
    orchestrator.generator.generate(snapshot)
    generated = time.perf_counter()

    report = BenchmarkReport(
        component_count=count,
        discovered=len(scan.records),
        error_count=len(validation.errors),
        scan_ms=(scanned - started) * 1000.0,
        validate_ms=(validated - scanned) * 1000.0,
        generate_ms=(generated - validated) * 1000.0,
        budget_ms=budget_ms,
    )
    logger.info(
        "Benchmark: %d component(s) in %.0fms (budget %.0fms)",
        report.discovered,
        report.total_ms,
        budget_ms,
    )
    return report
