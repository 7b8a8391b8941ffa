"""Dropin: zero-registration component discovery for build pipelines.

v0.3.0:
  - Filesystem scan for drop-in component folders (metadata + module)
  - Structural validation with aggregated, build-failing errors
  - Deterministic navigation ordering (order, then collated label)
  - Generated registry and aggregator modules, written atomically
  - Build-hook plugin, debounced watch mode and a scale benchmark
"""

__version__ = "0.3.0"
__description__ = "Zero-registration component discovery and registry generation"

from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.build.plugin import ComponentDiscoveryPlugin
from dropin.cli.app import app as cli

__all__ = ["DiscoveryOrchestrator", "ComponentDiscoveryPlugin", "cli", "__version__"]
