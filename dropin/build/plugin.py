"""Component discovery plugin for the host build.

Taps ``before_compile`` to run a full discovery pass, so validation errors
fail the build before compilation starts, and ``after_compile`` to register
the components directory as a watch dependency so edits re-trigger the build.
"""

from __future__ import annotations

import logging
from typing import Any

from dropin.build.hooks import BuildHooks, Compilation
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.models.artifacts import PassResult

logger = logging.getLogger(__name__)

PLUGIN_NAME = "ComponentDiscoveryPlugin"


class ComponentDiscoveryPlugin:
    """Runs component discovery as part of a host build.

    Parameters
    ----------
    orchestrator:
        The orchestrator that runs passes for the watched tree.
    """

    def __init__(self, orchestrator: DiscoveryOrchestrator) -> None:
        self.orchestrator = orchestrator
        self.last_result: PassResult | None = None

    def apply(self, hooks: BuildHooks) -> None:
        hooks.before_compile.tap(PLUGIN_NAME, self._before_compile)
        hooks.after_compile.tap(PLUGIN_NAME, self._after_compile)

    def _before_compile(self, params: dict[str, Any]) -> None:
        try:
            self.last_result = self.orchestrator.run_pass()
        except Exception:
            logger.error("Component discovery failed; aborting build.")
            raise

    def _after_compile(self, compilation: Compilation) -> None:
        self.orchestrator.register_dependencies(compilation.context_dependencies)

    def __repr__(self) -> str:
        return f"ComponentDiscoveryPlugin(components_dir={str(self.orchestrator.components_dir)!r})"
