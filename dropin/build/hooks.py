"""Host build-tool hook surface.

A host build drives one ``Compilation`` through two hook points:

* ``before_compile`` — fired with the build parameters before any
  type-checking or bundling.  A tapped callback that raises fails the build.
* ``after_compile`` — fired with the finished ``Compilation`` so plugins can
  register extra watch dependencies.

Callbacks fire in tap order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class HookPoint:
    """An ordered list of named callbacks fired together."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: list[tuple[str, Callable[..., Any]]] = []

    def tap(self, plugin_name: str, callback: Callable[..., Any]) -> None:
        """Register *callback* under *plugin_name*."""
        self._taps.append((plugin_name, callback))

    def call(self, *args: Any) -> None:
        for plugin_name, callback in self._taps:
            logger.debug("Hook %s -> %s", self.name, plugin_name)
            callback(*args)

    @property
    def taps(self) -> list[str]:
        return [plugin_name for plugin_name, _ in self._taps]

    def __repr__(self) -> str:
        return f"HookPoint(name={self.name!r}, taps={self.taps!r})"


class Compilation:
    """State of one build, as seen by plugins."""

    def __init__(self, params: dict[str, Any] | None = None) -> None:
        self.params: dict[str, Any] = dict(params or {})
        self.context_dependencies: set[Path] = set()


class BuildHooks:
    """The hook points a host build exposes to plugins."""

    def __init__(self) -> None:
        self.before_compile = HookPoint("before_compile")
        self.after_compile = HookPoint("after_compile")


def run_build(
    hooks: BuildHooks,
    params: dict[str, Any] | None = None,
    compile_step: Callable[[Compilation], None] | None = None,
) -> Compilation:
    """Drive one compilation through *hooks*.

    Any exception raised by a ``before_compile`` callback propagates and
    aborts the build before ``compile_step`` runs.
    """
    compilation = Compilation(params)
    hooks.before_compile.call(compilation.params)
    if compile_step is not None:
        compile_step(compilation)
    hooks.after_compile.call(compilation)
    return compilation
