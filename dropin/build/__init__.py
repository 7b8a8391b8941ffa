"""Dropin build integration — hook points and the discovery plugin.

Modules
-------
hooks
    ``BuildHooks``, ``HookPoint`` and ``Compilation``: the before/after
    compilation surface a host build exposes, plus ``run_build``.
plugin
    ``ComponentDiscoveryPlugin`` taps both hooks to run discovery and to
    register the components directory as a watch dependency.
"""

from dropin.build.hooks import BuildHooks, Compilation, HookPoint, run_build
from dropin.build.plugin import ComponentDiscoveryPlugin

__all__ = ["BuildHooks", "Compilation", "HookPoint", "run_build", "ComponentDiscoveryPlugin"]
