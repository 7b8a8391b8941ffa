"""Generated symbol naming and import path derivation."""

from __future__ import annotations

import os
import re
from pathlib import Path

_SEPARATORS = re.compile(r"[-_]+")


def pascal_case(component_id: str) -> str:
    """Convert a kebab-case or snake_case id to PascalCase.

    Runs of separators collapse; the rest of each part keeps its case.

    >>> pascal_case("user-dashboard")
    'UserDashboard'
    >>> pascal_case("a__b--c")
    'ABC'
    """
    parts = [part for part in _SEPARATORS.split(component_id) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def module_symbol(component_id: str, suffix: str) -> str:
    """Class name bound for a component's module in the aggregator.

    >>> module_symbol("demo", "ComponentModule")
    'DemoComponentModule'
    """
    return pascal_case(component_id) + suffix


def relative_import_path(target: Path, from_dir: Path) -> str:
    """Path of *target* relative to *from_dir*, always with ``/`` separators."""
    relative = os.path.relpath(Path(target), Path(from_dir))
    return relative.replace(os.sep, "/").replace("\\", "/")
