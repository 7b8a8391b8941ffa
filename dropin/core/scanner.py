"""Component scanner — walks a source tree and reads component descriptors.

Each component is a folder with this structure::

    {component}/
        component.json   — metadata descriptor (id, title, routes, nav)
        component.py     — module descriptor, opaque to discovery

The filenames come from the active ``DiscoveryProfile``.  Metadata is read as
data (JSON or TOML, by file suffix) and never executed.

Traversal is depth-first with children visited in name order, so the record
order is identical across runs on an identical tree.  A component folder is a
leaf: nothing beneath it is scanned.  A descriptor that cannot be read is a
discovery warning; the folder is skipped and the scan continues.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dropin.models.components import ComponentRecord
from dropin.models.config import COMPONENT_PROFILE, DiscoveryProfile
from dropin.models.issues import ScanResult, SkippedComponent

logger = logging.getLogger(__name__)


class DescriptorError(ValueError):
    """Raised when a metadata descriptor cannot be parsed into a record."""


def load_descriptor(meta_path: Path) -> dict[str, Any]:
    """Read and parse a metadata descriptor file.

    Raises
    ------
    DescriptorError
        If the file cannot be read or parsed, or holds no metadata mapping.
    """
    try:
        text = meta_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DescriptorError(f"cannot read descriptor: {exc}") from exc

    try:
        if meta_path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise DescriptorError(f"cannot parse descriptor: {exc}") from exc

    if not isinstance(data, dict) or not data:
        raise DescriptorError("descriptor exports no metadata")
    return data


class ComponentScanner:
    """Discovers component folders beneath a root directory.

    Parameters
    ----------
    profile:
        Naming convention for descriptor files.
    excluded_dirs:
        Directory names never descended into.  Hidden directories are
        always skipped.
    output_dir:
        The generated-output directory; skipped by resolved path as well as
        by name.
    """

    def __init__(
        self,
        profile: DiscoveryProfile = COMPONENT_PROFILE,
        *,
        excluded_dirs: Iterable[str] = (),
        output_dir: Path | None = None,
    ) -> None:
        self._profile = profile
        self._output_dir = output_dir.resolve() if output_dir is not None else None
        self._excluded = set(excluded_dirs)
        if self._output_dir is not None:
            self._excluded.add(self._output_dir.name)

    # -- Public API ---------------------------------------------------------

    def scan(self, root: Path) -> ScanResult:
        """Walk *root* and return every component record found beneath it.

        A missing root is not an error: it logs a warning and yields an
        empty result.
        """
        root = Path(root).resolve()
        records: list[ComponentRecord] = []
        skipped: list[SkippedComponent] = []

        if not root.is_dir():
            logger.warning("Components directory not found: %s", root)
            return ScanResult(root=root)

        self._walk(root, records, skipped, visited=set())
        logger.debug(
            "Scanned %s: %d component(s), %d skipped.", root, len(records), len(skipped)
        )
        return ScanResult(root=root, records=records, skipped=skipped)

    def is_excluded(self, path: Path) -> bool:
        """Whether the directory at *path* must not be descended into."""
        if path.name.startswith(".") or path.name in self._excluded:
            return True
        return self._output_dir is not None and path.resolve() == self._output_dir

    def is_component_dir(self, path: Path) -> bool:
        return (path / self._profile.meta_filename).is_file() and (
            path / self._profile.module_filename
        ).is_file()

    # -- Internal helpers ---------------------------------------------------

    def _walk(
        self,
        directory: Path,
        records: list[ComponentRecord],
        skipped: list[SkippedComponent],
        visited: set[Path],
    ) -> None:
        real = directory.resolve()
        if real in visited:
            return
        visited.add(real)

        try:
            children = sorted(
                (p for p in directory.iterdir() if p.is_dir()), key=lambda p: p.name
            )
        except OSError as exc:
            logger.warning("Cannot list directory %s: %s", directory, exc)
            return

        for child in children:
            if self.is_excluded(child):
                continue
            if self.is_component_dir(child):
                record = self._read_component(child, skipped)
                if record is not None:
                    records.append(record)
            else:
                self._walk(child, records, skipped, visited)

    def _read_component(
        self, folder: Path, skipped: list[SkippedComponent]
    ) -> ComponentRecord | None:
        meta_path = folder / self._profile.meta_filename
        try:
            data = load_descriptor(meta_path)
            return ComponentRecord.model_validate({**data, "source_path": folder})
        except (DescriptorError, ValidationError) as exc:
            reason = _short_reason(exc)
            logger.warning("Skipping component at %s: %s", meta_path, reason)
            skipped.append(SkippedComponent(location=str(meta_path), reason=reason))
            return None


def _short_reason(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        return f"invalid metadata at '{loc}': {first['msg']}"
    return str(exc)


def scan_components(
    root: Path,
    profile: DiscoveryProfile = COMPONENT_PROFILE,
    *,
    excluded_dirs: Iterable[str] = (),
    output_dir: Path | None = None,
) -> ScanResult:
    """Convenience wrapper: build a ``ComponentScanner`` and scan *root*."""
    scanner = ComponentScanner(profile, excluded_dirs=excluded_dirs, output_dir=output_dir)
    return scanner.scan(root)
