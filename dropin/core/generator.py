"""Artifact generator — writes the registry and aggregator modules.

Output layout: {output_dir}/{registry_filename} and
{output_dir}/{aggregator_filename}, both taken from the active profile.

* The **registry** module exports ``components`` and ``navigation`` as typed
  Pydantic models, rebuilt from an embedded literal snapshot.
* The **aggregator** module loads every component's module descriptor by a
  path relative to its own directory and defines the composed container
  class that instantiates them all at once.

Both files are rendered in memory before anything touches the disk, then
written atomically.  A file whose content is unchanged is left alone so
repeated passes over an unchanged tree do not churn timestamps.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from pprint import pformat

from dropin.core.hasher import text_digest
from dropin.core.naming import module_symbol, relative_import_path
from dropin.errors import ArtifactWriteError
from dropin.models.artifacts import GeneratedArtifacts
from dropin.models.config import COMPONENT_PROFILE, DiscoveryProfile
from dropin.models.navigation import RegistrySnapshot

logger = logging.getLogger(__name__)

_HEADER = '''"""AUTO-GENERATED FILE - DO NOT EDIT.

Generated by dropin ComponentDiscoveryPlugin.

{summary}
"""

from __future__ import annotations
'''

_REGISTRY_BODY = '''
from dropin.models import ComponentRecord, NavigationEntry

DIGEST = {digest!r}

_COMPONENTS = {components}

_NAVIGATION = {navigation}

# All discovered components
components: list[ComponentRecord] = [
    ComponentRecord.model_validate(item) for item in _COMPONENTS
]

# Computed navigation entries (sorted by order, then label)
navigation: list[NavigationEntry] = [
    NavigationEntry.model_validate(item) for item in _NAVIGATION
]
'''

_AGGREGATOR_PRELUDE = '''
import importlib.util
import sys
from pathlib import Path

_HERE = Path(__file__).resolve().parent


def _load(relative_path: str, symbol: str):
    path = (_HERE / relative_path).resolve()
    name = f"{__name__}.{symbol}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load component module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return getattr(module, symbol)

'''

_CONTAINER = '''

class {container}:
    """Dynamic module that mounts every discovered {kind} module."""

    imports = {imports}

    def __init__(self, *args, **kwargs):
        self.modules = tuple(module(*args, **kwargs) for module in self.imports)
'''


class ArtifactGenerator:
    """Renders and writes the two generated artifacts.

    Parameters
    ----------
    output_dir:
        Directory the artifacts are written to.  Created on demand.
    profile:
        Naming convention for filenames, symbols and the container class.
    """

    def __init__(
        self, output_dir: Path, profile: DiscoveryProfile = COMPONENT_PROFILE
    ) -> None:
        self._output_dir = Path(output_dir).resolve()
        self._profile = profile

    @property
    def registry_path(self) -> Path:
        return self._output_dir / self._profile.registry_filename

    @property
    def aggregator_path(self) -> Path:
        return self._output_dir / self._profile.aggregator_filename

    # -- Rendering ----------------------------------------------------------

    def render_registry(self, snapshot: RegistrySnapshot) -> str:
        header = _HEADER.format(
            summary=(
                f"Registry of every discovered {self._profile.name} and the "
                "computed navigation."
            )
        )
        body = _REGISTRY_BODY.format(
            digest=snapshot.digest,
            components=pformat(snapshot.component_data(), width=88, sort_dicts=False),
            navigation=pformat(snapshot.navigation_data(), width=88, sort_dicts=False),
        )
        return header + body

    def render_aggregator(self, snapshot: RegistrySnapshot) -> str:
        header = _HEADER.format(
            summary=f"Aggregates every discovered {self._profile.name} module."
        )
        symbols: list[str] = []
        loads: list[str] = []
        for component in snapshot.components:
            symbol = module_symbol(component.id, self._profile.symbol_suffix)
            import_path = relative_import_path(
                Path(component.source_path) / self._profile.module_filename,
                self._output_dir,
            )
            loads.append(f"{symbol} = _load({import_path!r}, {symbol!r})")
            symbols.append(symbol)

        if len(symbols) == 1:
            imports = f"({symbols[0]},)"
        else:
            imports = "(" + ", ".join(symbols) + ")"

        container = _CONTAINER.format(
            container=self._profile.container_name,
            kind=self._profile.name,
            imports=imports,
        )
        sections = [_AGGREGATOR_PRELUDE.strip("\n")]
        if loads:
            sections.append("\n".join(loads))
        sections.append(container.strip("\n"))
        return header + "\n" + "\n\n\n".join(sections) + "\n"

    # -- Writing ------------------------------------------------------------

    def generate(self, snapshot: RegistrySnapshot) -> GeneratedArtifacts:
        """Render both artifacts, then write them.

        Raises
        ------
        ArtifactWriteError
            If the output directory cannot be created or a file cannot be
            written.
        """
        rendered = [
            (self.registry_path, self.render_registry(snapshot)),
            (self.aggregator_path, self.render_aggregator(snapshot)),
        ]

        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactWriteError(
                f"Cannot create output directory {self._output_dir}: {exc}"
            ) from exc

        written: list[Path] = []
        for path, content in rendered:
            if _write_if_changed(path, content):
                written.append(path)

        if written:
            logger.info(
                "Wrote %s for %d %s(s).",
                ", ".join(p.name for p in written),
                len(snapshot.components),
                self._profile.name,
            )
        else:
            logger.debug("Generated artifacts unchanged (%s).", snapshot.digest)

        return GeneratedArtifacts(
            registry_path=self.registry_path,
            aggregator_path=self.aggregator_path,
            digest=snapshot.digest,
            written=written,
        )


def _write_if_changed(path: Path, content: str) -> bool:
    """Atomically write *content* to *path*; return False if already current."""
    try:
        if path.is_file() and text_digest(path.read_text(encoding="utf-8")) == text_digest(
            content
        ):
            return False
    except (OSError, UnicodeDecodeError):
        pass  # unreadable existing file is simply overwritten

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactWriteError(f"Cannot write generated artifact {path}: {exc}") from exc
    return True
