"""Shared test fixtures for dropin."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from dropin.config import DiscoverySettings
from dropin.core.naming import module_symbol
from dropin.models.components import ComponentRecord
from dropin.models.config import COMPONENT_PROFILE, DiscoveryProfile


def component_meta(component_id: str, **overrides: Any) -> dict[str, Any]:
    """A valid metadata mapping for *component_id*: one primary route plus nav."""
    meta: dict[str, Any] = {
        "id": component_id,
        "title": f"{component_id.title()} Component",
        "description": f"The {component_id} component",
        "routes": [{"path": f"/{component_id}", "title": component_id.title(), "isPrimary": True}],
        "nav": {"label": component_id.title()},
    }
    meta.update(overrides)
    return meta


@pytest.fixture
def settings(tmp_path: Path) -> DiscoverySettings:
    """Provide settings rooted in a temp project (src/components layout)."""
    return DiscoverySettings(root_dir=tmp_path)


@pytest.fixture
def components_dir(settings: DiscoverySettings) -> Path:
    """Provide the (created) components directory of the temp project."""
    path = settings.components_path
    path.mkdir(parents=True, exist_ok=True)
    return path


# ---------------------------------------------------------------------------
# Factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_component(components_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a component folder and return its path.

    ``meta`` defaults to a valid descriptor for ``component_id``.  Pass
    ``meta_text`` to write raw (possibly broken) descriptor text instead.
    """

    def _factory(
        component_id: str = "demo",
        meta: dict[str, Any] | None = None,
        *,
        folder: str | None = None,
        parent: Path | None = None,
        meta_text: str | None = None,
        with_module: bool = True,
        profile: DiscoveryProfile = COMPONENT_PROFILE,
    ) -> Path:
        directory = (parent or components_dir) / (folder or component_id)
        directory.mkdir(parents=True, exist_ok=True)
        if meta_text is None:
            meta_text = json.dumps(meta if meta is not None else component_meta(component_id))
        (directory / profile.meta_filename).write_text(meta_text, encoding="utf-8")
        if with_module:
            symbol = module_symbol(component_id, profile.symbol_suffix)
            (directory / profile.module_filename).write_text(
                f"class {symbol}:\n"
                "    def __init__(self, *args, **kwargs):\n"
                "        self.args = args\n"
                "        self.kwargs = kwargs\n",
                encoding="utf-8",
            )
        return directory

    return _factory


@pytest.fixture
def make_record(tmp_path: Path) -> Callable[..., ComponentRecord]:
    """Factory fixture: build a ComponentRecord without touching the disk."""

    def _factory(component_id: str | None = "demo", **overrides: Any) -> ComponentRecord:
        data = component_meta(component_id or "nameless")
        data["id"] = component_id
        data.update(overrides)
        data.setdefault("source_path", tmp_path / (component_id or "nameless"))
        return ComponentRecord.model_validate(data)

    return _factory


@pytest.fixture
def make_meta() -> Callable[..., dict[str, Any]]:
    """Factory fixture: a valid metadata mapping with per-test overrides."""
    return component_meta
