"""Tests for the discovery orchestrator — pass lifecycle and abort semantics."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest

from dropin.config import DiscoverySettings
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.errors import ArtifactWriteError, ComponentValidationError
from dropin.models.issues import NavPrimaryPolicy


@pytest.fixture
def orch(settings: DiscoverySettings) -> DiscoveryOrchestrator:
    return DiscoveryOrchestrator(settings)


class TestRunPass:
    def test_successful_pass(self, orch: DiscoveryOrchestrator, make_component):
        make_component("alpha", meta=None)
        make_component("beta")
        result = orch.run_pass()

        assert [c.id for c in result.snapshot.components] == ["alpha", "beta"]
        assert [n.path for n in result.snapshot.navigation] == ["/alpha", "/beta"]
        assert result.artifacts.registry_path.is_file()
        assert result.artifacts.aggregator_path.is_file()
        assert orch.last_result is result

    def test_empty_tree_generates_empty_artifacts(self, orch: DiscoveryOrchestrator, components_dir):
        result = orch.run_pass()
        assert result.snapshot.components == ()
        assert "imports = ()" in result.artifacts.aggregator_path.read_text(encoding="utf-8")

    def test_missing_components_dir_is_not_fatal(self, tmp_path: Path):
        orch = DiscoveryOrchestrator(DiscoverySettings(root_dir=tmp_path))
        assert orch.run_pass().snapshot.components == ()

    def test_output_lands_in_configured_dir(self, settings: DiscoverySettings, make_component):
        make_component("alpha")
        result = DiscoveryOrchestrator(settings).run_pass()
        assert result.artifacts.registry_path.parent == settings.output_path

    def test_warnings_do_not_abort(self, orch: DiscoveryOrchestrator, make_component, make_meta):
        make_component(
            "loose",
            make_meta("loose", routes=[{"path": "/loose", "title": "Loose"}]),
        )
        result = orch.run_pass()
        assert len(result.validation.warnings) == 1
        assert result.snapshot.navigation[0].path == "/loose"

    def test_skipped_descriptor_does_not_abort(self, orch: DiscoveryOrchestrator, make_component):
        make_component("broken", meta_text="{")
        make_component("fine")
        result = orch.run_pass()
        assert [c.id for c in result.snapshot.components] == ["fine"]
        assert len(result.scan.skipped) == 1


class TestAbort:
    def test_duplicate_ids_abort_with_aggregated_error(
        self, orch: DiscoveryOrchestrator, components_dir: Path, make_component, make_meta
    ):
        first = make_component(
            "demo", make_meta("demo", routes=[{"path": "/a", "title": "A", "isPrimary": True}]),
            folder="one",
        )
        second = make_component(
            "demo", make_meta("demo", routes=[{"path": "/b", "title": "B", "isPrimary": True}]),
            folder="two",
        )
        with pytest.raises(ComponentValidationError) as excinfo:
            orch.run_pass()

        message = str(excinfo.value)
        assert message.startswith("Component validation failed:\n")
        assert f"Duplicate component ID 'demo' found in: {first}, {second}" in message
        assert len(excinfo.value.issues) == 1

    def test_aggregated_error_names_descriptor_and_field(
        self, orch: DiscoveryOrchestrator, make_component, make_meta
    ):
        folder = make_component("bad", make_meta("bad", title=None))
        with pytest.raises(ComponentValidationError) as excinfo:
            orch.run_pass()
        descriptor = folder.resolve() / "component.json"
        assert str(excinfo.value).splitlines()[1] == (
            f"Component 'bad' is missing required 'title' field ({descriptor}, title)"
        )

    def test_abort_writes_nothing(
        self, orch: DiscoveryOrchestrator, settings: DiscoverySettings, make_component, make_meta
    ):
        make_component("bad", make_meta("bad", title=None))
        with pytest.raises(ComponentValidationError):
            orch.run_pass()
        assert not settings.output_path.exists()

    def test_failed_pass_keeps_previous_artifacts(
        self, orch: DiscoveryOrchestrator, make_component, make_meta
    ):
        make_component("good")
        first = orch.run_pass()
        before = first.artifacts.registry_path.read_bytes()

        make_component("bad", make_meta("bad", routes=[]))
        with pytest.raises(ComponentValidationError):
            orch.run_pass()

        assert first.artifacts.registry_path.read_bytes() == before
        assert orch.last_result is first

    def test_all_errors_reported_at_once(
        self, orch: DiscoveryOrchestrator, make_component, make_meta
    ):
        make_component("one", make_meta("one", title=None))
        make_component("two", make_meta("two", routes=[]))
        make_component("three", make_meta("three", nav={"order": 1}))
        with pytest.raises(ComponentValidationError) as excinfo:
            orch.run_pass()
        assert len(excinfo.value.issues) == 3

    def test_strict_nav_policy_aborts(self, tmp_path: Path, make_component, make_meta):
        make_component("loose", make_meta("loose", routes=[{"path": "/l", "title": "L"}]))
        settings = DiscoverySettings(root_dir=tmp_path, nav_primary_policy=NavPrimaryPolicy.STRICT)
        with pytest.raises(ComponentValidationError, match="no primary route"):
            DiscoveryOrchestrator(settings).run_pass()

    def test_write_failure_raises(self, settings: DiscoverySettings, make_component):
        make_component("alpha")
        settings.output_path.parent.mkdir(parents=True, exist_ok=True)
        settings.output_path.write_text("blocking file", encoding="utf-8")
        with pytest.raises(ArtifactWriteError):
            DiscoveryOrchestrator(settings).run_pass()

    def test_issues_are_logged(
        self, orch: DiscoveryOrchestrator, make_component, make_meta, caplog
    ):
        make_component("bad", make_meta("bad", title=None))
        with caplog.at_level(logging.WARNING, logger="dropin"):
            with pytest.raises(ComponentValidationError):
                orch.run_pass()
        assert "ERROR: Component 'bad' is missing required 'title' field" in caplog.text


class TestCheckAndDependencies:
    def test_check_writes_nothing(
        self, orch: DiscoveryOrchestrator, settings: DiscoverySettings, make_component
    ):
        make_component("alpha")
        scan, validation = orch.check()
        assert len(scan.records) == 1
        assert validation.issues == []
        assert not settings.output_path.exists()

    def test_register_dependencies(self, orch: DiscoveryOrchestrator):
        deps: set[Path] = set()
        orch.register_dependencies(deps)
        assert deps == {orch.components_dir}

    def test_concurrent_passes_are_serialized(self, orch: DiscoveryOrchestrator, make_component):
        make_component("alpha")
        errors: list[BaseException] = []

        def worker() -> None:
            try:
                orch.run_pass()
            except BaseException as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert orch.last_result is not None
        assert len(orch.last_result.snapshot.components) == 1
