"""Tests for watch mode — debounce, coalescing and failure tolerance."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from dropin.config import DiscoverySettings
from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.errors import ComponentValidationError
from dropin.watch import CoalescingRunner, TreeWatcher, WatchSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestCoalescingRunner:
    def test_runs_immediately_when_idle(self):
        calls: list[int] = []
        runner = CoalescingRunner(lambda: calls.append(1))
        assert runner.trigger() is True
        assert calls == [1]
        assert runner.runs == 1

    def test_triggers_during_a_run_collapse_into_one_rerun(self):
        results: list[bool] = []

        def task() -> None:
            if runner.runs == 1:
                # Three triggers arrive while the first run is in flight.
                results.extend(runner.trigger() for _ in range(3))
                assert runner.pending is True

        runner = CoalescingRunner(task)
        assert runner.trigger() is True
        assert results == [False, False, False]
        assert runner.runs == 2
        assert runner.pending is False

    def test_failure_resets_state(self):
        def task() -> None:
            raise RuntimeError("boom")

        runner = CoalescingRunner(task)
        with pytest.raises(RuntimeError):
            runner.trigger()
        with pytest.raises(RuntimeError):
            runner.trigger()
        assert runner.runs == 2


class TestTreeWatcher:
    def test_no_change_never_fires(self, tmp_path: Path):
        fired: list[int] = []
        clock = FakeClock()
        watcher = TreeWatcher(tmp_path, lambda: fired.append(1), debounce=0.3, clock=clock)
        for _ in range(5):
            clock.advance(1.0)
            assert watcher.poll() is False
        assert fired == []

    def test_fires_once_after_quiet_period(self, tmp_path: Path):
        fired: list[int] = []
        clock = FakeClock()
        watcher = TreeWatcher(tmp_path, lambda: fired.append(1), debounce=0.3, clock=clock)

        (tmp_path / "a.json").write_text("{}", encoding="utf-8")
        assert watcher.poll() is False  # change seen, window opens

        clock.advance(0.1)
        assert watcher.poll() is False  # still inside the window

        clock.advance(0.3)
        assert watcher.poll() is True
        assert fired == [1]

        clock.advance(1.0)
        assert watcher.poll() is False
        assert fired == [1]

    def test_burst_of_changes_fires_once(self, tmp_path: Path):
        fired: list[int] = []
        clock = FakeClock()
        watcher = TreeWatcher(tmp_path, lambda: fired.append(1), debounce=0.3, clock=clock)

        for index in range(3):
            (tmp_path / f"file{index}.json").write_text("{}", encoding="utf-8")
            watcher.poll()
            clock.advance(0.1)

        clock.advance(0.5)
        assert watcher.poll() is True
        assert fired == [1]

    def test_excluded_directories_are_ignored(self, tmp_path: Path):
        fired: list[int] = []
        clock = FakeClock()
        watcher = TreeWatcher(
            tmp_path,
            lambda: fired.append(1),
            is_excluded=lambda path: path.name == "generated",
            clock=clock,
        )
        (tmp_path / "generated").mkdir()
        (tmp_path / "generated" / "out.py").write_text("x = 1\n", encoding="utf-8")
        (tmp_path / "kept.json").write_text("{}", encoding="utf-8")
        assert set(watcher.fingerprint()) == {str(tmp_path / "kept.json")}

    def test_missing_root_has_empty_fingerprint(self, tmp_path: Path):
        watcher = TreeWatcher(tmp_path / "missing", lambda: None)
        assert watcher.fingerprint() == {}

    def test_run_stops_on_event(self, tmp_path: Path):
        stop = threading.Event()
        stop.set()
        TreeWatcher(tmp_path, lambda: None, interval=0.01).run(stop)


class TestWatchSession:
    def test_initial_pass_and_failure_tolerance(
        self, settings: DiscoverySettings, make_component, make_meta
    ):
        outcomes: list[tuple[object, object]] = []
        make_component("good")
        session = WatchSession(
            DiscoveryOrchestrator(settings),
            on_result=lambda result, error: outcomes.append((result, error)),
        )

        session.runner.trigger()
        assert outcomes[-1][0] is not None
        registry = outcomes[-1][0].artifacts.registry_path
        before = registry.read_bytes()

        make_component("bad", make_meta("bad", title=None))
        session.runner.trigger()
        result, error = outcomes[-1]
        assert result is None
        assert isinstance(error, ComponentValidationError)
        assert registry.read_bytes() == before

    def test_start_runs_initial_pass(self, settings: DiscoverySettings, make_component):
        make_component("alpha")
        outcomes: list[object] = []
        session = WatchSession(
            DiscoveryOrchestrator(settings),
            on_result=lambda result, error: outcomes.append(result),
        )
        stop = threading.Event()
        stop.set()
        session.start(stop)
        assert len(outcomes) == 1
        assert outcomes[0] is not None

    def test_watcher_uses_settings(self, settings: DiscoverySettings, components_dir: Path):
        settings.debounce_seconds = 0.05
        session = WatchSession(DiscoveryOrchestrator(settings))
        assert session.watcher.debounce == 0.05
        assert session.watcher.root == components_dir
