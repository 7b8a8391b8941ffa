"""Watch mode — polls the components tree and re-runs discovery on change.

Change detection is a fingerprint of ``(mtime_ns, size)`` per file, taken
with the same directory exclusions as the scanner.  A change opens a debounce
window; the pass fires once the tree has been quiet for ``debounce`` seconds,
so a burst of saves produces one rebuild.

``CoalescingRunner`` guarantees a pass never overlaps another.  Triggers that
arrive while a pass is running collapse into a single pending re-run.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable
from pathlib import Path

from dropin.core.orchestrator import DiscoveryOrchestrator
from dropin.errors import DropinError
from dropin.models.artifacts import PassResult

logger = logging.getLogger(__name__)

Fingerprint = dict[str, tuple[int, int]]


class CoalescingRunner:
    """Serializes calls to *task*, coalescing overlapping triggers.

    ``trigger()`` runs the task on the calling thread.  If a run is already
    in flight, the call only marks one re-run as pending and returns; the
    thread that owns the current run performs it when it finishes.
    """

    def __init__(self, task: Callable[[], object]) -> None:
        self._task = task
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self.runs = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending

    def trigger(self) -> bool:
        """Run the task now, or queue one re-run.  True if this call ran it."""
        with self._lock:
            if self._running:
                self._pending = True
                return False
            self._running = True

        try:
            while True:
                self.runs += 1
                self._task()
                with self._lock:
                    if not self._pending:
                        self._running = False
                        return True
                    self._pending = False
        except BaseException:
            with self._lock:
                self._running = False
                self._pending = False
            raise


class TreeWatcher:
    """Polls a directory tree and calls *on_change* after a quiet period.

    Parameters
    ----------
    root:
        Directory to watch.
    on_change:
        Called (on the polling thread) once per settled change.
    is_excluded:
        Predicate for directories to skip, e.g. ``ComponentScanner.is_excluded``.
    interval:
        Seconds between polls in ``run()``.
    debounce:
        Quiet period, in seconds, required before ``on_change`` fires.
    clock:
        Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        root: Path,
        on_change: Callable[[], object],
        *,
        is_excluded: Callable[[Path], bool] | None = None,
        interval: float = 0.5,
        debounce: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.root = Path(root)
        self._on_change = on_change
        self._is_excluded = is_excluded or (lambda path: path.name.startswith("."))
        self.interval = interval
        self.debounce = debounce
        self._clock = clock
        self._last = self.fingerprint()
        self._changed_at: float | None = None

    def fingerprint(self) -> Fingerprint:
        """Snapshot ``(mtime_ns, size)`` of every watched file."""
        result: Fingerprint = {}
        if not self.root.is_dir():
            return result
        for dirpath, dirnames, filenames in os.walk(self.root):
            base = Path(dirpath)
            dirnames[:] = sorted(d for d in dirnames if not self._is_excluded(base / d))
            for name in filenames:
                path = base / name
                try:
                    stat = path.stat()
                except OSError:
                    continue  # removed between listing and stat
                result[str(path)] = (stat.st_mtime_ns, stat.st_size)
        return result

    def poll(self) -> bool:
        """Check the tree once.  True if ``on_change`` fired on this poll."""
        now = self._clock()
        current = self.fingerprint()
        if current != self._last:
            self._last = current
            self._changed_at = now
            logger.debug("Change detected under %s", self.root)
            return False

        if self._changed_at is not None and now - self._changed_at >= self.debounce:
            self._changed_at = None
            self._on_change()
            return True
        return False

    def run(self, stop_event: threading.Event) -> None:
        """Poll until *stop_event* is set."""
        while not stop_event.is_set():
            self.poll()
            stop_event.wait(self.interval)


class WatchSession:
    """Initial pass plus debounced, serialized re-runs for one orchestrator.

    Failed passes are logged and the session keeps watching; artifacts from
    the last successful pass stay on disk.
    """

    def __init__(
        self,
        orchestrator: DiscoveryOrchestrator,
        *,
        on_result: Callable[[PassResult | None, DropinError | None], None] | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self._on_result = on_result
        self.runner = CoalescingRunner(self._run_once)
        settings = orchestrator.settings
        self.watcher = TreeWatcher(
            orchestrator.components_dir,
            self.runner.trigger,
            is_excluded=orchestrator.scanner.is_excluded,
            interval=settings.watch_interval_seconds,
            debounce=settings.debounce_seconds,
        )

    def _run_once(self) -> None:
        try:
            result = self.orchestrator.run_pass()
        except DropinError as exc:
            logger.error("Discovery pass failed: %s", exc)
            if self._on_result is not None:
                self._on_result(None, exc)
            return
        if self._on_result is not None:
            self._on_result(result, None)

    def start(self, stop_event: threading.Event) -> None:
        """Run the initial pass, then watch until *stop_event* is set."""
        logger.info("Watching %s for changes", self.orchestrator.components_dir)
        self.runner.trigger()
        self.watcher.run(stop_event)
