"""Dropin watch mode — debounced, serialized rebuilds on source changes."""

from dropin.watch.watcher import CoalescingRunner, TreeWatcher, WatchSession

__all__ = ["CoalescingRunner", "TreeWatcher", "WatchSession"]
