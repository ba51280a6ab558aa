"""Minimal change-notification support."""

from __future__ import annotations

import weakref
from typing import Callable, List

Callback = Callable[[], None]


def _strong_ref(callback: Callback) -> Callable[[], Callback]:
    return lambda: callback


def _make_ref(callback: Callback) -> Callable[[], Callback]:
    # Bound methods are held weakly so an observer's lifetime is its own
    if hasattr(callback, "__self__") and hasattr(callback, "__func__"):
        return weakref.WeakMethod(callback)
    return _strong_ref(callback)


class Observable:
    """Keeps subscriber callbacks and fans notifications out to them.

    Bound methods are registered through ``weakref.WeakMethod``: a
    subscriber that is otherwise unreferenced can be collected, and its
    entry is dropped the next time the list is walked. Plain functions and
    lambdas are held strongly.
    """

    def __init__(self) -> None:
        self._observers: List[Callable[[], Callback]] = []

    def _live(self) -> List[Callback]:
        live = []
        kept = []
        for ref in self._observers:
            callback = ref()
            if callback is not None:
                live.append(callback)
                kept.append(ref)
        self._observers = kept
        return live

    def register_observer(self, callback: Callback) -> None:
        if callback not in self._live():
            self._observers.append(_make_ref(callback))

    def unregister_observer(self, callback: Callback) -> None:
        kept = []
        for ref in self._observers:
            target = ref()
            if target is not None and target != callback:
                kept.append(ref)
        self._observers = kept

    @property
    def observer_count(self) -> int:
        return len(self._live())

    def notify_observers(self) -> None:
        # _live() returns a fresh list, so callbacks may (un)register while we iterate
        for callback in self._live():
            callback()
