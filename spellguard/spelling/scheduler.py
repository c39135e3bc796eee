"""Debounce re-checks of documents that are being edited.

Each document key has its own state: the time of its last check and at most
one pending timer. A change arriving long enough after the last check runs
immediately; otherwise the pending timer is replaced by a new one for twice
the interval, and when it fires it checks the most recently changed snapshot.
A burst of edits therefore collapses into one trailing check.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Protocol, TypeVar

from spellguard.models import SchedulerDecision

LOGGER = logging.getLogger(__name__)

DEFAULT_CHECK_INTERVAL_MS = 3000

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def start_daemon_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Default timer factory: a started daemon ``threading.Timer``."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class _PendingCheck(Generic[T]):
    timer: TimerHandle
    document: T
    generation: int


@dataclass
class _KeyState(Generic[T]):
    last_check: float | None = None
    pending: _PendingCheck[T] | None = None
    generation: int = 0


class DebounceScheduler(Generic[T]):
    """Decide per change event whether to check now, later or not at all.

    Args:
            run_check: Called with the document to check
            check_interval: Milliseconds; negative disables automatic checks
            auto_check: Runtime switch for all automatic checks
            clock: Monotonic clock in seconds
            timer_factory: Creates and starts a cancellable timer
    """

    def __init__(
        self,
        run_check: Callable[[T], None],
        *,
        check_interval: int = DEFAULT_CHECK_INTERVAL_MS,
        auto_check: bool = True,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: TimerFactory = start_daemon_timer,
    ) -> None:
        self._run_check = run_check
        self.check_interval = check_interval
        self.auto_check = auto_check
        self._clock = clock
        self._timer_factory = timer_factory
        self._states: dict[Hashable, _KeyState[T]] = {}
        self._lock = threading.RLock()

    @property
    def enabled(self) -> bool:
        return self.auto_check and self.check_interval >= 0

    def on_change(self, key: Hashable, document: T) -> SchedulerDecision:
        """Route a change of ``document`` (identified by ``key``)."""
        if not self.enabled:
            return SchedulerDecision.SKIPPED

        with self._lock:
            state = self._states.setdefault(key, _KeyState())
            elapsed_ms = (
                None
                if state.last_check is None
                else (self._clock() - state.last_check) * 1000
            )
            self._cancel_pending(state)
            if elapsed_ms is None or elapsed_ms > self.check_interval:
                run_now = True
            else:
                state.generation += 1
                generation = state.generation
                delay = 2 * self.check_interval / 1000
                timer = self._timer_factory(delay, lambda: self._fire(key, generation))
                state.pending = _PendingCheck(timer=timer, document=document, generation=generation)
                run_now = False

        if run_now:
            self._run(key, document)
            return SchedulerDecision.IMMEDIATE
        LOGGER.debug("Deferred check for %s", key)
        return SchedulerDecision.DEFERRED

    def record_check(self, key: Hashable) -> None:
        """Note that ``key`` was just checked (by any route, manual included)."""
        with self._lock:
            self._states.setdefault(key, _KeyState()).last_check = self._clock()

    def has_pending(self, key: Hashable) -> bool:
        with self._lock:
            state = self._states.get(key)
            return state is not None and state.pending is not None

    def cancel(self, key: Hashable) -> None:
        """Cancel and forget everything about ``key``."""
        with self._lock:
            state = self._states.pop(key, None)
            if state is not None:
                self._cancel_pending(state)

    def cancel_all(self) -> None:
        with self._lock:
            for state in self._states.values():
                self._cancel_pending(state)

    def dispose(self) -> None:
        with self._lock:
            self.cancel_all()
            self._states.clear()

    def _fire(self, key: Hashable, generation: int) -> None:
        with self._lock:
            state = self._states.get(key)
            if state is None or state.pending is None or state.pending.generation != generation:
                # superseded or cancelled
                return
            document = state.pending.document
            state.pending = None
        self._run(key, document)

    def _run(self, key: Hashable, document: T) -> None:
        try:
            self._run_check(document)
        finally:
            self.record_check(key)

    @staticmethod
    def _cancel_pending(state: _KeyState[T]) -> None:
        if state.pending is not None:
            state.pending.timer.cancel()
            state.pending = None
