"""
Tick scheduling for the game loop.

Two implementations share one interface:

 - ThreadedScheduler drives a live game with background timers (the Flask host)
 - ManualScheduler advances a virtual clock on demand (the headless CLI, tests)

Interface:
    start_interval(interval_ms, callback)  replace the periodic tick
    stop_interval()
    call_later(delay_ms, callback) -> handle   one-shot action
    cancel(handle)
    shutdown()
"""

import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class _PendingCall:
    """A one-shot action scheduled on a ThreadedScheduler."""

    def __init__(self, scheduler: "ThreadedScheduler", delay_ms: int, callback: Callback):
        self.cancelled = threading.Event()
        self._scheduler = scheduler
        self._callback = callback
        self.timer = threading.Timer(delay_ms / 1000.0, self._fire)
        self.timer.daemon = True

    def _fire(self) -> None:
        with self._scheduler._callback_lock:
            if self.cancelled.is_set():
                return
            self._scheduler._forget(self)
            self._scheduler._run(self._callback)

    def cancel(self) -> None:
        self.cancelled.set()
        self.timer.cancel()


class ThreadedScheduler:
    """
    Background-thread scheduler.

    All callbacks run while holding one lock, so a tick never overlaps
    another tick or a delayed restart. Scheduling methods do not take that
    lock and are safe to call from inside a callback.
    """

    def __init__(self):
        self._callback_lock = threading.RLock()
        self._state_lock = threading.Lock()
        self._interval_stop: Optional[threading.Event] = None
        self._interval_thread: Optional[threading.Thread] = None
        self._retired: List[threading.Thread] = []
        self._pending: List[_PendingCall] = []
        self.interval_ms: Optional[int] = None

    def _run(self, callback: Callback) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Scheduled callback failed")

    def _interval_loop(self, stop: threading.Event, interval_s: float, callback: Callback) -> None:
        while not stop.wait(interval_s):
            with self._callback_lock:
                if stop.is_set():
                    break
                self._run(callback)

    def start_interval(self, interval_ms: int, callback: Callback) -> None:
        self.stop_interval()
        stop = threading.Event()
        thread = threading.Thread(
            target=self._interval_loop,
            args=(stop, interval_ms / 1000.0, callback),
            name="snake-tick",
            daemon=True,
        )
        with self._state_lock:
            self._interval_stop = stop
            self._interval_thread = thread
            self.interval_ms = interval_ms
        thread.start()

    def stop_interval(self) -> None:
        # Not joined here: the caller may hold a lock the old tick is waiting on
        with self._state_lock:
            stop = self._interval_stop
            thread = self._interval_thread
            self._interval_stop = None
            self._interval_thread = None
            self.interval_ms = None
            self._retired = [t for t in self._retired if t.is_alive()]
            if thread is not None:
                self._retired.append(thread)
        if stop is not None:
            stop.set()

    @property
    def live_threads(self) -> int:
        """Interval threads still running, the current one included."""
        with self._state_lock:
            threads = self._retired + ([self._interval_thread] if self._interval_thread else [])
        return sum(1 for t in threads if t.is_alive())

    def call_later(self, delay_ms: int, callback: Callback) -> _PendingCall:
        pending = _PendingCall(self, delay_ms, callback)
        with self._state_lock:
            self._pending.append(pending)
        pending.timer.start()
        return pending

    def _forget(self, pending: _PendingCall) -> None:
        with self._state_lock:
            if pending in self._pending:
                self._pending.remove(pending)

    def cancel(self, handle: Optional[_PendingCall]) -> None:
        if handle is None:
            return
        handle.cancel()
        self._forget(handle)

    def shutdown(self, timeout: float = 1.0) -> None:
        """Stop everything and wait for stopped interval threads to exit."""
        self.stop_interval()
        with self._state_lock:
            pending, self._pending = self._pending, []
            retired, self._retired = self._retired, []
        for call in pending:
            call.cancel()
        current = threading.current_thread()
        for thread in retired:
            if thread is not current:
                thread.join(timeout)


class ManualScheduler:
    """
    Deterministic scheduler driven by advance().

    Nothing runs until the owner advances the virtual clock, which makes
    game runs reproducible and lets tests step through auto-restart delays
    without sleeping.
    """

    def __init__(self):
        self.now_ms = 0
        self._interval: Optional[List] = None  # [interval_ms, callback, next_due]
        self._pending: Dict[int, Tuple[int, Callback]] = {}
        self._ids = itertools.count(1)

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval[0] if self._interval else None

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def start_interval(self, interval_ms: int, callback: Callback) -> None:
        self._interval = [interval_ms, callback, self.now_ms + interval_ms]

    def stop_interval(self) -> None:
        self._interval = None

    def call_later(self, delay_ms: int, callback: Callback) -> int:
        handle = next(self._ids)
        self._pending[handle] = (self.now_ms + delay_ms, callback)
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def shutdown(self) -> None:
        self._interval = None
        self._pending.clear()

    def _next_due(self) -> Optional[Tuple[int, Optional[int]]]:
        """Earliest (due_ms, pending handle or None for the interval)."""
        candidates = [(due, handle) for handle, (due, _) in self._pending.items()]
        if self._interval is not None:
            candidates.append((self._interval[2], None))
        if not candidates:
            return None
        # One-shots win ties against the interval
        return min(candidates, key=lambda c: (c[0], c[1] is None, c[1] or 0))

    def advance(self, ms: int) -> int:
        """
        Move the clock forward `ms`, firing everything that falls due.

        Returns:
            Number of callbacks fired
        """
        target = self.now_ms + ms
        fired = 0
        while True:
            nxt = self._next_due()
            if nxt is None or nxt[0] > target:
                break
            due, handle = nxt
            self.now_ms = due
            if handle is not None:
                _, callback = self._pending.pop(handle)
            else:
                interval = self._interval
                callback = interval[1]
                interval[2] = due + interval[0]
            callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_ticks(self, count: int) -> int:
        """Fire the periodic callback `count` times (plus anything due before it)."""
        fired = 0
        for _ in range(count):
            if self._interval is None:
                break
            fired += self.advance(self._interval[2] - self.now_ms)
        return fired
