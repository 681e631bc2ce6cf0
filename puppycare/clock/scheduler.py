"""
clock.scheduler
===============
Periodic timers for the engine's host. Two interchangeable flavours:

    ManualScheduler   time only moves when the owner calls advance(dt);
                      callbacks run inline, in the owner's thread.
    ThreadScheduler   one daemon thread per timer; each firing is queued
                      and only runs when the owner calls drain(), so the
                      engine keeps a single writer.

Both expose call_every(interval_s, fn) -> handle and cancel(handle).
cancel() is idempotent and drops callbacks that were queued but not yet run.
"""

import itertools
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

log = logging.getLogger(__name__)


@dataclass
class _Job:
    interval: float
    fn:       Callable[[], None]
    due:      float = 0.0


class ManualScheduler:
    """
    Deterministic scheduler. Used by tests and by the single-threaded
    runtime loop, which feeds it measured wall time.

    Usage:
        sched = ManualScheduler()
        h = sched.call_every(0.3, engine.tick)
        sched.advance(0.9)     # engine.tick runs three times
        sched.cancel(h)
    """

    def __init__(self):
        self._now = 0.0
        self._jobs: Dict[int, _Job] = {}
        self._ids = itertools.count(1)

    @property
    def now(self) -> float:
        return self._now

    @property
    def active(self) -> int:
        return len(self._jobs)

    def call_every(self, interval_s: float, fn: Callable[[], None]) -> int:
        if interval_s <= 0:
            raise ValueError(f"interval must be positive, got {interval_s!r}")
        handle = next(self._ids)
        self._jobs[handle] = _Job(interval_s, fn, due=self._now + interval_s)
        return handle

    def cancel(self, handle: Optional[int]):
        if handle is not None:
            self._jobs.pop(handle, None)

    def advance(self, seconds: float):
        """Move time forward, firing every due callback in due order."""
        target = self._now + max(0.0, seconds)
        while True:
            due = [(job.due, h) for h, job in self._jobs.items()
                   if job.due <= target + 1e-9]
            if not due:
                break
            when, handle = min(due)
            job = self._jobs[handle]
            self._now = max(self._now, when)
            job.due += job.interval
            job.fn()
        self._now = target


class ThreadScheduler:
    """
    Timer threads that never touch the engine themselves.

    Usage:
        sched = ThreadScheduler()
        sched.call_every(0.3, engine.tick)
        while running:
            sched.drain(timeout=0.1)
        sched.shutdown()
    """

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self._threads: Dict[int, threading.Thread] = {}
        self._stops: Dict[int, threading.Event] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def active(self) -> int:
        with self._lock:
            return len(self._threads)

    def call_every(self, interval_s: float, fn: Callable[[], None]) -> int:
        if interval_s <= 0:
            raise ValueError(f"interval must be positive, got {interval_s!r}")
        handle = next(self._ids)
        stop = threading.Event()

        def _run():
            while not stop.wait(interval_s):
                self._queue.put((handle, fn))

        thread = threading.Thread(target=_run, daemon=True,
                                  name=f"puppycare-timer-{handle}")
        with self._lock:
            self._stops[handle] = stop
            self._threads[handle] = thread
        thread.start()
        return handle

    def cancel(self, handle: Optional[int]):
        with self._lock:
            stop = self._stops.pop(handle, None)
            thread = self._threads.pop(handle, None)
        if stop is None:
            return
        stop.set()
        if thread is not threading.current_thread():
            thread.join(timeout=2.0)

    def drain(self, timeout: Optional[float] = None) -> int:
        """
        Run queued callbacks in the calling thread. With a timeout, waits
        that long for the first one. Returns how many ran.
        """
        ran = 0
        block = timeout is not None
        while True:
            try:
                handle, fn = self._queue.get(block=block, timeout=timeout)
            except queue.Empty:
                return ran
            block = False
            with self._lock:
                live = handle in self._stops
            if live:
                fn()
                ran += 1

    def shutdown(self):
        with self._lock:
            handles = list(self._stops)
        for handle in handles:
            self.cancel(handle)
        log.debug("thread scheduler stopped %d timers", len(handles))
