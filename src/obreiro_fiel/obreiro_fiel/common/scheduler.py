"""Timers for the single logical event loop.

Every callback scheduled here runs while holding the loop lock, the same
lock HTTP views hold, so timer commits and request handlers never
interleave.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(Protocol):
    def now_ms(self) -> int:
        raise NotImplementedError

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class _ThreadTimerHandle:
    def __init__(self) -> None:
        self.cancelled = False
        self.timer: Optional[threading.Timer] = None

    def cancel(self) -> None:
        self.cancelled = True
        if self.timer is not None:
            self.timer.cancel()


class ThreadingScheduler:
    """Scheduler backed by ``threading.Timer``.

    A timer that already woke up but is still waiting for the loop lock
    re-checks its handle, so ``cancel()`` wins even in that window.
    """

    def __init__(self, loop_lock: threading.RLock):
        self._lock = loop_lock
        self._handles: set[_ThreadTimerHandle] = set()
        self._handles_guard = threading.Lock()

    def now_ms(self) -> int:
        return int(time.monotonic() * 1000)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        handle = _ThreadTimerHandle()
        timer = threading.Timer(max(delay_ms, 0) / 1000.0, self._run, args=(handle, callback))
        timer.daemon = True
        handle.timer = timer
        with self._handles_guard:
            self._handles.add(handle)
        timer.start()
        return handle

    def _run(self, handle: _ThreadTimerHandle, callback: Callable[[], None]) -> None:
        with self._handles_guard:
            self._handles.discard(handle)
        with self._lock:
            if handle.cancelled:
                return
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed")

    def shutdown(self) -> None:
        with self._handles_guard:
            pending = list(self._handles)
            self._handles.clear()
        for handle in pending:
            handle.cancel()
