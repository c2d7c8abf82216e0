"""Debounced commit pipeline.

Rapid successive ``submit`` calls coalesce into a single ``commit`` of the
last value, ``delay_ms`` after the last call. The pipeline is an explicit
state object (``Idle`` / ``Pending``) so that teardown is a visible
operation: after ``close()`` nothing can reach the commit function.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from .common.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Pending(Generic[T]):
    due_at_ms: int
    value: T


DebounceState = Union[Idle, Pending]


class DebouncedCommit(Generic[T]):
    def __init__(self, commit: Callable[[T], None], delay_ms: int, scheduler: Scheduler):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._commit = commit
        self._delay_ms = int(delay_ms)
        self._scheduler = scheduler
        self._state: DebounceState = Idle()
        self._timer: Optional[TimerHandle] = None
        self._closed = False

    @property
    def state(self) -> DebounceState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return isinstance(self._state, Pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, value: T) -> None:
        """Cancel any scheduled commit and reschedule with ``value``."""
        if self._closed:
            logger.debug("submit() ignored on a closed pipeline")
            return

        self._cancel_timer()
        due = self._scheduler.now_ms() + self._delay_ms
        self._state = Pending(due_at_ms=due, value=value)

        timer: Optional[TimerHandle] = None

        def fire() -> None:
            # Only the most recently scheduled timer may commit.
            if self._timer is not timer or self._closed:
                return
            self._fire()

        timer = self._scheduler.call_later(self._delay_ms, fire)
        self._timer = timer

    def commit_now(self, value: T) -> None:
        """Unconditional, immediate commit (explicit confirmation).

        Any pending value is discarded first so it cannot land after this one.
        """
        self._cancel_timer()
        self._state = Idle()
        self._commit(value)

    def flush(self) -> bool:
        """Commit the pending value right away. Returns whether one existed."""
        if self._closed or not isinstance(self._state, Pending):
            return False
        self._cancel_timer()
        self._fire()
        return True

    def cancel(self) -> None:
        self._cancel_timer()
        self._state = Idle()

    def close(self) -> None:
        """Teardown: drop any pending commit and refuse new ones."""
        self.cancel()
        self._closed = True

    def _fire(self) -> None:
        state = self._state
        self._timer = None
        self._state = Idle()
        if isinstance(state, Pending):
            self._commit(state.value)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
