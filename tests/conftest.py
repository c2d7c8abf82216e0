from __future__ import annotations

import threading

import pytest

from obreiro_fiel.container import build_container
from obreiro_fiel.notifications.queue import NotificationQueue
from obreiro_fiel.persistence.seeds import default_settings, seed_events, seed_uniforms, seed_workers
from obreiro_fiel.persistence.storage import MemoryStorage
from obreiro_fiel.store import StateStore


class FakeTimer:
    def __init__(self, due_ms: int, seq: int, callback):
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock: timers only fire inside ``advance``."""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms
        self._seq = 0
        self._timers: list[FakeTimer] = []

    def now_ms(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback) -> FakeTimer:
        self._seq += 1
        timer = FakeTimer(self._now + max(delay_ms, 0), self._seq, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self._timers if not t.cancelled]

    def advance(self, ms: int) -> None:
        target = self._now + ms
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self._timers.remove(timer)
            self._now = timer.due_ms
            timer.callback()
        self._timers = [t for t in self._timers if not t.cancelled]
        self._now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def notifications(scheduler) -> NotificationQueue:
    return NotificationQueue(scheduler)


@pytest.fixture
def store(notifications) -> StateStore:
    return StateStore(
        notifications=notifications,
        settings=default_settings(),
        workers=tuple(seed_workers()),
        events=tuple(seed_events()),
        uniforms=tuple(seed_uniforms()),
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def container(storage, scheduler):
    return build_container(storage=storage, scheduler=scheduler, loop_lock=threading.RLock())


@pytest.fixture
def app(monkeypatch, storage, scheduler):
    monkeypatch.setenv("APP_ENV", "testing")
    from obreiro_fiel.main import create_app

    return create_app(storage=storage, scheduler=scheduler)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str = "Altar em Chamas", password: str = "Adacmm2020"):
        return client.post("/login", json={"username": username, "password": password})

    return _login
