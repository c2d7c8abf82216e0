"""The State Store: sole in-memory source of truth.

Collections are exposed read-only (tuples of frozen records); every change
goes through one of the command methods below, which replace the affected
collection, tell the domain's subscribers (the persistence mirror) and,
where the user expects it, enqueue a confirmation notification.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from .common.ids import new_record_id
from .core.enums import Domain, Severity
from .core.exceptions import NotFoundError, ReferentialIntegrityError
from .events.model import Event
from .notifications.queue import NotificationQueue
from .settings.model import AppSettings, SettingsPatch
from .uniforms.model import Uniform
from .users.model import User
from .workers.model import Worker

logger = logging.getLogger(__name__)

Listener = Callable[[Domain, Any], None]
R = TypeVar("R", Worker, Event, Uniform)

WORKER_IN_USE = (
    "Este obreiro está escalado em um ou mais eventos e não pode ser excluído. "
    "Remova-o das escalas primeiro."
)
UNIFORM_IN_USE = (
    "Este uniforme está sendo usado em um ou mais eventos e não pode ser excluído. "
    "Remova-o dos eventos primeiro."
)


class StateStore:
    def __init__(
        self,
        *,
        notifications: NotificationQueue,
        settings: AppSettings,
        current_user: Optional[User] = None,
        workers: tuple[Worker, ...] = (),
        events: tuple[Event, ...] = (),
        uniforms: tuple[Uniform, ...] = (),
    ):
        self._notifications = notifications
        self._current_user = current_user
        self._workers = tuple(workers)
        self._events = tuple(events)
        self._uniforms = tuple(uniforms)
        self._settings = settings
        self._listeners: dict[Domain, list[Listener]] = {d: [] for d in Domain}

    # ---- subscriptions ----

    def subscribe(self, domain: Domain, listener: Listener) -> Callable[[], None]:
        self._listeners[domain].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[domain]:
                self._listeners[domain].remove(listener)

        return unsubscribe

    def subscribe_all(self, listener: Listener) -> None:
        for domain in Domain:
            self.subscribe(domain, listener)

    def _emit(self, domain: Domain, value: Any) -> None:
        for listener in list(self._listeners[domain]):
            listener(domain, value)

    def snapshot(self, domain: Domain) -> Any:
        return {
            Domain.USER: self._current_user,
            Domain.WORKERS: self._workers,
            Domain.EVENTS: self._events,
            Domain.UNIFORMS: self._uniforms,
            Domain.SETTINGS: self._settings,
        }[domain]

    # ---- reads ----

    @property
    def notifications(self) -> NotificationQueue:
        return self._notifications

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def workers(self) -> tuple[Worker, ...]:
        return self._workers

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    @property
    def uniforms(self) -> tuple[Uniform, ...]:
        return self._uniforms

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def get_worker(self, worker_id: Optional[str]) -> Optional[Worker]:
        return _find(self._workers, worker_id)

    def get_event(self, event_id: Optional[str]) -> Optional[Event]:
        return _find(self._events, event_id)

    def get_uniform(self, uniform_id: Optional[str]) -> Optional[Uniform]:
        return _find(self._uniforms, uniform_id)

    def is_worker_scheduled(self, worker_id: str) -> bool:
        return any(e.schedule.references(worker_id) for e in self._events)

    def is_uniform_in_use(self, uniform_id: str) -> bool:
        return any(e.uniform_id == uniform_id for e in self._events)

    # ---- commands: current user ----

    def set_current_user(self, user: Optional[User]) -> None:
        self._current_user = user
        self._emit(Domain.USER, user)

    # ---- commands: workers ----

    def add_worker(self, data: Mapping[str, Any]) -> Worker:
        worker = Worker(id=_unused_id("w", self._workers), **_without_id(data))
        self._workers = self._workers + (worker,)
        self._emit(Domain.WORKERS, self._workers)
        self._notifications.enqueue("Obreiro adicionado com sucesso!", Severity.SUCCESS)
        return worker

    def update_worker(self, worker: Worker) -> bool:
        updated = _replace_by_id(self._workers, worker)
        if updated is None:
            logger.info("update_worker: %s no longer exists, commit dropped", worker.id)
            return False
        self._workers = updated
        self._emit(Domain.WORKERS, self._workers)
        return True

    def delete_worker(self, worker_id: str) -> None:
        if self.get_worker(worker_id) is None:
            raise NotFoundError("Obreiro não encontrado")
        if self.is_worker_scheduled(worker_id):
            raise ReferentialIntegrityError(WORKER_IN_USE)
        self._workers = tuple(w for w in self._workers if w.id != worker_id)
        self._emit(Domain.WORKERS, self._workers)
        self._notifications.enqueue("Obreiro excluído.", Severity.SUCCESS)

    # ---- commands: events ----

    def add_event(self, data: Mapping[str, Any]) -> Event:
        event = Event(id=_unused_id("e", self._events), **_without_id(data))
        self._events = self._events + (event,)
        self._emit(Domain.EVENTS, self._events)
        self._notifications.enqueue("Evento adicionado com sucesso!", Severity.SUCCESS)
        return event

    def update_event(self, event: Event) -> bool:
        updated = _replace_by_id(self._events, event)
        if updated is None:
            logger.info("update_event: %s no longer exists, commit dropped", event.id)
            return False
        self._events = updated
        self._emit(Domain.EVENTS, self._events)
        return True

    def delete_event(self, event_id: str) -> None:
        if self.get_event(event_id) is None:
            raise NotFoundError("Evento não encontrado")
        self._events = tuple(e for e in self._events if e.id != event_id)
        self._emit(Domain.EVENTS, self._events)
        self._notifications.enqueue("Evento excluído.", Severity.SUCCESS)

    # ---- commands: uniforms ----

    def add_uniform(self, data: Mapping[str, Any]) -> Uniform:
        uniform = Uniform(id=_unused_id("u", self._uniforms), **_without_id(data))
        self._uniforms = self._uniforms + (uniform,)
        self._emit(Domain.UNIFORMS, self._uniforms)
        self._notifications.enqueue("Uniforme adicionado com sucesso!", Severity.SUCCESS)
        return uniform

    def update_uniform(self, uniform: Uniform) -> bool:
        updated = _replace_by_id(self._uniforms, uniform)
        if updated is None:
            logger.info("update_uniform: %s no longer exists, commit dropped", uniform.id)
            return False
        self._uniforms = updated
        self._emit(Domain.UNIFORMS, self._uniforms)
        return True

    def delete_uniform(self, uniform_id: str) -> None:
        if self.get_uniform(uniform_id) is None:
            raise NotFoundError("Uniforme não encontrado")
        if self.is_uniform_in_use(uniform_id):
            raise ReferentialIntegrityError(UNIFORM_IN_USE)
        self._uniforms = tuple(u for u in self._uniforms if u.id != uniform_id)
        self._emit(Domain.UNIFORMS, self._uniforms)
        self._notifications.enqueue("Uniforme excluído.", Severity.SUCCESS)

    # ---- commands: settings ----

    def update_settings(self, patch: SettingsPatch) -> AppSettings:
        self._settings = patch.apply(self._settings)
        self._emit(Domain.SETTINGS, self._settings)
        self._notifications.enqueue("Configurações salvas!", Severity.SUCCESS)
        return self._settings


def _find(items: tuple[R, ...], record_id: Optional[str]) -> Optional[R]:
    if not record_id:
        return None
    for item in items:
        if item.id == record_id:
            return item
    return None


def _replace_by_id(items: tuple[R, ...], record: R) -> Optional[tuple[R, ...]]:
    found = False
    out = []
    for item in items:
        if item.id == record.id:
            out.append(record)
            found = True
        else:
            out.append(item)
    return tuple(out) if found else None


def _unused_id(prefix: str, items: tuple[R, ...]) -> str:
    taken = {item.id for item in items}
    record_id = new_record_id(prefix)
    while record_id in taken:
        record_id = new_record_id(prefix)
    return record_id


def _without_id(data: Mapping[str, Any]) -> dict:
    return {k: v for k, v in data.items() if k != "id"}
