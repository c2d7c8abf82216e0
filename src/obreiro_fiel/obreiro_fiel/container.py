from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .access.guard import AccessGuard
from .common.scheduler import Scheduler
from .core.constants import FORM_DEBOUNCE_MS, NOTIFICATION_TTL_MS, SETTINGS_DEBOUNCE_MS
from .dashboard.service import DashboardService
from .events.service import EventService
from .forms.registry import FormRegistry
from .notifications.queue import NotificationQueue
from .persistence.adapter import PersistenceAdapter
from .persistence.mirror import StoreMirror, load_snapshot
from .persistence.storage import KeyValueStorage
from .public.service import PublicEventsService
from .settings.service import SettingsService
from .store import StateStore
from .uniforms.service import UniformService
from .users.service import AuthService, Credential, default_credentials
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    loop_lock: threading.RLock
    scheduler: Scheduler
    storage: KeyValueStorage

    notifications: NotificationQueue
    store: StateStore
    guard: AccessGuard
    forms: FormRegistry

    auth_service: AuthService
    worker_service: WorkerService
    event_service: EventService
    uniform_service: UniformService
    settings_service: SettingsService
    dashboard_service: DashboardService
    public_service: PublicEventsService


def build_container(
    *,
    storage: KeyValueStorage,
    scheduler: Scheduler,
    loop_lock: Optional[threading.RLock] = None,
    credentials: Optional[tuple[Credential, ...]] = None,
    form_debounce_ms: int = FORM_DEBOUNCE_MS,
    settings_debounce_ms: int = SETTINGS_DEBOUNCE_MS,
    notification_ttl_ms: int = NOTIFICATION_TTL_MS,
    public_base_url: str = "",
) -> Container:
    adapter = PersistenceAdapter(storage)
    snapshot = load_snapshot(adapter)

    notifications = NotificationQueue(scheduler, ttl_ms=notification_ttl_ms)
    store = StateStore(
        notifications=notifications,
        current_user=snapshot.current_user,
        workers=snapshot.workers,
        events=snapshot.events,
        uniforms=snapshot.uniforms,
        settings=snapshot.settings,
    )

    mirror = StoreMirror(adapter)
    # Seeds and repaired domains are written back right away.
    mirror.save_all(store.snapshot)
    store.subscribe_all(mirror)

    return Container(
        loop_lock=loop_lock or threading.RLock(),
        scheduler=scheduler,
        storage=storage,
        notifications=notifications,
        store=store,
        guard=AccessGuard(),
        forms=FormRegistry(store, scheduler, delay_ms=form_debounce_ms),
        auth_service=AuthService(store, credentials if credentials is not None else default_credentials()),
        worker_service=WorkerService(store),
        event_service=EventService(store),
        uniform_service=UniformService(store),
        settings_service=SettingsService(
            store,
            scheduler,
            public_base_url=public_base_url,
            autosave_delay_ms=settings_debounce_ms,
        ),
        dashboard_service=DashboardService(store),
        public_service=PublicEventsService(store),
    )
