from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import APP_NAME, PUBLIC_WINDOW_DAYS
from ..events.model import Event
from ..store import StateStore
from ..workers.model import Worker


class PublicEventsService:
    """Read-only view of the coming week for holders of the shared key."""

    def __init__(self, store: StateStore):
        self._store = store

    def has_access(self, key: Optional[str]) -> bool:
        settings = self._store.settings
        return bool(settings.public_events_enabled) and key is not None and key == settings.public_events_key

    def window(self, *, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        now = now or now_utc()
        start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
        end = datetime.combine(now.date() + timedelta(days=PUBLIC_WINDOW_DAYS), time(23, 59, 59, 999000), tzinfo=now.tzinfo)
        return start, end

    def relevant_events(self, *, now: Optional[datetime] = None) -> list[Event]:
        start, end = self.window(now=now)
        out = [e for e in self._store.events if start <= e.starts_at <= end]
        out.sort(key=lambda e: e.starts_at)
        return out

    def _active_worker(self, worker_id: Optional[str]) -> Optional[Worker]:
        worker = self._store.get_worker(worker_id)
        if worker and worker.is_active:
            return worker
        return None

    def _pill(self, worker_id: Optional[str]) -> Optional[dict]:
        worker = self._active_worker(worker_id)
        if not worker:
            return None
        return {"name": worker.name, "position": worker.position.value, "photoUrl": worker.photo_url}

    def view(self, *, now: Optional[datetime] = None) -> dict:
        """Filtered payload: only the window's events, only active workers."""
        settings = self._store.settings
        events = []
        for e in self.relevant_events(now=now):
            s = e.schedule
            uniform = self._store.get_uniform(e.uniform_id)
            events.append(
                {
                    "id": e.id,
                    "name": e.display_name,
                    "dateTime": e.date_time,
                    "location": e.location,
                    "uniform": uniform.name if uniform else None,
                    "door": self._pill(s.responsible_door),
                    "prayer": self._pill(s.responsible_prayer),
                    "close": self._pill(s.responsible_close),
                    "deacons": [p for p in (self._pill(w) for w in s.deacons_on_duty) if p],
                }
            )
        return {"appName": APP_NAME, "logoUrl": settings.church_logo_url, "events": events}
