from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, parse_iso_date
from ..core.constants import UPCOMING_EVENTS_LIMIT
from ..events.model import Event
from ..store import StateStore
from ..users.model import User
from ..workers.model import Worker


@dataclass(frozen=True)
class DashboardView:
    greeting_name: str
    event_of_the_day: Optional[Event]
    upcoming: list[Event]
    birthdays: list[Worker]


class DashboardService:
    def __init__(self, store: StateStore):
        self._store = store

    def todays_events(self, *, now: Optional[datetime] = None) -> list[Event]:
        now = now or now_utc()
        today = now.date()
        out = [e for e in self._store.events if e.starts_at.astimezone(now.tzinfo).date() == today]
        out.sort(key=lambda e: e.starts_at)
        return out

    def upcoming(self, *, now: Optional[datetime] = None, limit: int = UPCOMING_EVENTS_LIMIT) -> list[Event]:
        now = now or now_utc()
        out = [e for e in self._store.events if e.starts_at >= now]
        out.sort(key=lambda e: e.starts_at)
        return out[:limit]

    def birthdays_this_month(self, *, now: Optional[datetime] = None) -> list[Worker]:
        month = (now or now_utc()).month
        out = []
        for w in self._store.workers:
            if not w.is_active or not w.dob:
                continue
            try:
                if parse_iso_date(w.dob).month == month:
                    out.append(w)
            except ValueError:
                continue
        return out

    def greeting_name(self, user: User) -> str:
        worker = self._store.get_worker(user.worker_id)
        return worker.name if worker else user.username

    def build(self, user: User, *, now: Optional[datetime] = None) -> DashboardView:
        now = now or now_utc()
        todays = self.todays_events(now=now)
        return DashboardView(
            greeting_name=self.greeting_name(user),
            event_of_the_day=todays[0] if todays else None,
            upcoming=self.upcoming(now=now),
            birthdays=self.birthdays_this_month(now=now),
        )
