from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc, parse_iso_datetime, to_iso_utc
from ..common.validators import optional_text, require_choice, require_non_empty
from ..core.enums import EventFilter, EventType, Severity
from ..core.exceptions import NotFoundError, ValidationError
from ..store import StateStore
from .model import Event, EventSchedule

DATE_REQUIRED = "Data e Hora são obrigatórios."


def event_draft(event: Optional[Event] = None) -> dict:
    if event is None:
        return {
            "type": EventType.CULTO.value,
            "customName": EventType.CULTO.value,
            "dateTime": "",
            "location": "",
            "notes": "",
            "schedule": EventSchedule().to_dict(),
            "uniformId": "",
        }
    data = event.to_dict()
    data.pop("id")
    if not data["customName"] and event.type != EventType.OUTRO:
        data["customName"] = event.type.value
    data["notes"] = data["notes"] or ""
    data["uniformId"] = data["uniformId"] or ""
    return data


def apply_type_change(draft: dict, changes: Mapping[str, Any]) -> dict:
    """Merge ``changes`` into ``draft``; a type change resets the custom name.

    Any type but Outro uses its own label as the name; switching to Outro
    starts from an empty custom name. An explicit customName in the same
    change wins.
    """
    out = {**draft, **changes}
    if "type" in changes and "customName" not in changes:
        new_type = changes["type"]
        out["customName"] = "" if new_type == EventType.OUTRO.value else new_type
    return out


def event_fields(draft: Mapping[str, Any]) -> dict:
    event_type = require_choice(EventType, draft.get("type") or EventType.CULTO.value, "Tipo de evento inválido.")

    raw_dt = require_non_empty(draft.get("dateTime"), DATE_REQUIRED)
    try:
        date_time = to_iso_utc(parse_iso_datetime(raw_dt))
    except ValueError:
        raise ValidationError("Data e Hora inválidas.")

    if event_type == EventType.OUTRO:
        custom_name = optional_text(draft.get("customName"))
    else:
        custom_name = event_type.value

    schedule = draft.get("schedule")
    if isinstance(schedule, EventSchedule):
        pass
    elif schedule is None or isinstance(schedule, Mapping):
        schedule = EventSchedule.from_dict(dict(schedule or {}))
    else:
        raise ValidationError("Escala inválida.")

    return {
        "type": event_type,
        "date_time": date_time,
        "location": str(draft.get("location") or "").strip(),
        "custom_name": custom_name,
        "notes": optional_text(draft.get("notes")),
        "schedule": schedule,
        "uniform_id": optional_text(draft.get("uniformId")),
    }


class EventService:
    def __init__(self, store: StateStore):
        self._store = store

    def list(self, *, which: EventFilter = EventFilter.UPCOMING, now: Optional[datetime] = None) -> list[Event]:
        now = now or now_utc()
        if which == EventFilter.UPCOMING:
            out = [e for e in self._store.events if e.starts_at >= now]
        elif which == EventFilter.PAST:
            out = [e for e in self._store.events if e.starts_at < now]
        else:
            out = list(self._store.events)
        out.sort(key=lambda e: e.starts_at, reverse=which == EventFilter.PAST)
        return out

    def get(self, event_id: str) -> Event:
        event = self._store.get_event(event_id)
        if not event:
            raise NotFoundError("Evento não encontrado")
        return event

    def create(self, draft: Mapping[str, Any]) -> Event:
        try:
            fields = event_fields(draft)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        return self._store.add_event(fields)

    def update(self, event_id: str, draft: Mapping[str, Any]) -> Event:
        current = self.get(event_id)
        try:
            fields = event_fields(apply_type_change(event_draft(current), draft))
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        event = replace(current, **fields)
        self._store.update_event(event)
        return event

    def delete(self, event_id: str) -> None:
        self._store.delete_event(event_id)

    def worker_name(self, worker_id: Optional[str]) -> str:
        worker = self._store.get_worker(worker_id)
        return worker.name if worker else "N/A"

    def uniform_name(self, uniform_id: Optional[str]) -> str:
        uniform = self._store.get_uniform(uniform_id)
        return uniform.name if uniform else "N/A"

    def detail(self, event_id: str) -> dict:
        """Event with worker and uniform references resolved to names."""
        event = self.get(event_id)
        s = event.schedule
        return {
            **event.to_dict(),
            "displayName": event.display_name,
            "uniformName": self.uniform_name(event.uniform_id) if event.uniform_id else None,
            "door": self.worker_name(s.responsible_door),
            "prayer": self.worker_name(s.responsible_prayer),
            "close": self.worker_name(s.responsible_close),
            "deacons": [self.worker_name(w) for w in s.deacons_on_duty],
        }
