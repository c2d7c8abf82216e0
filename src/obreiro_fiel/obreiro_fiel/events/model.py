from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_datetime, to_iso_utc
from ..core.enums import EventType


@dataclass(frozen=True)
class EventSchedule:
    """Who is on duty for an event. All values are worker ids."""

    responsible_door: Optional[str] = None
    responsible_close: Optional[str] = None
    responsible_prayer: Optional[str] = None
    deacons_on_duty: tuple[str, ...] = field(default_factory=tuple)

    def references(self, worker_id: str) -> bool:
        return worker_id in (
            self.responsible_door,
            self.responsible_close,
            self.responsible_prayer,
        ) or worker_id in self.deacons_on_duty

    @property
    def is_empty(self) -> bool:
        return not (self.responsible_door or self.responsible_prayer or self.responsible_close or self.deacons_on_duty)

    def to_dict(self) -> dict:
        return {
            "responsibleDoor": self.responsible_door,
            "responsibleClose": self.responsible_close,
            "responsiblePrayer": self.responsible_prayer,
            "deaconsOnDuty": list(self.deacons_on_duty),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EventSchedule":
        data = data or {}
        return cls(
            responsible_door=data.get("responsibleDoor") or None,
            responsible_close=data.get("responsibleClose") or None,
            responsible_prayer=data.get("responsiblePrayer") or None,
            deacons_on_duty=tuple(str(w) for w in (data.get("deaconsOnDuty") or []) if w),
        )


@dataclass(frozen=True)
class Event:
    id: str
    type: EventType
    date_time: str  # ISO-8601, UTC
    location: str = ""
    custom_name: Optional[str] = None  # used when type is Outro
    notes: Optional[str] = None
    schedule: EventSchedule = field(default_factory=EventSchedule)
    uniform_id: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        return parse_iso_datetime(self.date_time)

    @property
    def display_name(self) -> str:
        if self.type == EventType.OUTRO:
            return self.custom_name or self.type.value
        return self.type.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "customName": self.custom_name,
            "dateTime": self.date_time,
            "location": self.location,
            "notes": self.notes,
            "schedule": self.schedule.to_dict(),
            "uniformId": self.uniform_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            id=str(data["id"]),
            type=EventType(data["type"]),
            date_time=to_iso_utc(parse_iso_datetime(str(data["dateTime"]))),
            location=str(data.get("location") or ""),
            custom_name=data.get("customName") or None,
            notes=data.get("notes") or None,
            schedule=EventSchedule.from_dict(data.get("schedule")),
            uniform_id=data.get("uniformId") or None,
        )
