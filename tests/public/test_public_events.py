from __future__ import annotations

from datetime import datetime, timezone

from obreiro_fiel.core.enums import EventType, WorkerStatus
from obreiro_fiel.events.model import Event, EventSchedule
from obreiro_fiel.public.service import PublicEventsService
from obreiro_fiel.settings.model import AppSettings
from obreiro_fiel.store import StateStore
from obreiro_fiel.workers.model import Worker

NOW = datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc)


def make_store(notifications, *, enabled=True, events=()):
    workers = (
        Worker(id="w1", name="Carlos"),
        Worker(id="w2", name="Maria", status=WorkerStatus.INACTIVE),
    )
    return StateStore(
        notifications=notifications,
        settings=AppSettings(public_events_key="key123456", public_events_enabled=enabled),
        workers=workers,
        events=tuple(events),
    )


def event(event_id, date_time, **kwargs):
    return Event(id=event_id, type=EventType.CULTO, date_time=date_time, **kwargs)


def test_access_requires_enabled_page_and_exact_key(notifications):
    svc = PublicEventsService(make_store(notifications))
    assert svc.has_access("key123456")
    assert not svc.has_access("key12345")
    assert not svc.has_access("")
    assert not svc.has_access(None)

    disabled = PublicEventsService(make_store(notifications, enabled=False))
    assert not disabled.has_access("key123456")


def test_window_runs_from_midnight_to_seventh_day_end(notifications):
    start, end = PublicEventsService(make_store(notifications)).window(now=NOW)

    assert start == datetime(2024, 3, 10, 0, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 17, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_view_shows_window_events_in_order(notifications):
    store = make_store(
        notifications,
        events=[
            event("late", "2024-03-17T23:00:00.000Z"),
            event("earlier-today", "2024-03-10T08:00:00.000Z"),
            event("yesterday", "2024-03-09T19:00:00.000Z"),
            event("too-far", "2024-03-18T00:00:00.000Z"),
        ],
    )

    view = PublicEventsService(store).view(now=NOW)

    assert [e["id"] for e in view["events"]] == ["earlier-today", "late"]
    assert view["appName"] == "Obreiro Fiel ADACMM"


def test_inactive_workers_are_hidden(notifications):
    schedule = EventSchedule(responsible_door="w2", responsible_prayer="w1", deacons_on_duty=("w1", "w2"))
    store = make_store(notifications, events=[event("e1", "2024-03-12T19:00:00.000Z", schedule=schedule)])

    item = PublicEventsService(store).view(now=NOW)["events"][0]

    assert item["door"] is None
    assert item["prayer"]["name"] == "Carlos"
    assert [p["name"] for p in item["deacons"]] == ["Carlos"]
