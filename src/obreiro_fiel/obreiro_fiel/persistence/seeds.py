"""Built-in data used when storage is empty or unreadable."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso_utc
from ..common.ids import new_public_key
from ..core.enums import EventType, WorkerPosition, WorkerStatus
from ..events.model import Event, EventSchedule
from ..settings.model import AppSettings
from ..uniforms.model import Uniform
from ..workers.model import Worker


def seed_workers() -> list[Worker]:
    return [
        Worker(
            id="w1",
            name="Pastor João Silva (Admin)",
            position=WorkerPosition.PASTOR_PRESIDENTE,
            phone="5511999990001",
            address="Rua Principal, 123",
            dob="1970-05-15",
            photo_url="https://picsum.photos/seed/pastorjoao/100/100",
        ),
        Worker(
            id="w2",
            name="Diácono Carlos Lima (Obreiro)",
            position=WorkerPosition.DIACONO,
            phone="5511999990002",
            address="Av. Secundária, 456",
            dob="1985-11-20",
            photo_url="https://picsum.photos/seed/diaconocarlos/100/100",
        ),
        Worker(
            id="w3",
            name="Missionária Ana Costa (Obreira)",
            position=WorkerPosition.MISSIONARIO,
            phone="5511999990003",
            address="Travessa Flores, 789",
            dob="1990-02-10",
            photo_url="https://picsum.photos/seed/missionariaana/100/100",
        ),
        Worker(
            id="w4",
            name="Obreira Maria Souza",
            position=WorkerPosition.OBREIRO,
            phone="5511999990004",
            address="Alameda Bosque, 101",
            dob="1995-07-25",
            photo_url="https://picsum.photos/seed/obreiramaria/100/100",
            status=WorkerStatus.INACTIVE,
        ),
    ]


def seed_uniforms() -> list[Uniform]:
    return [
        Uniform(
            id="u1",
            name="Social Completo",
            description="Terno e gravata para homens, vestido ou saia social para mulheres.",
        ),
        Uniform(id="u2", name="Camisa Azul Oficial", description="Camisa azul da igreja com calça/saia preta."),
    ]


def next_sunday(now: Optional[datetime] = None) -> date:
    """Today when it is Sunday before 19:00, otherwise the coming Sunday.

    Read in the zone of ``now``; by default the machine's local time, so the
    19:00 cut-off is the local service time and not 19:00 UTC.
    """
    now = now or now_utc().astimezone()
    days_ahead = (6 - now.weekday()) % 7
    if days_ahead == 0 and now.hour >= 19:
        days_ahead = 7
    return now.date() + timedelta(days=days_ahead)


def seed_events(now: Optional[datetime] = None) -> list[Event]:
    now = now or now_utc().astimezone()
    sunday = datetime.combine(next_sunday(now), time(19, 0), tzinfo=timezone.utc)
    vigil = datetime.combine(now.date() + timedelta(days=5), time(22, 0), tzinfo=timezone.utc)
    return [
        Event(
            id="e1",
            type=EventType.CULTO,
            custom_name="Culto de Domingo",
            date_time=to_iso_utc(sunday),
            location="Templo Principal",
            notes="Santa Ceia neste culto.",
            schedule=EventSchedule(
                responsible_door="w2",
                responsible_close="w1",
                responsible_prayer="w3",
                deacons_on_duty=("w2",),
            ),
            uniform_id="u1",
        ),
        Event(
            id="e2",
            type=EventType.VIGILIA,
            date_time=to_iso_utc(vigil),
            location="Salão Anexo",
            schedule=EventSchedule(responsible_prayer="w3"),
            uniform_id="u2",
        ),
    ]


def default_settings() -> AppSettings:
    return AppSettings(public_events_key=new_public_key(with_suffix=False))
