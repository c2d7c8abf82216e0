"""Wire the State Store to storage: rehydrate at startup, mirror on change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Type, TypeVar

from ..core.constants import (
    STORAGE_KEY_EVENTS,
    STORAGE_KEY_SETTINGS,
    STORAGE_KEY_UNIFORMS,
    STORAGE_KEY_USER,
    STORAGE_KEY_WORKERS,
)
from ..core.enums import Domain
from ..events.model import Event
from ..settings.model import AppSettings
from ..uniforms.model import Uniform
from ..users.model import User
from ..workers.model import Worker
from .adapter import PersistenceAdapter
from .seeds import default_settings, seed_events, seed_uniforms, seed_workers

R = TypeVar("R", Worker, Event, Uniform)

STORAGE_KEYS = {
    Domain.USER: STORAGE_KEY_USER,
    Domain.WORKERS: STORAGE_KEY_WORKERS,
    Domain.EVENTS: STORAGE_KEY_EVENTS,
    Domain.UNIFORMS: STORAGE_KEY_UNIFORMS,
    Domain.SETTINGS: STORAGE_KEY_SETTINGS,
}


@dataclass(frozen=True)
class StateSnapshot:
    current_user: Optional[User]
    workers: tuple[Worker, ...]
    events: tuple[Event, ...]
    uniforms: tuple[Uniform, ...]
    settings: AppSettings


def _collection_decoder(record_cls: Type[R]) -> Callable[[Any], tuple[R, ...]]:
    def decode(payload: Any) -> tuple[R, ...]:
        if not isinstance(payload, list):
            raise TypeError(f"expected a list of {record_cls.__name__}")
        records = tuple(record_cls.from_dict(item) for item in payload)
        ids = [r.id for r in records]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate {record_cls.__name__} ids")
        return records

    return decode


def _decode_user(payload: Any) -> Optional[User]:
    if payload is None:
        return None
    return User.from_dict(payload)


def _decode_settings(payload: Any) -> AppSettings:
    if not isinstance(payload, dict):
        raise TypeError("expected an object")
    return AppSettings.from_dict(payload)


def _encode_collection(records: Sequence[R]) -> list:
    return [r.to_dict() for r in records]


_ENCODERS: dict[Domain, Callable[[Any], Any]] = {
    Domain.USER: lambda user: user.to_dict() if user is not None else None,
    Domain.WORKERS: _encode_collection,
    Domain.EVENTS: _encode_collection,
    Domain.UNIFORMS: _encode_collection,
    Domain.SETTINGS: lambda settings: settings.to_dict(),
}


def load_snapshot(adapter: PersistenceAdapter) -> StateSnapshot:
    """Rehydrate each domain independently; unreadable ones get their seed."""
    return StateSnapshot(
        current_user=adapter.load(STORAGE_KEYS[Domain.USER], _decode_user, lambda: None),
        workers=adapter.load(
            STORAGE_KEYS[Domain.WORKERS], _collection_decoder(Worker), lambda: tuple(seed_workers())
        ),
        events=adapter.load(STORAGE_KEYS[Domain.EVENTS], _collection_decoder(Event), lambda: tuple(seed_events())),
        uniforms=adapter.load(
            STORAGE_KEYS[Domain.UNIFORMS], _collection_decoder(Uniform), lambda: tuple(seed_uniforms())
        ),
        settings=adapter.load(STORAGE_KEYS[Domain.SETTINGS], _decode_settings, default_settings),
    )


class StoreMirror:
    """Store listener that writes the full snapshot of a changed domain."""

    def __init__(self, adapter: PersistenceAdapter):
        self._adapter = adapter

    def __call__(self, domain: Domain, value: Any) -> None:
        self._adapter.save(STORAGE_KEYS[domain], value, _ENCODERS[domain])

    def save_all(self, snapshot: Callable[[Domain], Any]) -> None:
        for domain in Domain:
            self(domain, snapshot(domain))
