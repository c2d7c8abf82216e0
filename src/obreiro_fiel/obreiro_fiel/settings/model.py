from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Optional


class _Unset:
    _instance: Optional["_Unset"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class AppSettings:
    public_events_key: str
    public_events_enabled: bool = False
    church_logo_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "churchLogoUrl": self.church_logo_url or "",
            "publicEventsEnabled": self.public_events_enabled,
            "publicEventsKey": self.public_events_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        enabled = data.get("publicEventsEnabled", False)
        if not isinstance(enabled, bool):
            raise TypeError("publicEventsEnabled must be a boolean")
        return cls(
            public_events_key=str(data["publicEventsKey"]),
            public_events_enabled=enabled,
            church_logo_url=data.get("churchLogoUrl") or None,
        )


@dataclass(frozen=True)
class SettingsPatch:
    """Tagged partial update of AppSettings.

    A field left as ``UNSET`` is not touched; any other value, including
    ``None`` for the logo, is written. This keeps "omitted" and "cleared"
    apart.
    """

    church_logo_url: Any = UNSET
    public_events_enabled: Any = UNSET
    public_events_key: Any = UNSET

    _WIRE_NAMES = {
        "churchLogoUrl": "church_logo_url",
        "publicEventsEnabled": "public_events_enabled",
        "publicEventsKey": "public_events_key",
    }

    @property
    def changed_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not UNSET)

    def merged_with(self, later: "SettingsPatch") -> "SettingsPatch":
        """Combine two patches; fields set in ``later`` win."""
        changes = {name: getattr(later, name) for name in later.changed_fields}
        return replace(self, **changes)

    def apply(self, settings: AppSettings) -> AppSettings:
        changes = {name: getattr(self, name) for name in self.changed_fields}
        if "church_logo_url" in changes:
            changes["church_logo_url"] = changes["church_logo_url"] or None
        return replace(settings, **changes)

    @classmethod
    def from_wire(cls, data: dict) -> "SettingsPatch":
        kwargs = {}
        for wire, attr in cls._WIRE_NAMES.items():
            if wire in data:
                kwargs[attr] = data[wire]
        return cls(**kwargs)
