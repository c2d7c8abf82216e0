from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """The logged-in account. Optionally linked to a Worker record."""

    id: str
    username: str
    access_level: Role
    worker_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.access_level == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "accessLevel": self.access_level.value,
            "workerId": self.worker_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            username=str(data["username"]),
            access_level=Role(data["accessLevel"]),
            worker_id=data.get("workerId") or None,
        )
