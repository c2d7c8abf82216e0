from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import WorkerPosition, WorkerStatus


@dataclass(frozen=True)
class Worker:
    """Domain entity: a church worker (obreiro).

    Note: plain data object, no storage access.
    """

    id: str
    name: str
    position: WorkerPosition = WorkerPosition.OBREIRO
    phone: str = ""
    address: str = ""
    dob: str = ""  # YYYY-MM-DD
    photo_url: Optional[str] = None
    status: WorkerStatus = WorkerStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == WorkerStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.value,
            "phone": self.phone,
            "address": self.address,
            "dob": self.dob,
            "photoUrl": self.photo_url,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Worker":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            position=WorkerPosition(data.get("position") or WorkerPosition.OBREIRO.value),
            phone=str(data.get("phone") or ""),
            address=str(data.get("address") or ""),
            dob=str(data.get("dob") or ""),
            photo_url=data.get("photoUrl") or None,
            status=WorkerStatus(data.get("status") or WorkerStatus.ACTIVE.value),
        )
