from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Uniform:
    id: str
    name: str  # e.g. Social, Azul, Preto, Branco
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict) -> "Uniform":
        return cls(id=str(data["id"]), name=str(data["name"]), description=data.get("description") or None)
