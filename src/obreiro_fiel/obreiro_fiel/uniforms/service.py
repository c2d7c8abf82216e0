from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Severity
from ..core.exceptions import NotFoundError, ValidationError
from ..store import StateStore
from .model import Uniform


def uniform_draft(uniform: Optional[Uniform] = None) -> dict:
    if uniform is None:
        return {"name": "", "description": ""}
    return {"name": uniform.name, "description": uniform.description or ""}


def uniform_fields(draft: Mapping[str, Any]) -> dict:
    return {
        "name": require_non_empty(draft.get("name"), "O nome do uniforme é obrigatório."),
        "description": optional_text(draft.get("description")),
    }


class UniformService:
    def __init__(self, store: StateStore):
        self._store = store

    def list(self, *, search: str = "") -> list[Uniform]:
        term = (search or "").strip().lower()
        out = [u for u in self._store.uniforms if term in u.name.lower()]
        out.sort(key=lambda u: u.name.lower())
        return out

    def get(self, uniform_id: str) -> Uniform:
        uniform = self._store.get_uniform(uniform_id)
        if not uniform:
            raise NotFoundError("Uniforme não encontrado")
        return uniform

    def create(self, draft: Mapping[str, Any]) -> Uniform:
        try:
            fields = uniform_fields(draft)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        return self._store.add_uniform(fields)

    def update(self, uniform_id: str, draft: Mapping[str, Any]) -> Uniform:
        current = self.get(uniform_id)
        try:
            fields = uniform_fields({**uniform_draft(current), **draft})
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        uniform = replace(current, **fields)
        self._store.update_uniform(uniform)
        return uniform

    def delete(self, uniform_id: str) -> None:
        self._store.delete_uniform(uniform_id)

    def can_delete(self, uniform_id: str) -> bool:
        return not self._store.is_uniform_in_use(uniform_id)
