from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_choice, require_non_empty
from ..core.enums import Severity, WorkerPosition, WorkerStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..store import StateStore
from .model import Worker


def worker_draft(worker: Optional[Worker] = None) -> dict:
    """Initial form values (wire names) for a new or existing worker."""
    if worker is None:
        return {
            "name": "",
            "position": WorkerPosition.OBREIRO.value,
            "phone": "",
            "address": "",
            "dob": "",
            "photoUrl": "",
            "status": WorkerStatus.ACTIVE.value,
        }
    data = worker.to_dict()
    data.pop("id")
    data["photoUrl"] = data["photoUrl"] or ""
    return data


def worker_fields(draft: Mapping[str, Any]) -> dict:
    """Validate a draft and turn it into Worker constructor arguments.

    Omitted position/status fall back to Obreiro/Ativo.
    """
    name = require_non_empty(draft.get("name"), "O nome do obreiro é obrigatório.")
    position = require_choice(WorkerPosition, draft.get("position") or WorkerPosition.OBREIRO.value, "Cargo inválido.")
    status = require_choice(WorkerStatus, draft.get("status") or WorkerStatus.ACTIVE.value, "Status inválido.")

    dob = str(draft.get("dob") or "").strip()
    if dob:
        try:
            parse_iso_date(dob)
        except ValueError:
            raise ValidationError("Data de nascimento inválida.")

    return {
        "name": name,
        "position": position,
        "phone": str(draft.get("phone") or "").strip(),
        "address": str(draft.get("address") or "").strip(),
        "dob": dob,
        "photo_url": optional_text(draft.get("photoUrl")),
        "status": status,
    }


def whatsapp_link(phone: str) -> str:
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return "#"
    return f"https://wa.me/{digits if digits.startswith('55') else '55' + digits}"


class WorkerService:
    """Use case: manage workers (admin)."""

    def __init__(self, store: StateStore):
        self._store = store

    def list(
        self,
        *,
        search: str = "",
        status: Optional[WorkerStatus] = None,
        position: Optional[WorkerPosition] = None,
    ) -> list[Worker]:
        term = (search or "").strip().lower()
        out = [
            w
            for w in self._store.workers
            if (not term or term in w.name.lower() or term in w.position.value.lower())
            and (status is None or w.status == status)
            and (position is None or w.position == position)
        ]
        out.sort(key=lambda w: w.name.lower())
        return out

    def get(self, worker_id: str) -> Worker:
        worker = self._store.get_worker(worker_id)
        if not worker:
            raise NotFoundError("Obreiro não encontrado")
        return worker

    def create(self, draft: Mapping[str, Any]) -> Worker:
        try:
            fields = worker_fields(draft)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        return self._store.add_worker(fields)

    def update(self, worker_id: str, draft: Mapping[str, Any]) -> Worker:
        current = self.get(worker_id)
        merged = {**worker_draft(current), **draft}
        try:
            fields = worker_fields(merged)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise
        worker = replace(current, **fields)
        self._store.update_worker(worker)
        return worker

    def delete(self, worker_id: str) -> None:
        self._store.delete_worker(worker_id)

    def can_delete(self, worker_id: str) -> bool:
        return not self._store.is_worker_scheduled(worker_id)

    def active(self) -> list[Worker]:
        return [w for w in self._store.workers if w.is_active]

    def deacon_candidates(self) -> list[Worker]:
        """Active workers eligible for the deacons-on-duty slot."""
        eligible = {WorkerPosition.DIACONO, WorkerPosition.OBREIRO, WorkerPosition.AUXILIAR_DE_OBRA}
        return [w for w in self.active() if w.position in eligible]
