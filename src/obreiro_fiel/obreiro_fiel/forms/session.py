"""Form sessions: the owners of a PendingEdit.

A session keeps the draft being typed, autosaves it through a debounced
pipeline when it edits an existing record, and commits immediately when the
user confirms. Closing a session (the form going away) cancels any pending
autosave so it can never land on a stale record.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.scheduler import Scheduler
from ..core.enums import Severity
from ..core.exceptions import NotFoundError, ValidationError
from ..debounce import DebouncedCommit
from ..events.service import apply_type_change, event_draft, event_fields
from ..store import StateStore
from ..uniforms.service import uniform_draft, uniform_fields
from ..workers.model import Worker
from ..workers.service import worker_draft, worker_fields

logger = logging.getLogger(__name__)


class FormSession:
    kind = ""
    label = ""

    def __init__(
        self,
        *,
        session_id: str,
        store: StateStore,
        scheduler: Scheduler,
        delay_ms: int,
        record_id: Optional[str] = None,
    ):
        self.session_id = session_id
        self._store = store
        self.record_id = record_id
        self._draft = self._initial_draft()
        self._pipeline: DebouncedCommit[dict] = DebouncedCommit(self._commit_existing, delay_ms, scheduler)
        self._closed = False

    # ---- hooks ----

    def _load(self) -> Any:
        raise NotImplementedError

    def _initial_draft(self) -> dict:
        raise NotImplementedError

    def _fields(self, draft: Mapping[str, Any]) -> dict:
        raise NotImplementedError

    def _update(self, current: Any, fields: dict) -> bool:
        raise NotImplementedError

    def _add(self, fields: dict) -> Any:
        raise NotImplementedError

    def _merge(self, draft: dict, changes: Mapping[str, Any]) -> dict:
        return {**draft, **changes}

    # ---- public API ----

    @property
    def is_editing(self) -> bool:
        return self.record_id is not None

    @property
    def autosaves(self) -> bool:
        return self.is_editing

    @property
    def draft(self) -> dict:
        return dict(self._draft)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_pending_autosave(self) -> bool:
        return self._pipeline.is_pending

    def change(self, changes: Mapping[str, Any]) -> dict:
        if self._closed:
            raise ValidationError("Formulário já foi fechado.")
        self._draft = self._merge(self._draft, changes)
        if self.autosaves:
            self._pipeline.submit(dict(self._draft))
        return self.draft

    def confirm(self) -> Any:
        """Explicit "Done"/"Add": validate and commit right now, then close."""
        if self._closed:
            raise ValidationError("Formulário já foi fechado.")
        try:
            fields = self._fields(self._draft)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise

        if self.is_editing:
            if self._load() is None:
                self.close()
                raise NotFoundError("Registro não encontrado")
            self._pipeline.commit_now(dict(self._draft))
            result = self._load()
        else:
            result = self._add(fields)
        self.close()
        return result

    def close(self) -> None:
        self._pipeline.close()
        self._closed = True

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "kind": self.kind,
            "recordId": self.record_id,
            "draft": self.draft,
            "autosavePending": self.has_pending_autosave,
        }

    # ---- internals ----

    def _commit_existing(self, draft: dict) -> None:
        current = self._load()
        if current is None:
            logger.info("%s %s was removed; autosave dropped", self.kind, self.record_id)
            return
        try:
            fields = self._fields(draft)
        except ValidationError as e:
            # Incomplete drafts are simply not autosaved; confirm() reports errors.
            logger.debug("autosave skipped for %s %s: %s", self.kind, self.record_id, e)
            return
        if self._update(current, fields):
            self._store.notifications.enqueue(f"{self.label} salvo(s) com sucesso!", Severity.SUCCESS)


class WorkerForm(FormSession):
    kind = "worker"
    label = "Obreiros"

    def _load(self) -> Optional[Worker]:
        return self._store.get_worker(self.record_id)

    def _initial_draft(self) -> dict:
        if self.record_id is None:
            return worker_draft()
        worker = self._load()
        if worker is None:
            raise NotFoundError("Obreiro não encontrado")
        return worker_draft(worker)

    def _fields(self, draft: Mapping[str, Any]) -> dict:
        return worker_fields(draft)

    def _update(self, current: Any, fields: dict) -> bool:
        return self._store.update_worker(replace(current, **fields))

    def _add(self, fields: dict) -> Any:
        return self._store.add_worker(fields)


class ProfileForm(WorkerForm):
    """The logged-in user's own worker record.

    Status is not editable; position only by an admin.
    """

    kind = "profile"
    label = "Perfil"

    def _locked(self) -> tuple[str, ...]:
        user = self._store.current_user
        if user is not None and user.is_admin:
            return ("id", "status")
        return ("id", "status", "position")

    def _initial_draft(self) -> dict:
        draft = super()._initial_draft()
        draft.pop("status", None)
        return draft

    def _merge(self, draft: dict, changes: Mapping[str, Any]) -> dict:
        return {**draft, **{k: v for k, v in changes.items() if k not in self._locked()}}

    def _fields(self, draft: Mapping[str, Any]) -> dict:
        current = self._load()
        pinned = {}
        if current is not None:
            pinned["status"] = current.status.value
            if "position" in self._locked():
                pinned["position"] = current.position.value
        return worker_fields({**draft, **pinned})


class EventForm(FormSession):
    kind = "event"
    label = "Eventos"

    def _load(self) -> Any:
        return self._store.get_event(self.record_id)

    def _initial_draft(self) -> dict:
        if self.record_id is None:
            return event_draft()
        event = self._load()
        if event is None:
            raise NotFoundError("Evento não encontrado")
        return event_draft(event)

    def _merge(self, draft: dict, changes: Mapping[str, Any]) -> dict:
        if "schedule" in changes and isinstance(changes["schedule"], Mapping):
            changes = {**changes, "schedule": {**(draft.get("schedule") or {}), **changes["schedule"]}}
        return apply_type_change(draft, changes)

    def _fields(self, draft: Mapping[str, Any]) -> dict:
        return event_fields(draft)

    def _update(self, current: Any, fields: dict) -> bool:
        return self._store.update_event(replace(current, **fields))

    def _add(self, fields: dict) -> Any:
        return self._store.add_event(fields)


class UniformForm(FormSession):
    kind = "uniform"
    label = "Uniformes"

    def _load(self) -> Any:
        return self._store.get_uniform(self.record_id)

    def _initial_draft(self) -> dict:
        if self.record_id is None:
            return uniform_draft()
        uniform = self._load()
        if uniform is None:
            raise NotFoundError("Uniforme não encontrado")
        return uniform_draft(uniform)

    def _fields(self, draft: Mapping[str, Any]) -> dict:
        return uniform_fields(draft)

    def _update(self, current: Any, fields: dict) -> bool:
        return self._store.update_uniform(replace(current, **fields))

    def _add(self, fields: dict) -> Any:
        return self._store.add_uniform(fields)


FORM_KINDS: dict[str, type[FormSession]] = {
    WorkerForm.kind: WorkerForm,
    ProfileForm.kind: ProfileForm,
    EventForm.kind: EventForm,
    UniformForm.kind: UniformForm,
}
