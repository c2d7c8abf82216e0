from __future__ import annotations

import uuid
from typing import Optional

from ..common.scheduler import Scheduler
from ..core.constants import FORM_DEBOUNCE_MS
from ..core.exceptions import NotFoundError, ValidationError
from ..store import StateStore
from .session import FORM_KINDS, FormSession


class FormRegistry:
    """Open form sessions, by id. Closing a session tears it down."""

    def __init__(self, store: StateStore, scheduler: Scheduler, *, delay_ms: int = FORM_DEBOUNCE_MS):
        self._store = store
        self._scheduler = scheduler
        self._delay_ms = int(delay_ms)
        self._sessions: dict[str, FormSession] = {}

    def open(self, kind: str, record_id: Optional[str] = None) -> FormSession:
        form_cls = FORM_KINDS.get(kind)
        if form_cls is None:
            raise ValidationError(f"Formulário desconhecido: {kind}")
        if kind == "profile" and not record_id:
            raise ValidationError("Perfil sem obreiro vinculado.")

        session = form_cls(
            session_id=uuid.uuid4().hex,
            store=self._store,
            scheduler=self._scheduler,
            delay_ms=self._delay_ms,
            record_id=record_id or None,
        )
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> FormSession:
        session = self._sessions.get(session_id)
        if session is None or session.closed:
            self._sessions.pop(session_id, None)
            raise NotFoundError("Formulário não encontrado")
        return session

    def confirm(self, session_id: str):
        session = self.get(session_id)
        try:
            return session.confirm()
        finally:
            if session.closed:
                self._sessions.pop(session_id, None)

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
