from __future__ import annotations

from typing import Optional

from flask import Flask, redirect

from ..access.guard import LANDING_PATH
from ..common.http import guarded, json_body, ok
from ..container import Container

# Which view a form kind belongs to; the same roles apply to editing.
_FORM_VIEWS = {
    "worker": "workers",
    "uniform": "uniforms",
    "event": "event-editor",
    "profile": "account-settings",
}


def _record_dict(record) -> dict:
    return record.to_dict() if record is not None else None


def register(app: Flask, container: Container) -> None:
    forms = container.forms

    def _denied(kind: str, record_id: Optional[str] = None):
        """Redirect when the current user may not use a form of ``kind``."""
        user = container.store.current_user
        decision = container.guard.check(user, _FORM_VIEWS.get(kind, kind))
        if not decision.allowed:
            return redirect(decision.redirect_to)
        if kind == "profile" and record_id != user.worker_id:
            return redirect(LANDING_PATH)
        return None

    @app.route("/forms", methods=["POST"], endpoint="forms_open")
    @guarded(container, "forms")
    def forms_open():
        data = json_body()
        kind = str(data.get("kind") or "")
        user = container.store.current_user

        denied = _denied(kind, user.worker_id)
        if denied is not None:
            return denied

        record_id = user.worker_id if kind == "profile" else data.get("recordId")
        session = forms.open(kind, record_id)
        return ok(session.to_dict(), status=201)

    @app.route("/forms/<session_id>", methods=["GET"], endpoint="forms_get")
    @guarded(container, "forms")
    def forms_get(session_id: str):
        session = forms.get(session_id)
        return _denied(session.kind, session.record_id) or ok(session.to_dict())

    @app.route("/forms/<session_id>", methods=["PATCH"], endpoint="forms_change")
    @guarded(container, "forms")
    def forms_change(session_id: str):
        session = forms.get(session_id)
        denied = _denied(session.kind, session.record_id)
        if denied is not None:
            return denied
        session.change(json_body())
        return ok(session.to_dict())

    @app.route("/forms/<session_id>/confirm", methods=["POST"], endpoint="forms_confirm")
    @guarded(container, "forms")
    def forms_confirm(session_id: str):
        session = forms.get(session_id)
        denied = _denied(session.kind, session.record_id)
        if denied is not None:
            return denied
        return ok(_record_dict(forms.confirm(session_id)))

    @app.route("/forms/<session_id>", methods=["DELETE"], endpoint="forms_close")
    @guarded(container, "forms")
    def forms_close(session_id: str):
        session = forms.get(session_id)
        denied = _denied(session.kind, session.record_id)
        if denied is not None:
            return denied
        forms.close(session_id)
        return ok()
