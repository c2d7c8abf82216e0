from __future__ import annotations

import pytest

from obreiro_fiel.core.enums import Role, WorkerPosition, WorkerStatus
from obreiro_fiel.core.exceptions import NotFoundError, ValidationError
from obreiro_fiel.forms.registry import FormRegistry
from obreiro_fiel.users.model import User

SAVED = "Obreiros salvo(s) com sucesso!"


def messages(store):
    return [e.message for e in store.notifications.entries()]


def test_edits_autosave_once_after_typing_stops(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker", "w2")

    for name in ("C", "Ca", "Carlos"):
        session.change({"name": name})
        scheduler.advance(500)

    assert store.get_worker("w2").name == "Diácono Carlos Lima (Obreiro)"

    scheduler.advance(1000)
    assert store.get_worker("w2").name == "Carlos"
    assert messages(store).count(SAVED) == 1


def test_closing_the_form_cancels_pending_autosave(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker", "w2")

    session.change({"name": "Rascunho"})
    scheduler.advance(1000)
    forms.close(session.session_id)
    scheduler.advance(5000)

    assert store.get_worker("w2").name == "Diácono Carlos Lima (Obreiro)"
    assert SAVED not in messages(store)
    with pytest.raises(NotFoundError):
        forms.get(session.session_id)


def test_pending_autosave_for_deleted_record_is_dropped(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker", "w4")

    session.change({"name": "Maria S."})
    store.delete_worker("w4")
    scheduler.advance(1500)

    assert store.get_worker("w4") is None
    assert all(w.name != "Maria S." for w in store.workers)


def test_invalid_draft_is_not_autosaved(store, scheduler):
    session = FormRegistry(store, scheduler).open("worker", "w2")

    session.change({"name": ""})
    scheduler.advance(1500)

    assert store.get_worker("w2").name == "Diácono Carlos Lima (Obreiro)"


def test_confirm_commits_now_and_supersedes_pending(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker", "w2")

    session.change({"phone": "11 90000-0000"})
    worker = forms.confirm(session.session_id)

    assert worker.phone == "11 90000-0000"
    assert store.get_worker("w2").phone == "11 90000-0000"
    assert len(forms) == 0

    assert messages(store).count(SAVED) == 1
    scheduler.advance(1500)
    assert messages(store).count(SAVED) == 1


def test_new_record_form_only_adds_on_confirm(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("uniform")
    count = len(store.uniforms)

    session.change({"name": "Jaleco", "description": "Branco"})
    scheduler.advance(5000)
    assert len(store.uniforms) == count

    uniform = forms.confirm(session.session_id)
    assert len(store.uniforms) == count + 1
    assert uniform.description == "Branco"
    assert "Uniforme adicionado com sucesso!" in messages(store)


def test_confirm_with_invalid_draft_reports_and_keeps_form_open(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker")

    with pytest.raises(ValidationError):
        forms.confirm(session.session_id)

    assert "O nome do obreiro é obrigatório." in messages(store)
    assert forms.get(session.session_id) is session


def test_confirm_after_record_removed(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("uniform", "u2")
    store.delete_event("e2")
    store.delete_uniform("u2")

    with pytest.raises(NotFoundError):
        forms.confirm(session.session_id)
    assert len(forms) == 0


def test_event_form_type_change_resets_custom_name(store, scheduler):
    session = FormRegistry(store, scheduler).open("event", "e2")

    assert session.change({"type": "Outro"})["customName"] == ""
    assert session.change({"customName": "Retiro"})["customName"] == "Retiro"
    assert session.change({"type": "Culto"})["customName"] == "Culto"

    draft = session.change({"schedule": {"responsibleDoor": "w1"}})
    assert draft["schedule"]["responsibleDoor"] == "w1"
    assert draft["schedule"]["responsiblePrayer"] == "w3"


def test_profile_form_cannot_change_status(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("profile", "w2")

    assert "status" not in session.draft
    session.change({"status": "Inativo", "address": "Rua Nova, 1"})
    scheduler.advance(1500)

    worker = store.get_worker("w2")
    assert worker.address == "Rua Nova, 1"
    assert worker.status == WorkerStatus.ACTIVE
    assert "Perfil salvo(s) com sucesso!" in messages(store)


def test_registry_rejects_unknown_kinds_and_missing_records(store, scheduler):
    forms = FormRegistry(store, scheduler)

    with pytest.raises(ValidationError):
        forms.open("payroll")
    with pytest.raises(ValidationError):
        forms.open("profile")
    with pytest.raises(NotFoundError):
        forms.open("event", "nope")


def test_closed_session_rejects_changes(store, scheduler):
    forms = FormRegistry(store, scheduler)
    session = forms.open("worker", "w2")
    forms.close_all()

    with pytest.raises(ValidationError):
        session.change({"name": "x"})
    assert forms.close(session.session_id) is False


def test_obreiro_profile_form_keeps_position(store, scheduler):
    store.set_current_user(User(id="o", username="carloslima", access_level=Role.OBREIRO, worker_id="w2"))
    forms = FormRegistry(store, scheduler)
    session = forms.open("profile", "w2")

    session.change({"position": "Bispo Presidente", "phone": "11 95555-0000"})
    worker = forms.confirm(session.session_id)

    assert worker.position == WorkerPosition.DIACONO
    assert worker.phone == "11 95555-0000"


def test_admin_profile_form_may_change_position(store, scheduler):
    store.set_current_user(User(id="a", username="admin", access_level=Role.ADMIN, worker_id="w1"))
    forms = FormRegistry(store, scheduler)
    session = forms.open("profile", "w1")

    session.change({"position": "Bispo", "status": "Inativo"})
    worker = forms.confirm(session.session_id)

    assert worker.position == WorkerPosition.BISPO
    assert worker.status == WorkerStatus.ACTIVE
