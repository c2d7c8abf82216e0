from __future__ import annotations

import pytest

from obreiro_fiel.core.enums import Severity, WorkerPosition, WorkerStatus
from obreiro_fiel.core.exceptions import NotFoundError, ValidationError
from obreiro_fiel.workers.service import WorkerService, whatsapp_link, worker_fields


def test_list_filters_and_sorts_by_name(store):
    svc = WorkerService(store)

    names = [w.name for w in svc.list()]
    assert names == sorted(names, key=str.lower)

    assert [w.id for w in svc.list(status=WorkerStatus.INACTIVE)] == ["w4"]
    assert [w.id for w in svc.list(position=WorkerPosition.DIACONO)] == ["w2"]
    assert [w.id for w in svc.list(search="  ana ")] == ["w3"]
    assert [w.id for w in svc.list(search="missionário")] == ["w3"]


def test_create_requires_name_and_reports_error(store):
    svc = WorkerService(store)
    count = len(store.workers)

    with pytest.raises(ValidationError):
        svc.create({"name": "   "})

    assert len(store.workers) == count
    entry = store.notifications.entries()[-1]
    assert entry.message == "O nome do obreiro é obrigatório."
    assert entry.severity == Severity.ERROR


def test_update_merges_partial_draft(store):
    svc = WorkerService(store)

    worker = svc.update("w2", {"phone": "11 98888-7777"})

    assert worker.phone == "11 98888-7777"
    assert worker.name == "Diácono Carlos Lima (Obreiro)"
    assert store.get_worker("w2") == worker


def test_update_unknown_worker(store):
    with pytest.raises(NotFoundError):
        WorkerService(store).update("nope", {"name": "x"})


def test_can_delete_reflects_schedules(store):
    svc = WorkerService(store)

    assert svc.can_delete("w4")
    assert not svc.can_delete("w1")


def test_deacon_candidates_are_active_only(store):
    store.add_worker({"name": "Diácono Inativo", "position": WorkerPosition.DIACONO, "status": WorkerStatus.INACTIVE})

    ids = [w.id for w in WorkerService(store).deacon_candidates()]

    assert "w2" in ids
    assert "w4" not in ids
    assert all(store.get_worker(i).is_active for i in ids)


@pytest.mark.parametrize(
    "draft, message",
    [
        ({"name": "A", "position": "Papa"}, "Cargo inválido."),
        ({"name": "A", "status": "Suspenso"}, "Status inválido."),
        ({"name": "A", "dob": "15/05/1970"}, "Data de nascimento inválida."),
    ],
)
def test_worker_fields_validation(draft, message):
    with pytest.raises(ValidationError) as exc:
        worker_fields(draft)
    assert str(exc.value) == message


def test_worker_fields_defaults():
    fields = worker_fields({"name": " Ana ", "photoUrl": ""})

    assert fields["name"] == "Ana"
    assert fields["position"] == WorkerPosition.OBREIRO
    assert fields["status"] == WorkerStatus.ACTIVE
    assert fields["photo_url"] is None


@pytest.mark.parametrize(
    "phone, link",
    [
        ("(11) 99999-0001", "https://wa.me/5511999990001"),
        ("5511999990002", "https://wa.me/5511999990002"),
        ("", "#"),
    ],
)
def test_whatsapp_link(phone, link):
    assert whatsapp_link(phone) == link
