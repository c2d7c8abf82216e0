from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.http import guarded, json_body, ok
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import WorkerPosition, WorkerStatus
from .service import whatsapp_link

ALL = "Todos"


def _filter(enum_cls, value: Optional[str], message: str):
    if not value or value == ALL:
        return None
    return require_choice(enum_cls, value, message)


def register(app: Flask, container: Container) -> None:
    svc = container.worker_service

    def _row(worker) -> dict:
        return {
            **worker.to_dict(),
            "whatsapp": whatsapp_link(worker.phone),
            "canDelete": svc.can_delete(worker.id),
        }

    @app.route("/workers", methods=["GET"], endpoint="workers")
    @guarded(container, "workers")
    def workers():
        items = svc.list(
            search=request.args.get("q", ""),
            status=_filter(WorkerStatus, request.args.get("status"), "Status inválido."),
            position=_filter(WorkerPosition, request.args.get("position"), "Cargo inválido."),
        )
        return ok({"count": len(items), "workers": [_row(w) for w in items]})

    @app.route("/workers", methods=["POST"], endpoint="workers_add")
    @guarded(container, "workers")
    def workers_add():
        worker = svc.create(json_body())
        return ok(worker.to_dict(), status=201)

    @app.route("/workers/<worker_id>", methods=["GET"], endpoint="workers_get")
    @guarded(container, "workers")
    def workers_get(worker_id: str):
        return ok(_row(svc.get(worker_id)))

    @app.route("/workers/<worker_id>", methods=["PUT", "PATCH"], endpoint="workers_update")
    @guarded(container, "workers")
    def workers_update(worker_id: str):
        return ok(svc.update(worker_id, json_body()).to_dict())

    @app.route("/workers/<worker_id>", methods=["DELETE"], endpoint="workers_delete")
    @guarded(container, "workers")
    def workers_delete(worker_id: str):
        svc.delete(worker_id)
        return ok(message="Obreiro excluído.")
