from __future__ import annotations

from flask import Flask, request

from ..common.http import guarded, json_body, ok
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import EventFilter


def register(app: Flask, container: Container) -> None:
    svc = container.event_service

    @app.route("/events", methods=["GET"], endpoint="events")
    @guarded(container, "events")
    def events():
        which = require_choice(EventFilter, request.args.get("filter") or "upcoming", "Filtro inválido.")
        items = svc.list(which=which)
        return ok([{**e.to_dict(), "displayName": e.display_name} for e in items])

    @app.route("/events/options", methods=["GET"], endpoint="events_options")
    @guarded(container, "event-editor")
    def events_options():
        """Choices for the event form selects."""
        workers = container.worker_service
        return ok(
            {
                "workers": [w.to_dict() for w in workers.active()],
                "deacons": [w.to_dict() for w in workers.deacon_candidates()],
                "uniforms": [u.to_dict() for u in container.uniform_service.list()],
            }
        )

    @app.route("/events/<event_id>", methods=["GET"], endpoint="events_get")
    @guarded(container, "events")
    def events_get(event_id: str):
        return ok(svc.detail(event_id))

    @app.route("/events", methods=["POST"], endpoint="events_add")
    @guarded(container, "event-editor")
    def events_add():
        return ok(svc.create(json_body()).to_dict(), status=201)

    @app.route("/events/<event_id>", methods=["PUT", "PATCH"], endpoint="events_update")
    @guarded(container, "event-editor")
    def events_update(event_id: str):
        return ok(svc.update(event_id, json_body()).to_dict())

    @app.route("/events/<event_id>", methods=["DELETE"], endpoint="events_delete")
    @guarded(container, "event-editor")
    def events_delete(event_id: str):
        svc.delete(event_id)
        return ok(message="Evento excluído.")
