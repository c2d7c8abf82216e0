from __future__ import annotations

from flask import Flask, redirect

from ..access.guard import LANDING_PATH
from ..common.http import guarded, ok
from ..container import Container
from ..workers.service import whatsapp_link


def register(app: Flask, container: Container) -> None:
    svc = container.dashboard_service
    events = container.event_service

    def _event_card(event) -> dict:
        return {**events.detail(event.id), "scheduleEmpty": event.schedule.is_empty}

    @app.route("/", endpoint="index")
    def index():
        return redirect(LANDING_PATH)

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @guarded(container, "dashboard")
    def dashboard():
        view = svc.build(container.store.current_user)
        return ok(
            {
                "greeting": view.greeting_name,
                "eventOfTheDay": _event_card(view.event_of_the_day) if view.event_of_the_day else None,
                "upcoming": [_event_card(e) for e in view.upcoming],
                "birthdays": [
                    {"id": w.id, "name": w.name, "dob": w.dob, "whatsapp": whatsapp_link(w.phone)}
                    for w in view.birthdays
                ],
            }
        )
