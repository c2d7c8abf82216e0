from __future__ import annotations

from flask import Flask

from ..common.http import ok, on_loop
from ..container import Container


def register(app: Flask, container: Container) -> None:
    queue = container.notifications

    @app.route("/notifications", methods=["GET"], endpoint="notifications")
    @on_loop(container)
    def notifications():
        return ok([e.to_dict() for e in queue.entries()])

    @app.route("/notifications/<entry_id>", methods=["DELETE"], endpoint="notifications_dismiss")
    @on_loop(container)
    def notifications_dismiss(entry_id: str):
        queue.dismiss(entry_id)
        return ok()
