from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import ok, on_loop
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.public_service

    @app.route("/public-events", methods=["GET"], endpoint="public_events")
    @on_loop(container)
    def public_events():
        if not svc.has_access(request.args.get("key")):
            return jsonify({"success": False, "message": "Acesso negado."}), 403
        return ok(svc.view())
