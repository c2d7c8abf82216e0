from __future__ import annotations

from flask import Flask, request

from ..common.http import guarded, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.uniform_service

    @app.route("/uniforms", methods=["GET"], endpoint="uniforms")
    @guarded(container, "uniforms")
    def uniforms():
        items = svc.list(search=request.args.get("q", ""))
        return ok([{**u.to_dict(), "canDelete": svc.can_delete(u.id)} for u in items])

    @app.route("/uniforms", methods=["POST"], endpoint="uniforms_add")
    @guarded(container, "uniforms")
    def uniforms_add():
        return ok(svc.create(json_body()).to_dict(), status=201)

    @app.route("/uniforms/<uniform_id>", methods=["PUT", "PATCH"], endpoint="uniforms_update")
    @guarded(container, "uniforms")
    def uniforms_update(uniform_id: str):
        return ok(svc.update(uniform_id, json_body()).to_dict())

    @app.route("/uniforms/<uniform_id>", methods=["DELETE"], endpoint="uniforms_delete")
    @guarded(container, "uniforms")
    def uniforms_delete(uniform_id: str):
        svc.delete(uniform_id)
        return ok(message="Uniforme excluído.")
