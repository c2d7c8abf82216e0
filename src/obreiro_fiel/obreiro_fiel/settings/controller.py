from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import guarded, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import SettingsPatch


def register(app: Flask, container: Container) -> None:
    svc = container.settings_service

    def _payload() -> dict:
        return {**svc.settings.to_dict(), "publicLink": svc.public_link()}

    @app.route("/admin-settings", methods=["GET"], endpoint="admin_settings")
    @guarded(container, "admin-settings")
    def admin_settings():
        return ok(_payload())

    @app.route("/admin-settings", methods=["PATCH"], endpoint="admin_settings_update")
    @guarded(container, "admin-settings")
    def admin_settings_update():
        svc.update(SettingsPatch.from_wire(json_body()))
        return ok(_payload())

    @app.route("/admin-settings/autosave", methods=["POST"], endpoint="admin_settings_autosave")
    @guarded(container, "admin-settings")
    def admin_settings_autosave():
        svc.autosave(SettingsPatch.from_wire(json_body()))
        return ok(_payload(), status=202)

    @app.route("/admin-settings/autosave/flush", methods=["POST"], endpoint="admin_settings_autosave_flush")
    @guarded(container, "admin-settings")
    def admin_settings_autosave_flush():
        svc.flush_autosave()
        return ok(_payload())

    @app.route("/admin-settings/autosave", methods=["DELETE"], endpoint="admin_settings_autosave_cancel")
    @guarded(container, "admin-settings")
    def admin_settings_autosave_cancel():
        # Leaving the settings page drops whatever was still waiting.
        svc.cancel_autosave()
        return ok(_payload())

    @app.route("/admin-settings/public-events", methods=["POST"], endpoint="admin_settings_toggle")
    @guarded(container, "admin-settings")
    def admin_settings_toggle():
        enabled = json_body().get("enabled")
        if not isinstance(enabled, bool):
            raise ValidationError("Valor inválido para a página pública.")
        svc.set_public_events_enabled(enabled)
        return ok(_payload())

    @app.route("/admin-settings/key", methods=["POST"], endpoint="admin_settings_key")
    @guarded(container, "admin-settings")
    def admin_settings_key():
        svc.regenerate_key()
        return ok(_payload())

    @app.route("/admin-settings/logo", methods=["POST"], endpoint="admin_settings_logo")
    @guarded(container, "admin-settings")
    def admin_settings_logo():
        file = request.files.get("logo")
        data = file.read() if file else request.get_data()
        svc.upload_logo(data)
        return ok(_payload())

    @app.route("/admin-settings/logo", methods=["DELETE"], endpoint="admin_settings_logo_delete")
    @guarded(container, "admin-settings")
    def admin_settings_logo_delete():
        svc.remove_logo()
        return ok(_payload())

    @app.route("/admin-settings/qr.png", methods=["GET"], endpoint="admin_settings_qr")
    @guarded(container, "admin-settings")
    def admin_settings_qr():
        """QR code image of the public events link."""
        buf = io.BytesIO(svc.public_link_qr_png())
        return send_file(buf, mimetype="image/png")
