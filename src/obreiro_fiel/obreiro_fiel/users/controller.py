from __future__ import annotations

from flask import Flask, redirect, request

from ..access.guard import LANDING_PATH, LOGIN_PATH
from ..common.http import guarded, json_body, ok, on_loop
from ..container import Container
from ..core.enums import Severity
from ..workers.service import whatsapp_link


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @on_loop(container)
    def login():
        data = json_body() or request.form.to_dict()
        user = container.auth_service.login(data.get("username", ""), data.get("password", ""))
        return ok(user.to_dict())

    @app.route("/login", methods=["GET"], endpoint="login_page")
    @on_loop(container)
    def login_page():
        # Already logged in: straight to the dashboard.
        if container.store.current_user is not None:
            return redirect(LANDING_PATH)
        return ok({"loggedIn": False})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    @on_loop(container)
    def logout():
        container.forms.close_all()
        container.settings_service.cancel_autosave()
        container.auth_service.logout()
        container.notifications.enqueue("Sessão encerrada.", Severity.INFO)
        return redirect(LOGIN_PATH)

    @app.route("/account-settings", methods=["GET"], endpoint="account_settings")
    @guarded(container, "account-settings")
    def account_settings():
        user = container.store.current_user
        worker = container.store.get_worker(user.worker_id)
        profile = None
        if worker:
            profile = {**worker.to_dict(), "whatsapp": whatsapp_link(worker.phone)}
        return ok({"user": user.to_dict(), "profile": profile})
