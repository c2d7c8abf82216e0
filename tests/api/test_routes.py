from __future__ import annotations

import io

from PIL import Image


def container_of(app):
    return app.extensions["obreiro_fiel"]


def test_views_redirect_to_login_without_user(client):
    resp = client.get("/dashboard")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_root_redirects_to_dashboard(client):
    assert client.get("/").headers["Location"].endswith("/dashboard")


def test_bad_login(client, login):
    resp = login("carloslima", "x")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Credenciais inválidas."}


def test_obreiro_is_sent_back_to_dashboard_from_admin_views(client, login):
    assert login("carloslima", "obreiro123").status_code == 200

    for path in ("/workers", "/uniforms", "/admin-settings"):
        resp = client.get(path)
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/dashboard")

    assert client.get("/events").status_code == 200
    assert client.post("/events", json={"type": "Culto"}).status_code == 302


def test_login_page_redirects_when_logged_in(client, login):
    assert client.get("/login").status_code == 200
    login()
    assert client.get("/login").headers["Location"].endswith("/dashboard")


def test_worker_crud(client, login, app):
    login()

    resp = client.post("/workers", json={"name": "Ana"})
    assert resp.status_code == 201
    worker = resp.get_json()["data"]
    assert worker["status"] == "Ativo"

    resp = client.patch(f"/workers/{worker['id']}", json={"phone": "11 91234-5678"})
    assert resp.get_json()["data"]["phone"] == "11 91234-5678"

    listing = client.get("/workers?q=ana&status=Todos").get_json()["data"]
    assert worker["id"] in [w["id"] for w in listing["workers"]]

    assert client.delete(f"/workers/{worker['id']}").status_code == 200
    assert client.get(f"/workers/{worker['id']}").status_code == 404


def test_referential_integrity_is_a_conflict(client, login):
    login()

    resp = client.delete("/workers/w2")

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False
    assert client.delete("/uniforms/u1").status_code == 409


def test_validation_error_is_bad_request(client, login):
    login()

    resp = client.post("/events", json={"type": "Culto", "dateTime": ""})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Data e Hora são obrigatórios."


def test_notifications_expire(client, login, scheduler):
    login()
    client.post("/uniforms", json={"name": "Jaleco"})

    items = client.get("/notifications").get_json()["data"]
    assert [n["message"] for n in items] == ["Uniforme adicionado com sucesso!"]
    assert items[0]["type"] == "success"

    scheduler.advance(3000)
    assert client.get("/notifications").get_json().get("data") == []


def test_form_autosave_over_http(client, login, app, scheduler):
    login()

    resp = client.post("/forms", json={"kind": "worker", "recordId": "w3"})
    assert resp.status_code == 201
    session_id = resp.get_json()["data"]["id"]

    resp = client.patch(f"/forms/{session_id}", json={"address": "Rua B, 2"})
    assert resp.get_json()["data"]["autosavePending"] is True

    scheduler.advance(1500)
    assert container_of(app).store.get_worker("w3").address == "Rua B, 2"

    assert client.delete(f"/forms/{session_id}").status_code == 200
    assert client.get(f"/forms/{session_id}").status_code == 404


def test_profile_form_uses_logged_in_worker(client, login, app):
    login("anacosta", "obreiro456")

    resp = client.post("/forms", json={"kind": "profile", "recordId": "w1"})
    assert resp.get_json()["data"]["recordId"] == "w3"

    assert client.post("/forms", json={"kind": "worker", "recordId": "w1"}).status_code == 302


def test_logout_discards_open_forms(client, login, app, scheduler):
    login()
    session_id = client.post("/forms", json={"kind": "uniform", "recordId": "u2"}).get_json()["data"]["id"]
    client.patch(f"/forms/{session_id}", json={"name": "Camisa Verde"})

    resp = client.post("/logout")
    scheduler.advance(5000)

    assert resp.headers["Location"].endswith("/login")
    assert container_of(app).store.current_user is None
    assert container_of(app).store.get_uniform("u2").name == "Camisa Azul Oficial"


def test_public_page(client, login):
    login()
    key = client.get("/admin-settings").get_json()["data"]["publicEventsKey"]

    assert client.get(f"/public-events?key={key}").status_code == 403

    client.post("/admin-settings/public-events", json={"enabled": True})
    resp = client.get(f"/public-events?key={key}")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["appName"] == "Obreiro Fiel ADACMM"

    client.post("/admin-settings/key")
    assert client.get(f"/public-events?key={key}").status_code == 403


def test_admin_settings_logo_and_qr(client, login):
    login()
    buf = io.BytesIO()
    Image.new("RGB", (2, 2)).save(buf, format="PNG")

    resp = client.post(
        "/admin-settings/logo",
        data={"logo": (io.BytesIO(buf.getvalue()), "logo.png")},
        content_type="multipart/form-data",
    )
    assert resp.get_json()["data"]["churchLogoUrl"].startswith("data:image/png;base64,")

    resp = client.patch("/admin-settings", json={"churchLogoUrl": None})
    assert resp.get_json()["data"]["churchLogoUrl"] == ""

    resp = client.get("/admin-settings/qr.png")
    assert resp.mimetype == "image/png"
    assert resp.data.startswith(b"\x89PNG")


def test_settings_autosave_endpoint(client, login, app, scheduler):
    login()

    assert client.post("/admin-settings/autosave", json={"publicEventsEnabled": True}).status_code == 202
    assert container_of(app).store.settings.public_events_enabled is False

    scheduler.advance(1000)
    assert container_of(app).store.settings.public_events_enabled is True


def test_event_form_options_list_active_workers(client, login):
    login()

    data = client.get("/events/options").get_json()["data"]

    assert "w4" not in [w["id"] for w in data["workers"]]
    assert [w["id"] for w in data["deacons"]] == ["w2"]
    assert {u["id"] for u in data["uniforms"]} == {"u1", "u2"}


def test_account_settings_shows_linked_profile(client, login):
    login("carloslima", "obreiro123")

    data = client.get("/account-settings").get_json()["data"]

    assert data["user"]["accessLevel"] == "Obreiro"
    assert data["profile"]["id"] == "w2"
    assert data["profile"]["whatsapp"] == "https://wa.me/5511999990002"


def test_logout_drops_pending_settings_autosave(client, login, app, scheduler):
    login()
    client.post("/admin-settings/autosave", json={"publicEventsEnabled": True})

    client.post("/logout")
    scheduler.advance(2000)

    assert container_of(app).store.settings.public_events_enabled is False


def test_leaving_settings_page_cancels_or_flushes_autosave(client, login, app, scheduler):
    login()
    store = container_of(app).store

    client.post("/admin-settings/autosave", json={"publicEventsEnabled": True})
    assert client.delete("/admin-settings/autosave").status_code == 200
    scheduler.advance(2000)
    assert store.settings.public_events_enabled is False

    client.post("/admin-settings/autosave", json={"publicEventsEnabled": True})
    resp = client.post("/admin-settings/autosave/flush")
    assert resp.get_json()["data"]["publicEventsEnabled"] is True
    assert store.settings.public_events_enabled is True


def test_form_operations_recheck_the_form_role(client, login, app):
    forms = container_of(app).forms
    login("carloslima", "obreiro123")
    worker_form = forms.open("worker", "w2")
    event_form = forms.open("event", "e1")
    other_profile = forms.open("profile", "w1")

    for session in (worker_form, event_form, other_profile):
        base = f"/forms/{session.session_id}"
        assert client.get(base).status_code == 302
        assert client.patch(base, json={"name": "x"}).headers["Location"].endswith("/dashboard")
        assert client.post(f"{base}/confirm").status_code == 302
        assert client.delete(base).status_code == 302

    assert container_of(app).store.get_worker("w2").name == "Diácono Carlos Lima (Obreiro)"
    assert len(forms) == 3


def test_obreiro_cannot_open_event_form(client, login):
    login("carloslima", "obreiro123")

    assert client.post("/forms", json={"kind": "event", "recordId": "e1"}).status_code == 302
    assert client.get("/events/options").status_code == 302
