from __future__ import annotations

from obreiro_fiel.access.guard import LANDING_PATH, LOGIN_PATH, AccessGuard
from obreiro_fiel.core.enums import Role
from obreiro_fiel.users.model import User

ADMIN = User(id="a", username="admin", access_level=Role.ADMIN, worker_id="w1")
OBREIRO = User(id="o", username="obreiro", access_level=Role.OBREIRO, worker_id="w2")


def test_no_subject_goes_to_login():
    decision = AccessGuard().check(None, "dashboard")

    assert decision.allowed is False
    assert decision.redirect_to == LOGIN_PATH


def test_wrong_role_goes_to_landing_page():
    guard = AccessGuard()

    for view in ("workers", "uniforms", "admin-settings"):
        decision = guard.check(OBREIRO, view)
        assert decision.allowed is False
        assert decision.redirect_to == LANDING_PATH


def test_obreiro_views():
    guard = AccessGuard()

    for view in ("dashboard", "events", "account-settings"):
        assert guard.can(OBREIRO, view)


def test_admin_sees_everything():
    guard = AccessGuard()

    for view in ("dashboard", "workers", "events", "uniforms", "account-settings", "admin-settings"):
        assert guard.check(ADMIN, view).redirect_to is None


def test_unknown_view_is_admin_only():
    guard = AccessGuard()

    assert guard.can(ADMIN, "reports")
    assert not guard.can(OBREIRO, "reports")


def test_custom_role_table():
    guard = AccessGuard({"reports": frozenset({Role.OBREIRO})})

    assert guard.can(OBREIRO, "reports")
    assert not guard.can(ADMIN, "reports")


def test_event_editing_is_admin_only():
    guard = AccessGuard()

    assert guard.can(ADMIN, "event-editor")
    assert not guard.can(OBREIRO, "event-editor")
