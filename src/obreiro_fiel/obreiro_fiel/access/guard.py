from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..users.model import User

LOGIN_PATH = "/login"
LANDING_PATH = "/dashboard"

_ALL_ROLES = frozenset(Role)

# Static mapping: view -> roles allowed to see it.
VIEW_ROLES: dict[str, frozenset[Role]] = {
    "dashboard": _ALL_ROLES,
    "workers": frozenset({Role.ADMIN}),
    "events": frozenset({Role.ADMIN, Role.OBREIRO}),
    "event-editor": frozenset({Role.ADMIN}),
    "uniforms": frozenset({Role.ADMIN}),
    "account-settings": frozenset({Role.ADMIN, Role.OBREIRO}),
    "admin-settings": frozenset({Role.ADMIN}),
    "forms": _ALL_ROLES,
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: Optional[str] = None


ALLOW = AccessDecision(allowed=True)


class AccessGuard:
    """Pure allow/deny predicate over (subject, view).

    No subject -> login page; wrong role -> landing page. Never raises.
    """

    def __init__(self, view_roles: Optional[dict[str, frozenset[Role]]] = None):
        self._view_roles = dict(view_roles if view_roles is not None else VIEW_ROLES)

    def roles_for(self, view: str) -> frozenset[Role]:
        # Unknown views are admin-only rather than open.
        return self._view_roles.get(view, frozenset({Role.ADMIN}))

    def check(self, subject: Optional[User], view: str) -> AccessDecision:
        if subject is None:
            return AccessDecision(allowed=False, redirect_to=LOGIN_PATH)
        if subject.access_level not in self.roles_for(view):
            return AccessDecision(allowed=False, redirect_to=LANDING_PATH)
        return ALLOW

    def can(self, subject: Optional[User], view: str) -> bool:
        return self.check(subject, view).allowed
