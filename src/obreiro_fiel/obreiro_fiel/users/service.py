from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..store import StateStore
from .model import User


@dataclass(frozen=True)
class Credential:
    username: str
    password_hash: str
    user: User


def _credential(username: str, password: str, *, user_id: str, role: Role, worker_id: str) -> Credential:
    return Credential(
        username=username,
        password_hash=generate_password_hash(password),
        user=User(id=user_id, username=username, access_level=role, worker_id=worker_id),
    )


def default_credentials() -> tuple[Credential, ...]:
    """The static account table. Each account is linked to a seed worker."""
    return (
        _credential("Altar em Chamas", "Adacmm2020", user_id="userAdmin001", role=Role.ADMIN, worker_id="w1"),
        _credential("carloslima", "obreiro123", user_id="userObreiro001", role=Role.OBREIRO, worker_id="w2"),
        _credential("anacosta", "obreiro456", user_id="userObreiro002", role=Role.OBREIRO, worker_id="w3"),
    )


class AuthService:
    """Use case: log in / log out against the static credential table."""

    def __init__(self, store: StateStore, credentials: tuple[Credential, ...]):
        self._store = store
        self._by_username = {c.username: c for c in credentials}

    def authenticate(self, username: str, password: str) -> User:
        cred = self._by_username.get(username or "")
        if not cred:
            raise AuthenticationError("Credenciais inválidas.")

        try:
            ok = check_password_hash(cred.password_hash, password or "")
        except ValueError:
            # e.g. a malformed hash string in the table
            ok = False

        if not ok:
            raise AuthenticationError("Credenciais inválidas.")
        return cred.user

    def login(self, username: str, password: str) -> User:
        user = self.authenticate(username, password)
        self._store.set_current_user(user)
        return user

    def logout(self) -> None:
        self._store.set_current_user(None)

    def current_user(self) -> Optional[User]:
        return self._store.current_user
