"""Helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import jsonify, redirect, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ReferentialIntegrityError, 409),
)


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def error_response(e: DomainError):
    status = next((code for cls, code in _STATUS if isinstance(e, cls)), 400)
    return jsonify({"success": False, "message": str(e)}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Corpo da requisição inválido.")
    return data


def on_loop(container) -> Callable:
    """Run the view on the event loop: hold the loop lock, map domain errors."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            with container.loop_lock:
                try:
                    return view(*args, **kwargs)
                except DomainError as e:
                    return error_response(e)
                except Exception:
                    logger.exception("Unhandled error in %s", view.__name__)
                    return jsonify({"success": False, "message": "Erro interno do sistema."}), 500

        return wrapper

    return decorator


def guarded(container, view_name: str) -> Callable:
    """Like ``on_loop`` but first asks the access guard; denial is a redirect."""

    def decorator(view):
        @wraps(view)
        def check(*args, **kwargs):
            decision = container.guard.check(container.store.current_user, view_name)
            if not decision.allowed:
                return redirect(decision.redirect_to)
            return view(*args, **kwargs)

        return on_loop(container)(check)

    return decorator
