from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: object, message: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise ValidationError(message)
    return text.strip()


def require_choice(enum_cls: Type[E], value: object, message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
