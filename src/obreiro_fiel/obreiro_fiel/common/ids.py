from __future__ import annotations

import secrets
import string
import time
import uuid

_KEY_ALPHABET = string.ascii_lowercase + string.digits


def new_record_id(prefix: str) -> str:
    """Collision-free record id, e.g. ``w3f2a...``."""
    return f"{prefix}{uuid.uuid4().hex}"


def new_public_key(*, with_suffix: bool = True) -> str:
    """Shared key for the public events page.

    ``key`` + last 6 digits of the millisecond clock, optionally followed by
    3 random characters (used when an admin regenerates the key).
    """
    key = f"key{str(int(time.time() * 1000))[-6:]}"
    if with_suffix:
        key += "".join(secrets.choice(_KEY_ALPHABET) for _ in range(3))
    return key
