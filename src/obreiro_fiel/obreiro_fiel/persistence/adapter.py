from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceAdapter:
    """Mirror state domains to key-value storage as full JSON snapshots."""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def load(self, key: str, decode: Callable[[Any], T], default: Callable[[], T]) -> T:
        """Read and decode ``key``; fall back to ``default()`` on any failure.

        A missing, corrupt or incompatible value must never block startup.
        """
        try:
            raw = self._storage.get_item(key)
            if raw is None:
                return default()
            return decode(json.loads(raw))
        except (OSError, UnicodeDecodeError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Stored value for %s is unreadable, using defaults: %s", key, e)
            return default()

    def save(self, key: str, value: T, encode: Callable[[T], Any]) -> None:
        self._storage.set_item(key, json.dumps(encode(value), ensure_ascii=False))
