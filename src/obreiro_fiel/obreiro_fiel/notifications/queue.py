from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from ..common.datetime_utils import now_utc
from ..common.scheduler import Scheduler
from ..core.constants import NOTIFICATION_TTL_MS
from ..core.enums import Severity
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEntry:
    id: str
    message: str
    severity: Severity
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "message": self.message,
            "type": self.severity.value,
            "createdAt": self.created_at.isoformat(),
        }


class NotificationQueue:
    """Ephemeral, auto-expiring status messages (toasts).

    Each entry removes itself ``ttl_ms`` after it was enqueued. A manual
    ``dismiss`` removes it earlier; the expiry timer then finds nothing to
    remove.
    """

    def __init__(self, scheduler: Scheduler, *, ttl_ms: int = NOTIFICATION_TTL_MS):
        self._scheduler = scheduler
        self._ttl_ms = int(ttl_ms)
        self._entries: list[NotificationEntry] = []

    def enqueue(self, message: str, severity: Union[Severity, str] = Severity.INFO) -> str:
        try:
            severity = Severity(severity)
        except ValueError:
            raise ValidationError(f"Tipo de notificação inválido: {severity}")

        entry = NotificationEntry(
            id=uuid.uuid4().hex,
            message=message,
            severity=severity,
            created_at=now_utc(),
        )
        self._entries.append(entry)
        logger.debug("notification %s [%s] %s", entry.id, severity.value, message)

        self._scheduler.call_later(self._ttl_ms, lambda: self.dismiss(entry.id))
        return entry.id

    def dismiss(self, entry_id: str) -> bool:
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        return len(self._entries) != before

    def entries(self) -> list[NotificationEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._entries)
