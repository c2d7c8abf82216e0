from __future__ import annotations

import base64
import io
import logging
from urllib.parse import quote

import qrcode
from PIL import Image, UnidentifiedImageError

from ..common.ids import new_public_key
from ..common.scheduler import Scheduler
from ..core.constants import SETTINGS_DEBOUNCE_MS
from ..core.enums import Severity
from ..core.exceptions import ValidationError
from ..debounce import DebouncedCommit
from ..store import StateStore
from .model import UNSET, AppSettings, SettingsPatch

logger = logging.getLogger(__name__)

_LOGO_FORMATS = {"PNG": "image/png", "JPEG": "image/jpeg"}


def validate_patch(patch: SettingsPatch) -> SettingsPatch:
    if patch.public_events_enabled is not UNSET and not isinstance(patch.public_events_enabled, bool):
        raise ValidationError("Valor inválido para a página pública.")
    if patch.public_events_key is not UNSET:
        if not isinstance(patch.public_events_key, str) or not patch.public_events_key.strip():
            raise ValidationError("A chave pública não pode ser vazia.")
    if patch.church_logo_url not in (UNSET, None) and not isinstance(patch.church_logo_url, str):
        raise ValidationError("Logo inválido.")
    return patch


class SettingsService:
    """Use case: admin settings (logo, public events page)."""

    def __init__(
        self,
        store: StateStore,
        scheduler: Scheduler,
        *,
        public_base_url: str = "",
        autosave_delay_ms: int = SETTINGS_DEBOUNCE_MS,
    ):
        self._store = store
        self._public_base_url = public_base_url.rstrip("/")
        self._pending = SettingsPatch()
        self._autosave: DebouncedCommit[SettingsPatch] = DebouncedCommit(self._commit_autosave, autosave_delay_ms, scheduler)

    @property
    def settings(self) -> AppSettings:
        return self._store.settings

    def _validated(self, patch: SettingsPatch) -> SettingsPatch:
        try:
            return validate_patch(patch)
        except ValidationError as e:
            self._store.notifications.enqueue(str(e), Severity.ERROR)
            raise

    def update(self, patch: SettingsPatch) -> AppSettings:
        self._validated(patch)
        if not patch.changed_fields:
            return self._store.settings
        return self._store.update_settings(patch)

    def autosave(self, patch: SettingsPatch) -> None:
        """Debounced update: patches arriving in a burst are merged and saved once."""
        self._validated(patch)
        self._pending = self._pending.merged_with(patch)
        self._autosave.submit(self._pending)

    def flush_autosave(self) -> bool:
        return self._autosave.flush()

    def cancel_autosave(self) -> None:
        self._autosave.cancel()
        self._pending = SettingsPatch()

    def _commit_autosave(self, patch: SettingsPatch) -> None:
        self._pending = SettingsPatch()
        self.update(patch)

    def set_public_events_enabled(self, enabled: bool) -> AppSettings:
        return self.update(SettingsPatch(public_events_enabled=bool(enabled)))

    def regenerate_key(self) -> AppSettings:
        """New key; the previous public link stops working."""
        settings = self.update(SettingsPatch(public_events_key=new_public_key()))
        logger.info("public events key regenerated")
        return settings

    def remove_logo(self) -> AppSettings:
        return self.update(SettingsPatch(church_logo_url=None))

    def upload_logo(self, data: bytes) -> AppSettings:
        """Store a PNG/JPEG logo as a base64 data URL."""
        mime = None
        try:
            with Image.open(io.BytesIO(data)) as img:
                mime = _LOGO_FORMATS.get(img.format or "")
        except (UnidentifiedImageError, OSError):
            mime = None

        if mime is None:
            message = "Por favor, selecione um arquivo PNG ou JPG."
            self._store.notifications.enqueue(message, Severity.ERROR)
            raise ValidationError(message)

        data_url = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
        return self.update(SettingsPatch(church_logo_url=data_url))

    def public_link(self) -> str:
        key = quote(self._store.settings.public_events_key, safe="")
        return f"{self._public_base_url}/public-events?key={key}"

    def public_link_qr_png(self) -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=1,
        )
        qr.add_data(self.public_link())
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
