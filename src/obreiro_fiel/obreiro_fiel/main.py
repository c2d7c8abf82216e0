from __future__ import annotations

import importlib
import threading
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.log import configure_logging
from .common.scheduler import Scheduler, ThreadingScheduler
from .config import get_settings_module
from .container import build_container
from .dashboard.controller import register as register_dashboard
from .events.controller import register as register_events
from .forms.controller import register as register_forms
from .notifications.controller import register as register_notifications
from .persistence.storage import FileStorage, KeyValueStorage, MemoryStorage
from .public.controller import register as register_public
from .settings.controller import register as register_settings
from .uniforms.controller import register as register_uniforms
from .users.controller import register as register_users
from .workers.controller import register as register_workers


def create_app(
    *,
    storage: Optional[KeyValueStorage] = None,
    scheduler: Optional[Scheduler] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger = configure_logging(app.config["DEBUG"])

    if storage is None:
        storage_dir = getattr(settings, "STORAGE_DIR", None)
        storage = FileStorage(storage_dir) if storage_dir else MemoryStorage()
        logger.info("settings=%s storage=%s", settings_module, storage_dir or "memory")

    # Views and timers share one lock: a single logical event loop.
    loop_lock = threading.RLock()
    if scheduler is None:
        scheduler = ThreadingScheduler(loop_lock)

    container = build_container(
        storage=storage,
        scheduler=scheduler,
        loop_lock=loop_lock,
        form_debounce_ms=int(getattr(settings, "FORM_DEBOUNCE_MS")),
        settings_debounce_ms=int(getattr(settings, "SETTINGS_DEBOUNCE_MS")),
        notification_ttl_ms=int(getattr(settings, "NOTIFICATION_TTL_MS")),
        public_base_url=getattr(settings, "PUBLIC_BASE_URL", ""),
    )
    app.extensions["obreiro_fiel"] = container

    register_users(app, container)
    register_dashboard(app, container)
    register_workers(app, container)
    register_events(app, container)
    register_uniforms(app, container)
    register_settings(app, container)
    register_forms(app, container)
    register_notifications(app, container)
    register_public(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
