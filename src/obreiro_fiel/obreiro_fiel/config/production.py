import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_DIR = os.getenv("STORAGE_DIR", "/var/lib/obreiro-fiel")

FORM_DEBOUNCE_MS = int(os.getenv("FORM_DEBOUNCE_MS", "1500"))
SETTINGS_DEBOUNCE_MS = int(os.getenv("SETTINGS_DEBOUNCE_MS", "1000"))
NOTIFICATION_TTL_MS = int(os.getenv("NOTIFICATION_TTL_MS", "3000"))

PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")

DEBUG = False
