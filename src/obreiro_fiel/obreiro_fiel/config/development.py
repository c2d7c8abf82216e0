import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Directory holding one JSON file per state domain
STORAGE_DIR = os.getenv("STORAGE_DIR", os.path.join(os.getcwd(), "instance", "storage"))

FORM_DEBOUNCE_MS = int(os.getenv("FORM_DEBOUNCE_MS", "1500"))
SETTINGS_DEBOUNCE_MS = int(os.getenv("SETTINGS_DEBOUNCE_MS", "1000"))
NOTIFICATION_TTL_MS = int(os.getenv("NOTIFICATION_TTL_MS", "3000"))

# Base URL used to build the shareable public events link / QR code
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")

DEBUG = True
