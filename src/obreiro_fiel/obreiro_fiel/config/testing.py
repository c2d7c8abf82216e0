SECRET_KEY = "test-secret"

# None -> in-memory storage
STORAGE_DIR = None

FORM_DEBOUNCE_MS = 1500
SETTINGS_DEBOUNCE_MS = 1000
NOTIFICATION_TTL_MS = 3000

PUBLIC_BASE_URL = "http://testserver"

DEBUG = False
TESTING = True
