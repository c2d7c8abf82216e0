"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOTIFICATION_TTL_MS = 3000
FORM_DEBOUNCE_MS = 1500
SETTINGS_DEBOUNCE_MS = 1000
PUBLIC_WINDOW_DAYS = 7
UPCOMING_EVENTS_LIMIT = 5

STORAGE_KEY_USER = "obreiroFielUser_v1"
STORAGE_KEY_WORKERS = "obreiroFielWorkers_v1"
STORAGE_KEY_EVENTS = "obreiroFielEvents_v1"
STORAGE_KEY_UNIFORMS = "obreiroFielUniforms_v1"
STORAGE_KEY_SETTINGS = "obreiroFielAppSettings_v1"

APP_NAME = "Obreiro Fiel ADACMM"
