import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

REMOTE_READ_URL = os.getenv("REMOTE_READ_URL", "")
REMOTE_WRITE_URL = os.getenv("REMOTE_WRITE_URL", "")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

SYNC_INTERVAL_SECONDS = int(os.getenv("SYNC_INTERVAL_SECONDS", "120"))
BACKGROUND_REFRESH = bool(int(os.getenv("BACKGROUND_REFRESH", "1")))

CALCULATION_METHOD = os.getenv("CALCULATION_METHOD", "first_last")
STATE_FILE = os.getenv("STATE_FILE", "/var/lib/punchlog/state.json")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
CURRENCY = os.getenv("CURRENCY", "ILS")
EVENT_SOURCE = os.getenv("EVENT_SOURCE", "punchlog")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
