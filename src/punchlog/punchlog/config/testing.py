import os

SECRET_KEY = "test-secret"

REMOTE_READ_URL = "http://log-store.test/values"
REMOTE_WRITE_URL = "http://log-store.test/append"
REQUEST_TIMEOUT_SECONDS = 5.0

SYNC_INTERVAL_SECONDS = 120
BACKGROUND_REFRESH = False

CALCULATION_METHOD = "first_last"
STATE_FILE = os.getenv("STATE_FILE", "")
DISPLAY_TIMEZONE = "UTC"
CURRENCY = "ILS"
EVENT_SOURCE = "test"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_JSON = False
