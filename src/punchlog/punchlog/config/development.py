import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Sheet values endpoint (GET) and append script endpoint (POST)
REMOTE_READ_URL = os.getenv("REMOTE_READ_URL", "http://localhost:8081/values")
REMOTE_WRITE_URL = os.getenv("REMOTE_WRITE_URL", "http://localhost:8081/append")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

SYNC_INTERVAL_SECONDS = int(os.getenv("SYNC_INTERVAL_SECONDS", "120"))
BACKGROUND_REFRESH = bool(int(os.getenv("BACKGROUND_REFRESH", "1")))

CALCULATION_METHOD = os.getenv("CALCULATION_METHOD", "first_last")
STATE_FILE = os.getenv("STATE_FILE", "instance/punchlog_state.json")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
CURRENCY = os.getenv("CURRENCY", "ILS")
EVENT_SOURCE = os.getenv("EVENT_SOURCE", "punchlog")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
