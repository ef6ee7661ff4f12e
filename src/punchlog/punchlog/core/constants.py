"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_ADMIN_PASSPHRASE = "1234"
MIN_PASSPHRASE_LENGTH = 4

# Reserved actor written by maintenance scripts; never part of the roster.
SYSTEM_ACTOR = "SYSTEM"
ADMIN_DISPLAY_NAME = "admin"

# Log row layout: actor, action, timestamp, date, time, source
ROW_WIDTH = 6

# Python weekday numbering (Monday=0); reports start weeks on Sunday.
WEEK_START = 6

DEFAULT_SYNC_INTERVAL_SECONDS = 120
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
NOTICE_HISTORY_SIZE = 20
