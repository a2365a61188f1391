"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_HOURS_PER_REQUEST = 24
PASSWORD_MIN_LENGTH = 6
NAME_MIN_LENGTH = 2

ATTENDANCE_CODE_LENGTH = 6
ATTENDANCE_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

SALT_LENGTH = 12
DEFAULT_EVENT_COLOR = "#4287f5"
DEFAULT_HTTP_TIMEOUT = 20
ERROR_BODY_LIMIT = 200
