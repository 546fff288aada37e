"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOGGLE_MAX_ATTEMPTS = 3
DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS = 5.0
DEFAULT_LOG_LEVEL = "INFO"
MYSQL_DUPLICATE_KEY_ERRNO = 1062
