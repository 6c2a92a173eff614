"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_URL = "http://localhost:8000/api/v1"
DEFAULT_API_TIMEOUT = 15
DEFAULT_SESSION_DAYS = 7
DEFAULT_PAGE_SIZE = 10
DEFAULT_SESSION_DURATION_MINUTES = 120
NOTIFICATIONS_PAGE_LIMIT = 10
UNKNOWN_NAME = "Unknown"
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
