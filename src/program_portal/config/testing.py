SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://api.test/api/v1",
    "timeout": 5,
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
SESSION_LIFETIME_DAYS = 1
DEFAULT_PAGE_SIZE = 10
