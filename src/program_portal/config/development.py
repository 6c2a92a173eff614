import os

from . import resolve_api_url

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": resolve_api_url("http://localhost:8000/api/v1"),
    "timeout": int(os.getenv("API_TIMEOUT", "15")),
}

DEBUG = True
TESTING = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", "7"))
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
