import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "program_portal.config.production"

    if env in {"test", "testing"}:
        return "program_portal.config.testing"

    return "program_portal.config.development"


def resolve_api_url(default: str) -> str:
    """Base URL of the REST backend.

    ``API_URL`` wins; the web and mobile client variable names are honoured
    so one ``.env`` can serve every client.
    """
    for name in ("API_URL", "NEXT_PUBLIC_API_URL", "REACT_APP_API_URL"):
        value = os.getenv(name)
        if value:
            return value
    return default
