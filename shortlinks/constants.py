import string
from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Upper bound accepted for a link's `expire` value (10 years in seconds)
    MAX_EXPIRE = 315_360_000  # 60 * 60 * 24 * 365 * 10


class Link:
    """Shape of link identifiers and owner tokens."""

    # URL-safe alphabet shared by link identifiers and session tokens
    ALPHABET = string.ascii_letters + string.digits + '_-'
    ID_LENGTH = 7
    TOKEN_LENGTH = 30
    # Bound on identifier allocation attempts before giving up
    MAX_ALLOCATION_ATTEMPTS = 10


class Session:
    """Session token transport."""

    COOKIE_NAME = 'shortlinks_session'
    AUTH_SCHEME = 'token'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'

    class Redis(StrEnum):
        URL = 'REDIS_URL'  # e.g. redis://localhost:6379/0

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Fallback origin for short links when nothing better is known
DEFAULT_BASE_URL = 'http://localhost:3000'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
