import re
from enum import StrEnum


class KeyGeneration:
    """Short code generation parameters."""

    LENGTH = 6  # Fixed short code width
    MAX_ATTEMPTS = 10  # Collision retries before giving up with KeySpaceExhaustedError
    PATTERN = re.compile(r'^[0-9a-z]{6}$')


class HistoryDefaults:
    """History log parameters."""

    CAPACITY = 500  # High-water mark, oldest records are evicted first
    WRITE_ATTEMPTS = 5  # Optimistic transaction retries on concurrent modification


# Seconds before the "link not found" response falls back to the home page
NOT_FOUND_REFRESH_SECONDS = 5


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
