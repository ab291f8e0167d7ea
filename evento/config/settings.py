"""Flask configuration for the Evento front-end."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


DEFAULT_SECRET_KEY = 'dev'


class Config:
    # Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', DEFAULT_SECRET_KEY)
    DEBUG = _env_flag('FLASK_DEBUG', 'False')
    TESTING = False

    # Remote event service
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:3000')
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '30'))

    # How long a mount waits for the events/user fetches before rendering without them
    MOUNT_TIMEOUT = float(os.getenv('MOUNT_TIMEOUT', os.getenv('API_TIMEOUT', '30')))

    # Apply local apply/delete mutations even when the remote call fails
    OPTIMISTIC_UPDATES = _env_flag('OPTIMISTIC_UPDATES', 'True')

    # Per-browser-session state kept in memory
    MAX_SESSIONS = int(os.getenv('MAX_SESSIONS', '1000'))
    SESSION_IDLE_TIMEOUT = float(os.getenv('SESSION_IDLE_TIMEOUT', '1800'))

    PRODUCTION = IS_PRODUCTION_ENVIRONMENT
    SESSION_COOKIE_SECURE = IS_PRODUCTION_ENVIRONMENT


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    API_BASE_URL = 'http://api.test'
    API_TIMEOUT = 1
    MOUNT_TIMEOUT = 1.0
    OPTIMISTIC_UPDATES = True
    PRODUCTION = False
