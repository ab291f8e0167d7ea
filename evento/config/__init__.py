"""Configuration package."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from .settings import DEFAULT_SECRET_KEY, Config, TestingConfig

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'DEFAULT_SECRET_KEY', 'Config', 'TestingConfig']
