"""Routes package initialization."""

from .auth import bp as auth_bp
from .events import bp as events_bp
from .health import bp as health_bp

__all__ = ['auth_bp', 'events_bp', 'health_bp']
