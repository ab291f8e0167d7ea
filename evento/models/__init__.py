"""Models package initialization."""

from .event import Event
from .user import Role, User

__all__ = ['Event', 'Role', 'User']
