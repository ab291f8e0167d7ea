"""User model definition."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Role(str, Enum):
    ADMIN = 'admin'
    USER = 'user'


@dataclass(frozen=True)
class User:
    """
    The logged-in user as returned by the profile endpoint.
    
    Users are never modified locally; a new profile means a new mount.
    """
    id: str
    name: str
    email: str
    role: Role
    avatar: str = ''

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """
        Raises:
            ValueError: If required fields are missing or the role is unknown
        """
        required_fields = ['id', 'name', 'role']
        missing_fields = [field for field in required_fields if field not in data]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        return cls(
            id=str(data['id']),
            name=data['name'],
            email=data.get('email') or '',
            role=Role(data['role']),
            avatar=data.get('avatar') or '',
        )
