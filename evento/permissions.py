"""Role-based capabilities for event actions."""

from dataclasses import dataclass
from typing import Optional

from .models.event import Event
from .models.user import Role, User


@dataclass(frozen=True)
class Permissions:
    """What the current user may do with one event."""
    can_apply: bool
    can_manage: bool
    is_full: bool
    is_admin: bool = False

    @property
    def apply_label(self) -> str:
        """Caption of the apply button."""
        if self.can_apply:
            return 'Apply Now'
        if self.is_full:
            return 'Full'
        if self.is_admin:
            return 'Admin cannot apply'
        return 'Cannot apply'


def evaluate_permissions(user: Optional[User], event: Event) -> Permissions:
    """
    Compute the capabilities of `user` on `event`.
    
    Anonymous users (no profile) get no capabilities. Admins manage but never
    apply; regular users apply while the event has room.
    """
    is_full = event.current_attendees >= event.max_attendees
    role = user.role if user is not None else None
    return Permissions(
        can_apply=role is Role.USER and not is_full,
        can_manage=role is Role.ADMIN,
        is_full=is_full,
        is_admin=role is Role.ADMIN,
    )


def can_create(user: Optional[User]) -> bool:
    """Only admins may create or edit events."""
    return user is not None and user.role is Role.ADMIN
