"""Form validation for the login and create/edit pages.

Validation happens entirely before any call to the remote service. Each
validator returns a dict mapping field name to error message; an empty dict
means the form is valid.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from ..models.event import Event

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_PASSWORD_LENGTH = 6

# Format of <input type="datetime-local">
DATETIME_LOCAL_FORMAT = '%Y-%m-%dT%H:%M'

EVENT_FIELDS = ('name', 'description', 'imageUrl', 'maxAttendees', 'time')


def validate_login(form: Mapping[str, str]) -> Dict[str, str]:
    errors = {}
    email = form.get('email', '')
    password = form.get('password', '')

    if not email.strip():
        errors['email'] = 'Email is required'
    elif not EMAIL_PATTERN.match(email):
        errors['email'] = 'Invalid email format'

    if not password:
        errors['password'] = 'Password is required'
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters'

    return errors


def _to_utc(moment: datetime) -> datetime:
    """Form times are read back as UTC, so offset-aware times are shown in UTC."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


@dataclass
class EventForm:
    """Raw values of the create/edit form, as strings."""
    name: str = ''
    description: str = ''
    imageUrl: str = ''
    maxAttendees: str = ''
    time: str = ''

    @classmethod
    def from_mapping(cls, form: Mapping[str, str]) -> 'EventForm':
        return cls(**{field: (form.get(field) or '').strip() for field in EVENT_FIELDS})

    @classmethod
    def from_event(cls, event: Event) -> 'EventForm':
        """Pre-fill the form from an existing event (edit mode)."""
        return cls(
            name=event.name,
            description=event.description,
            imageUrl=event.image_url or '',
            maxAttendees=str(event.max_attendees),
            time=_to_utc(event.time).strftime(DATETIME_LOCAL_FORMAT) if event.time else '',
        )

    def _parsed_time(self) -> Optional[datetime]:
        try:
            return datetime.strptime(self.time, DATETIME_LOCAL_FORMAT)
        except ValueError:
            return None

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.name:
            errors['name'] = 'Event name is required'
        if not self.description:
            errors['description'] = 'Description is required'

        if not self.time:
            errors['time'] = 'Event date and time is required'
        elif self._parsed_time() is None:
            errors['time'] = 'Invalid date and time'

        if not self.maxAttendees:
            errors['maxAttendees'] = 'Attendee limit is required'
        else:
            try:
                if int(self.maxAttendees) < 1:
                    errors['maxAttendees'] = 'Attendee limit must be at least 1'
            except ValueError:
                errors['maxAttendees'] = 'Attendee limit must be a whole number'

        if self.imageUrl and not self.imageUrl.startswith(('http://', 'https://')):
            errors['imageUrl'] = 'Image URL must start with http:// or https://'

        return errors

    def to_payload(self) -> Dict[str, Any]:
        """
        Request body for POST/PATCH /api/events.

        The datetime-local value has no zone; it is taken as UTC. Only call on a
        validated form.
        """
        moment = self._parsed_time().replace(tzinfo=timezone.utc)
        return {
            'name': self.name,
            'description': self.description,
            'imageUrl': self.imageUrl,
            'maxAttendees': int(self.maxAttendees),
            'time': moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
        }
