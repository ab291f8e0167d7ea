"""Event model definition."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def parse_instant(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string from the API, returning None if it is missing or invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid datetime format {value!r}: {e}")
        return None


def format_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace('+00:00', 'Z')


@dataclass(frozen=True)
class Event:
    """
    Event model representing an event served by the remote event service.
    
    Fields:
        id: Unique identifier within a session
        name: Event name
        description: Event description
        time: When the event takes place (None if the service sent an invalid instant)
        current_attendees: Number of people who applied so far
        max_attendees: Attendee limit
        image_url: URL to the event's image (optional)
        created_at: When the event was created on the service (optional)
    """
    id: int
    name: str
    description: str = ''
    time: Optional[datetime] = None
    current_attendees: int = 0
    max_attendees: int = 0
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_full(self) -> bool:
        return self.current_attendees >= self.max_attendees

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """
        Convert API event data to an Event object.
        
        Args:
            data: Dictionary containing event data from the API (camelCase keys)
            
        Returns:
            Event: Event object
            
        Raises:
            ValueError: If required fields are missing or invalid
        """
        required_fields = ['id', 'name']
        missing_fields = [field for field in required_fields if field not in data]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        try:
            return cls(
                id=int(data['id']),
                name=data['name'],
                description=data.get('description') or '',
                time=parse_instant(data.get('time')),
                current_attendees=int(data.get('currentAttendees') or 0),
                max_attendees=int(data.get('maxAttendees') or 0),
                image_url=data.get('imageUrl') or None,
                created_at=parse_instant(data.get('createdAt')),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid event data: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'time': format_instant(self.time),
            'currentAttendees': self.current_attendees,
            'maxAttendees': self.max_attendees,
            'imageUrl': self.image_url,
            'createdAt': format_instant(self.created_at),
        }
