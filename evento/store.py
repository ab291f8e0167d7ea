"""In-memory event store for a single view.

Every operation returns a new store; a store is never modified after it is
built. This keeps the optimistic apply/delete reconciliation in the controller
a matter of swapping one value for another.
"""

import dataclasses
import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .models.event import Event

logger = logging.getLogger(__name__)


class EventStore:
    """Ordered, id-unique collection of events in server order."""

    __slots__ = ('_events', '_index')

    def __init__(self, events: Iterable[Event] = ()):
        ordered = []
        index: Dict[int, int] = {}
        for event in events:
            if event.id in index:
                logger.warning(f"Dropping duplicate event id {event.id} ({event.name})")
                continue
            index[event.id] = len(ordered)
            ordered.append(event)
        self._events: Tuple[Event, ...] = tuple(ordered)
        self._index = index

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventStore):
            return NotImplemented
        return self._events == other._events

    def __repr__(self) -> str:
        return f"EventStore({list(self._events)!r})"

    @property
    def events(self) -> Tuple[Event, ...]:
        return self._events

    def is_empty(self) -> bool:
        return not self._events

    def get(self, event_id: int) -> Optional[Event]:
        position = self._index.get(event_id)
        return None if position is None else self._events[position]

    def replace(self, events: Iterable[Event]) -> 'EventStore':
        """Discard the current contents and install `events` in the given order."""
        return EventStore(events)

    def increment_attendance(self, event_id: int) -> 'EventStore':
        """Add one attendee to the event, unless it is missing or already full."""
        event = self.get(event_id)
        if event is None or event.current_attendees >= event.max_attendees:
            return self
        updated = dataclasses.replace(event, current_attendees=event.current_attendees + 1)
        return EventStore(updated if e.id == event_id else e for e in self._events)

    def remove(self, event_id: int) -> 'EventStore':
        if event_id not in self._index:
            return self
        return EventStore(e for e in self._events if e.id != event_id)
