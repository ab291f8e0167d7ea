"""Event list view controller.

Owns the state of one event-list view: the events, the current user and the
user-menu flag. State is an immutable `ViewState` that is replaced on every
transition, and the events inside it only change through `EventStore`
operations.

Remote apply/delete calls are reconciled optimistically: with
`optimistic=True` the local store is updated whether or not the service
accepted the call, otherwise only when it did. Nothing is retried.
"""

import dataclasses
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Optional, Set, Tuple, TypeVar

from .models.event import Event
from .models.user import User
from .permissions import Permissions, evaluate_permissions
from .store import EventStore
from .client import APIError, EventAPIClient

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class ViewState:
    store: EventStore = field(default_factory=EventStore)
    user: Optional[User] = None
    loading: bool = True
    menu_open: bool = False


@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of an apply/delete.

    Fields:
        performed: The guard passed and the remote call was issued
        confirmed: The remote service accepted the call
    """
    performed: bool
    confirmed: bool = False


REJECTED = ActionResult(performed=False)


class EventListController:
    """Fetch-then-render-then-act lifecycle of the event list."""

    def __init__(self, client: EventAPIClient, optimistic: bool = True, mount_timeout: Optional[float] = None):
        self.client = client
        self.optimistic = optimistic
        self.mount_timeout = mount_timeout
        self._state = ViewState()
        self._lock = threading.Lock()
        self._in_flight: Set[Tuple[str, int]] = set()

    @property
    def state(self) -> ViewState:
        return self._state

    def _update(self, **changes) -> ViewState:
        with self._lock:
            self._state = dataclasses.replace(self._state, **changes)
            return self._state

    def _update_store(self, operation: Callable[[EventStore], EventStore]) -> ViewState:
        with self._lock:
            self._state = dataclasses.replace(self._state, store=operation(self._state.store))
            return self._state

    def permissions_for(self, event: Event) -> Permissions:
        return evaluate_permissions(self._state.user, event)

    def rows(self):
        """(event, permissions) pairs in display order."""
        state = self._state
        return [(event, evaluate_permissions(state.user, event)) for event in state.store]

    # Mount

    def mount(self) -> ViewState:
        """
        Fetch events and the current user concurrently.

        Either fetch may fail or not finish within `mount_timeout`; the view
        then renders without it (empty list / no user). Unfinished fetches are
        left running and their results discarded.
        """
        self._update(loading=True)
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix='evento-mount')
        try:
            events_future = executor.submit(self._fetch, 'events', self.client.get_events)
            user_future = executor.submit(self._fetch, 'user profile', self.client.get_user_profile)
            done, not_done = wait([events_future, user_future], timeout=self.mount_timeout)
        finally:
            executor.shutdown(wait=False)

        events = events_future.result() if events_future in done else None
        user = user_future.result() if user_future in done else None
        if events_future in not_done:
            logger.warning("Events fetch did not finish in time, rendering an empty list")
        if user_future in not_done:
            logger.warning("User profile fetch did not finish in time, rendering without a user")

        with self._lock:
            self._state = dataclasses.replace(
                self._state,
                store=self._state.store.replace(events or []),
                user=user,
                loading=False,
            )
            return self._state

    @staticmethod
    def _fetch(label: str, fetch: Callable[[], T]) -> Optional[T]:
        try:
            return fetch()
        except APIError as e:
            logger.warning(f"Could not fetch {label}: {e}")
            return None

    # Actions

    def apply(self, event_id: int) -> ActionResult:
        """Apply the current user to an event."""
        event = self._state.store.get(event_id)
        if event is None or not self.permissions_for(event).can_apply:
            logger.info(f"Apply to event {event_id} not allowed")
            return REJECTED
        return self._run_action(
            'apply', event_id,
            lambda: self.client.apply_to_event(event_id),
            lambda store: store.increment_attendance(event_id),
        )

    def delete(self, event_id: int) -> ActionResult:
        event = self._state.store.get(event_id)
        if event is None or not self.permissions_for(event).can_manage:
            logger.info(f"Delete of event {event_id} not allowed")
            return REJECTED
        return self._run_action(
            'delete', event_id,
            lambda: self.client.delete_event(event_id),
            lambda store: store.remove(event_id),
        )

    def edit(self, event_id: int) -> Optional[Event]:
        """Return the event to pre-fill the edit form with, or None if editing is not allowed."""
        event = self._state.store.get(event_id)
        if event is None or not self.permissions_for(event).can_manage:
            logger.info(f"Edit of event {event_id} not allowed")
            return None
        return event

    def toggle_menu(self) -> ViewState:
        with self._lock:
            self._state = dataclasses.replace(self._state, menu_open=not self._state.menu_open)
            return self._state

    def _run_action(
        self,
        action: str,
        event_id: int,
        call: Callable[[], None],
        mutation: Callable[[EventStore], EventStore],
    ) -> ActionResult:
        key = (action, event_id)
        with self._lock:
            if key in self._in_flight:
                logger.info(f"Ignoring {action} for event {event_id}: already in flight")
                return REJECTED
            self._in_flight.add(key)

        try:
            try:
                call()
                confirmed = True
            except APIError as e:
                logger.warning(f"{action.capitalize()} of event {event_id} failed: {e}")
                confirmed = False

            if confirmed or self.optimistic:
                self._update_store(mutation)
            return ActionResult(performed=True, confirmed=confirmed)
        finally:
            with self._lock:
                self._in_flight.discard(key)
