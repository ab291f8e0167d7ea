import threading
from datetime import datetime, timezone

import pytest

from evento.config import TestingConfig
from evento.models.event import Event
from evento.models.user import Role, User
from evento.web import create_app
from evento.client import TransportError


def make_event(event_id=1, current=0, maximum=10, **overrides):
    fields = dict(
        id=event_id,
        name=f"Event {event_id}",
        description="A test event",
        time=datetime(2025, 3, 14, 18, 30, tzinfo=timezone.utc),
        current_attendees=current,
        max_attendees=maximum,
        image_url="https://example.com/event.jpg",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Event(**fields)


ADMIN = User(id="a1", name="Ada Admin", email="ada@example.com", role=Role.ADMIN)
MEMBER = User(id="u1", name="Ulf User", email="ulf@example.com", role=Role.USER)


class FakeEventClient:
    """Stands in for EventAPIClient; records calls and fails on request."""

    def __init__(self, events=None, user=None):
        self.events = list(events or [])
        self.user = user
        self.fail = set()
        self.calls = []
        self.block_user = None
        self.on_apply = None
        self.login_error = None
        self.closed = False

    def _maybe_fail(self, name):
        if name in self.fail:
            raise TransportError(f"{name} unavailable")

    def login(self, email, password):
        self.calls.append(('login', email))
        if self.login_error is not None:
            raise self.login_error
        self._maybe_fail('login')
        return {}

    def get_events(self):
        self.calls.append(('get_events',))
        self._maybe_fail('get_events')
        return list(self.events)

    def get_user_profile(self):
        self.calls.append(('get_user_profile',))
        if self.block_user is not None:
            self.block_user.wait(5)
        self._maybe_fail('get_user_profile')
        if self.user is None:
            raise TransportError("not logged in")
        return self.user

    def apply_to_event(self, event_id):
        self.calls.append(('apply', event_id))
        if self.on_apply is not None:
            self.on_apply(event_id)
        self._maybe_fail('apply')

    def delete_event(self, event_id):
        self.calls.append(('delete', event_id))
        self._maybe_fail('delete')

    def create_event(self, payload):
        self.calls.append(('create', payload))
        self._maybe_fail('create')

    def update_event(self, event_id, payload):
        self.calls.append(('update', event_id, payload))
        self._maybe_fail('update')

    def close(self):
        self.closed = True

    def remote_calls(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_client():
    return FakeEventClient(
        events=[make_event(1, current=1, maximum=2), make_event(2, current=5, maximum=5)],
        user=MEMBER,
    )


@pytest.fixture
def app(fake_client):
    app = create_app(TestingConfig, client_factory=lambda: fake_client)
    yield app


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def release():
    """A gate for fake calls that should hang; always opened at teardown."""
    gate = threading.Event()
    yield gate
    gate.set()
