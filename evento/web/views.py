"""Per-browser-session state kept by the front-end process.

A browser session gets one API client (holding the remote service's session
cookie) and, once the event list has been opened, one view controller.
Sessions are identified by a random id stored in the signed Flask session
cookie.
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from flask import current_app, session

from ..controller import EventListController
from ..client import EventAPIClient

logger = logging.getLogger(__name__)

SESSION_KEY = 'evento_sid'

ClientFactory = Callable[[], EventAPIClient]


@dataclass
class BrowserSession:
    client: EventAPIClient
    view: Optional[EventListController] = None
    last_seen: float = 0.0


class ViewRegistry:
    """Maps browser session ids to their client and current view.

    Sessions idle for longer than `idle_timeout` seconds are dropped, and at
    most `max_sessions` are kept; when full, the least recently used one goes.
    Dropped sessions close their client; their views are not cancelled.
    """

    def __init__(
        self,
        client_factory: ClientFactory,
        optimistic: bool = True,
        mount_timeout: Optional[float] = None,
        max_sessions: int = 1000,
        idle_timeout: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client_factory = client_factory
        self.optimistic = optimistic
        self.mount_timeout = mount_timeout
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self.clock = clock
        # Insertion order is kept as least- to most-recently used
        self._sessions: Dict[str, BrowserSession] = {}
        self._lock = threading.Lock()

    def get(self, sid: str) -> BrowserSession:
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            browser_session = self._sessions.pop(sid, None)
            if browser_session is None:
                while len(self._sessions) >= self.max_sessions:
                    oldest = next(iter(self._sessions))
                    logger.info(f"Session registry full, dropping session {oldest[:6]}...")
                    self._close(self._sessions.pop(oldest))
                browser_session = BrowserSession(client=self.client_factory())
            browser_session.last_seen = now
            self._sessions[sid] = browser_session
            return browser_session

    def _evict_idle(self, now: float) -> None:
        expired = [
            sid for sid, browser_session in self._sessions.items()
            if now - browser_session.last_seen > self.idle_timeout
        ]
        for sid in expired:
            self._close(self._sessions.pop(sid))
        if expired:
            logger.info(f"Dropped {len(expired)} idle session(s)")

    @staticmethod
    def _close(browser_session: BrowserSession) -> None:
        browser_session.client.close()

    def new_view(self, sid: str) -> EventListController:
        """Replace the session's view with a fresh, unmounted controller."""
        browser_session = self.get(sid)
        view = EventListController(
            browser_session.client,
            optimistic=self.optimistic,
            mount_timeout=self.mount_timeout,
        )
        browser_session.view = view
        return view

    def __len__(self) -> int:
        return len(self._sessions)


def default_client_factory(base_url: str, timeout: int) -> ClientFactory:
    def factory() -> EventAPIClient:
        return EventAPIClient(base_url=base_url, timeout=timeout)
    return factory


def get_registry() -> ViewRegistry:
    return current_app.extensions['evento']


def current_sid() -> str:
    sid = session.get(SESSION_KEY)
    if not sid:
        sid = secrets.token_urlsafe(16)
        session[SESSION_KEY] = sid
    return sid


def current_browser_session() -> BrowserSession:
    return get_registry().get(current_sid())


def current_view() -> EventListController:
    """The session's view, mounting one if the list was never opened."""
    browser_session = current_browser_session()
    if browser_session.view is None:
        view = get_registry().new_view(current_sid())
        view.mount()
        return view
    return browser_session.view
