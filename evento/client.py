import logging
from typing import Any, Dict, List, Optional

import requests

from .models.event import Event
from .models.user import User

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for remote event service errors."""
    pass


class TransportError(APIError):
    """Raised when the service could not be reached or did not answer in time."""
    pass


class ServerError(APIError):
    """Raised when the service answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(ServerError):
    """Raised on 401 responses (bad credentials or no session)."""
    pass


class InvalidResponseError(APIError):
    """Raised when the response body does not have the expected shape."""
    pass


class EventAPIClient:
    """Client for the remote event service.

    Each client owns a `requests.Session`, so the session cookie set by
    `login` is sent with every later call made through the same client.
    """

    def __init__(self, base_url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """
        Send a request to the service and map failures onto APIError subclasses.

        Raises:
            TransportError: If no response was received
            UnauthorizedError: If the service answered 401
            ServerError: If the service answered with any other non-2xx status
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.status_code == 401:
            raise UnauthorizedError(f"{method} {path} unauthorized", response.status_code)
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise ServerError(f"{method} {path} failed: {e}", response.status_code) from e
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Response is not valid JSON: {e}") from e

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in; the service sets a session cookie on success.

        Returns:
            Dict: Whatever the service returned in the body (may be empty)
        """
        response = self._request('POST', '/api/login', json={'email': email, 'password': password})
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def get_events(self) -> List[Event]:
        """
        Fetch events from the API and convert them to Event objects.

        Returns:
            List[Event]: Events in the order the service returned them

        Raises:
            APIError: If the API request fails or the response is invalid
        """
        events_data = self._json(self._request('GET', '/api/events'))
        if not isinstance(events_data, list):
            raise InvalidResponseError("API response must be a list of events")

        events = []
        for data in events_data:
            try:
                events.append(Event.from_dict(data))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed event {data!r}: {e}")
        return events

    def get_user_profile(self) -> User:
        """
        Raises:
            APIError: If the request fails, the user is not logged in or the profile is invalid
        """
        data = self._json(self._request('GET', '/api/user/profile'))
        if not isinstance(data, dict):
            raise InvalidResponseError("API response must be a user object")
        try:
            return User.from_dict(data)
        except ValueError as e:
            raise InvalidResponseError(f"Invalid user profile: {e}") from e

    def create_event(self, payload: Dict[str, Any]) -> Optional[Event]:
        response = self._request('POST', '/api/events', json=payload)
        return self._optional_event(response)

    def update_event(self, event_id: int, payload: Dict[str, Any]) -> Optional[Event]:
        response = self._request('PATCH', f'/api/events/{event_id}', json=payload)
        return self._optional_event(response)

    def delete_event(self, event_id: int) -> None:
        self._request('DELETE', f'/api/events/{event_id}')

    def apply_to_event(self, event_id: int) -> None:
        self._request('POST', f'/api/events/{event_id}/apply')

    def close(self) -> None:
        self.session.close()

    def _optional_event(self, response: requests.Response) -> Optional[Event]:
        """The created/updated event, if the service echoed one back."""
        if not response.content:
            return None
        try:
            return Event.from_dict(response.json())
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring unexpected event body: {e}")
            return None
