import pytest

from evento.client import ServerError, UnauthorizedError
from evento.config import DEFAULT_SECRET_KEY, TestingConfig
from evento.web import create_app

from .conftest import ADMIN, FakeEventClient


def test_health(http):
    response = http.get("/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_login_page(http):
    response = http.get("/login")
    assert response.status_code == 200
    assert b"Welcome Back" in response.data
    assert http.get("/").status_code == 200


def test_login_validation_happens_before_network(http, fake_client):
    response = http.post("/login", data={"email": "nope", "password": "123"})
    assert response.status_code == 400
    assert b"Invalid email format" in response.data
    assert fake_client.remote_calls("login") == []


def test_login_success_redirects(http, fake_client):
    response = http.post("/login", data={"email": "ulf@example.com", "password": "secret1"})
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/evento")
    assert fake_client.remote_calls("login") == [("login", "ulf@example.com")]


def test_login_network_error(http, fake_client):
    fake_client.fail.add("login")
    response = http.post("/login", data={"email": "ulf@example.com", "password": "secret1"})
    assert b"Network error. Please check your connection." in response.data


def test_event_list(http):
    response = http.get("/evento")
    assert response.status_code == 200
    assert b"Event 1" in response.data
    assert b"1 / 2 attendees" in response.data
    assert b"Apply Now" in response.data
    assert b"Full" in response.data
    assert b"Create New Post" not in response.data


def test_event_list_when_fetch_fails(http, fake_client):
    fake_client.fail.add("get_events")
    response = http.get("/evento")
    assert response.status_code == 200
    assert b"No events available at the moment." in response.data
    assert b"event-card" not in response.data


def test_apply_renders_incremented_count(http, fake_client):
    http.get("/evento")
    fake_client.fail.add("apply")
    response = http.post("/evento/1/apply")
    assert response.status_code == 200
    assert b"2 / 2 attendees" in response.data


def test_apply_to_full_event_is_forbidden(http, fake_client):
    http.get("/evento")
    response = http.post("/evento/2/apply")
    assert response.status_code == 403
    assert fake_client.remote_calls("apply") == []


def test_toggle_menu(http):
    http.get("/evento")
    response = http.post("/evento/menu")
    assert b"user-menu" in response.data
    response = http.post("/evento/menu")
    assert b"user-menu" not in response.data


def test_admin_delete_and_edit(http, fake_client):
    fake_client.user = ADMIN
    page = http.get("/evento")
    assert b"Create New Post" in page.data
    assert b"Admin cannot apply" in page.data

    response = http.post("/evento/1/delete")
    assert response.status_code == 200
    assert b'id="event-1"' not in response.data

    response = http.post("/evento/2/edit")
    assert response.status_code == 302
    assert "/create?event_id=2" in response.headers["Location"]

    form = http.get("/create?event_id=2")
    assert b"Edit Event" in form.data
    assert b'value="Event 2"' in form.data


def test_user_cannot_reach_create(http):
    http.get("/evento")
    response = http.get("/create")
    assert response.status_code == 403
    assert b"Event 1" in response.data


def test_admin_cannot_edit_unknown_event(http, fake_client):
    fake_client.user = ADMIN
    http.get("/evento")
    assert http.get("/create?event_id=99").status_code == 403


def test_create_event(http, fake_client):
    fake_client.user = ADMIN
    http.get("/evento")
    response = http.post("/create", data={
        "name": "New",
        "description": "Desc",
        "maxAttendees": "12",
        "time": "2025-05-05T10:00",
    })
    assert response.status_code == 302
    (call,) = fake_client.remote_calls("create")
    assert call[1]["maxAttendees"] == 12


def test_update_event_failure_is_reported(http, fake_client):
    fake_client.user = ADMIN
    fake_client.fail.add("update")
    http.get("/evento")
    response = http.post("/create", data={
        "event_id": "1",
        "name": "Renamed",
        "description": "Desc",
        "maxAttendees": "12",
        "time": "2025-05-05T10:00",
    })
    assert response.status_code == 502
    assert b"Failed to update event" in response.data


def test_create_validation_errors(http, fake_client):
    fake_client.user = ADMIN
    http.get("/evento")
    response = http.post("/create", data={"name": "", "maxAttendees": "0"})
    assert response.status_code == 400
    assert fake_client.remote_calls("create") == []


def test_unknown_page(http):
    assert http.get("/nowhere").status_code == 404


def test_login_bad_credentials(http, fake_client):
    fake_client.login_error = UnauthorizedError("POST /api/login unauthorized", 401)
    response = http.post("/login", data={"email": "ulf@example.com", "password": "secret1"})
    assert response.status_code == 401
    assert b"Invalid email or password" in response.data
    assert b"Server error" not in response.data


def test_login_server_error(http, fake_client):
    fake_client.login_error = ServerError("POST /api/login failed", 500)
    response = http.post("/login", data={"email": "ulf@example.com", "password": "secret1"})
    assert response.status_code == 502
    assert b"Server error. Please try again later." in response.data
    assert b"Invalid email or password" not in response.data


def test_session_registry_is_bounded():
    class SmallConfig(TestingConfig):
        MAX_SESSIONS = 10

    app = create_app(SmallConfig, client_factory=lambda: FakeEventClient())
    for _ in range(50):
        app.test_client().get("/evento")
    assert len(app.extensions["evento"]) == 10


def test_production_requires_secret_key():
    class ProductionConfig(TestingConfig):
        PRODUCTION = True
        SECRET_KEY = DEFAULT_SECRET_KEY

    with pytest.raises(ValueError):
        create_app(ProductionConfig, client_factory=FakeEventClient)


def test_production_with_secret_key():
    class ProductionConfig(TestingConfig):
        PRODUCTION = True
        SECRET_KEY = "a-real-secret"

    assert create_app(ProductionConfig, client_factory=FakeEventClient) is not None
