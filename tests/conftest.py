"""Pytest configuration and fixtures."""

import datetime

import pytest

from partstracker import create_app
from partstracker.extensions import db, session_store as _session_store
from partstracker.models import User
from partstracker.services import parts as parts_service
from partstracker.services import users as users_service

ADMIN_USERNAME = "Braeden"
GUEST_USERNAME = "guestuser"
PASSWORD = "P@ssW0rd!"


class FakeClock:
    """Clock the tests move forward by hand."""

    def __init__(self, start=None):
        # Starts at the real time so cookie jars do not drop cookies as expired
        self.now = start or datetime.datetime.now(datetime.timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture
def app():
    """Application on an in-memory database with an active app context."""
    app = create_app('partstracker.config.TestingConfig')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    _session_store.dispose()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def clock(app, fake_clock):
    """Puts the application's session store on the fake clock."""
    previous = _session_store.clock
    _session_store.clock = fake_clock
    yield fake_clock
    _session_store.clock = previous


@pytest.fixture
def session_store(app, clock):
    return _session_store


@pytest.fixture
def client(app):
    return app.test_client()


# Test data fixtures
@pytest.fixture
def admin_user(app):
    return users_service.register(ADMIN_USERNAME, PASSWORD, PASSWORD)


@pytest.fixture
def guest_user(app):
    return users_service.register(GUEST_USERNAME, PASSWORD, PASSWORD)


@pytest.fixture
def alice(app):
    """A user inserted directly, bypassing the registration policy."""
    user = User(username="Alice", password="not-a-real-hash", role_id=2)
    db.session.add(user)
    db.session.commit()
    return user.to_dict()


@pytest.fixture
def tire(app):
    return parts_service.create_part(1001, "Tire", "New")


@pytest.fixture
def login(client, clock):
    """Logs the test client in; the session cookie stays in the client's jar."""

    def _login(username, password=PASSWORD):
        return client.post("/users/login", json={"username": username, "password": password})

    return _login
