import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app, db
from scoreboard.config import Config
from scoreboard.services.state import ScoreModel, load_teams
from scoreboard.services.store import MemoryBackend, StateStore


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False


class FakeClock:
    """Deterministic clock: each call advances by one second."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import scoreboard.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def cli_runner(flask_app):
    return flask_app.test_cli_runner()


@pytest.fixture()
def admin_client(client):
    res = client.post('/login', json={'username': 'Pailin', 'password': 'pass123'})
    assert res.status_code == 200
    return client


@pytest.fixture()
def teams():
    return load_teams(Config.TEAMS)


@pytest.fixture()
def backend():
    return MemoryBackend()


@pytest.fixture()
def store(backend, teams):
    return StateStore(backend, teams)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def model(store, teams, clock):
    return ScoreModel(store, teams, clock=clock)


@pytest.fixture()
def model_factory(teams):
    """Independent models with their own store and clock."""
    def make():
        return ScoreModel(StateStore(MemoryBackend(), teams), teams, clock=FakeClock())
    return make
