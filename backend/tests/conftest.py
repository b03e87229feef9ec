import os
import sys
import pytest

# Ensure the backend root (containing the `dotbox` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from dotbox import create_app, socketio
from dotbox.services.games import GameSession, SessionSettings


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SOCKETIO_NAMESPACE = '/ws'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def sio_factory(flask_app):
    """Build any number of connected Socket.IO clients; each is a distinct player."""
    clients = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        test_client.get_received('/ws')  # flush 'connected'
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        if test_client.is_connected('/ws'):
            test_client.disconnect(namespace='/ws')


@pytest.fixture()
def settings():
    return SessionSettings(min_players=2, min_grid_size=3, max_grid_size=8, default_rows=4, default_cols=4)


@pytest.fixture()
def two_player_room(settings):
    """Waiting room hosted by 'alice' with 'bob' seated second."""
    session = GameSession.create('ROOM01', 'alice', 'Alice', settings=settings, clock=lambda: 1000.0)
    session.join('bob', 'Bob')
    return session
