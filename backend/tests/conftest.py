import os
import random
import sys
import pytest

# Ensure the backend root (containing the `lobbyserver` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lobbyserver import create_app, socketio
from lobbyserver.services.lobby import LobbyRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    MAX_PLAYERS = 6
    MAX_NAME_LENGTH = 24
    DECK_SIZE = 52
    HAND_SIZE = 7
    LOG_LEVEL = 'DEBUG'
    LOBBY_RNG = None


@pytest.fixture()
def flask_app():
    TestConfig.LOBBY_RNG = random.Random(1234)
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def app_registry(flask_app):
    return flask_app.extensions['lobby_registry']


@pytest.fixture()
def registry():
    return LobbyRegistry(max_players=6, rng=random.Random(42))


@pytest.fixture()
def rng():
    return random.Random(7)


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
