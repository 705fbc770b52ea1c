import os
import sys
import pytest

# Ensure the project root (containing the `chessmatch` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from chessmatch import create_app, socketio
from chessmatch.services.sessions.coordinator import SessionCoordinator
from chessmatch.services.sessions.matchmaker import Matchmaker
from chessmatch.services.sessions.store import SessionStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    NEW_SESSION_INTERVAL = 3
    MAX_OBSERVERS = 2
    LOG_LEVEL = 'DEBUG'


class RecordingTransport:
    """Transport double that remembers room membership and every send."""

    def __init__(self):
        self.rooms = {}
        self.sent = []  # (connection_id, event, payload) per delivered message
        self.closed = []

    def emit(self, connection_id, event, payload):
        self.sent.append((connection_id, event, payload))

    def broadcast(self, room, event, payload):
        for sid in self.rooms.get(room, []):
            self.sent.append((sid, event, payload))

    def join(self, connection_id, room):
        self.rooms.setdefault(room, []).append(connection_id)

    def close_room(self, room):
        self.rooms.pop(room, None)
        self.closed.append(room)

    def leave(self, connection_id):
        # Mirrors the transport dropping a disconnected socket from its rooms
        for members in self.rooms.values():
            if connection_id in members:
                members.remove(connection_id)

    def events_for(self, connection_id, event=None):
        return [(e, p) for sid, e, p in self.sent if sid == connection_id and (event is None or e == event)]

    def clear(self):
        self.sent = []


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def store():
    return SessionStore()


@pytest.fixture()
def matchmaker(store, transport):
    return Matchmaker(store, transport)


@pytest.fixture()
def coordinator(store, transport):
    return SessionCoordinator(store, transport)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_clients(flask_app):
    """Factory for Socket.IO test clients; every client is disconnected on teardown."""
    created = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        if test_client.is_connected():
            test_client.disconnect()
