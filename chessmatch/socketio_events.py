from flask_socketio import join_room, close_room, emit
from flask import current_app, request
from chessmatch import socketio
from chessmatch.services.sessions.lobby import Lobby
from typing import Any


class SocketIOTransport:
    """Transport backed by the shared Flask-SocketIO server."""

    def __init__(self, namespace: str = '/') -> None:
        self.namespace = namespace

    def emit(self, connection_id: str, event: str, payload: Any) -> None:
        socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def broadcast(self, room: str, event: str, payload: Any) -> None:
        socketio.emit(event, payload, to=room, namespace=self.namespace)

    def join(self, connection_id: str, room: str) -> None:
        join_room(room, sid=connection_id, namespace=self.namespace)

    def close_room(self, room: str) -> None:
        close_room(room, namespace=self.namespace)


def _lobby() -> Lobby:
    return current_app.extensions['chessmatch']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    _lobby().connect(sid)


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _lobby().disconnect(sid)


def handle_submit_move(data=None):
    # Accept either the bare descriptor or {"move": descriptor}
    move = data.get('move') if isinstance(data, dict) and 'move' in data else data
    _lobby().submit_move(_get_sid(), move)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('submit_move', handle_submit_move, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
