import logging
from typing import Tuple

from chessmatch.models import Role, Session
from .store import SessionStore
from .transport import Transport

logger = logging.getLogger(__name__)

# Hard ceiling on observers per session; configuration may only lower it
MAX_OBSERVERS = 2


class Matchmaker:
    """Seat each new connection in a session.

    Every ``new_session_interval``-th accepted connection opens a fresh
    session as first player, even when other sessions still have open
    seats. Any other connection takes the first open second seat or
    observer slot in creation order, and only opens a new session when
    nothing is free.
    """

    def __init__(self, store: SessionStore, transport: Transport,
                 new_session_interval: int = 3, max_observers: int = MAX_OBSERVERS) -> None:
        if new_session_interval < 1:
            raise ValueError(f"new_session_interval must be at least 1, got {new_session_interval}")
        if not 0 <= max_observers <= MAX_OBSERVERS:
            raise ValueError(f"max_observers must be between 0 and {MAX_OBSERVERS}, got {max_observers}")
        self.store = store
        self.transport = transport
        self.new_session_interval = new_session_interval
        self.max_observers = max_observers
        self.connection_count = 0

    def assign(self, connection_id: str) -> Tuple[Session, Role]:
        self.connection_count += 1
        if self.connection_count % self.new_session_interval == 0:
            session, role = self._open_session(connection_id), Role.FIRST_PLAYER
        else:
            session, role = self._join_existing(connection_id)
            if session is None:
                session, role = self._open_session(connection_id), Role.FIRST_PLAYER

        logger.info(f"[join] sid={connection_id} session={session.id} role={role.value} count={self.connection_count}")
        self.transport.join(connection_id, session.room)
        self.transport.emit(connection_id, 'role_assigned', {
            'role': role.value,
            'color': role.color,
            'session_id': session.id,
        })
        self.transport.emit(connection_id, 'board_state', {
            'session_id': session.id,
            'fen': session.rules.fen(),
        })
        return session, role

    def _open_session(self, connection_id: str) -> Session:
        return self.store.insert(Session(first_player=connection_id))

    def _join_existing(self, connection_id: str):
        for session in self.store:
            if session.second_player is None:
                session.second_player = connection_id
                return session, Role.SECOND_PLAYER
            if len(session.observers) < self.max_observers:
                session.observers.append(connection_id)
                return session, Role.OBSERVER
        return None, None
