import threading
from typing import Any, Dict, List, Optional

from .coordinator import SessionCoordinator
from .matchmaker import Matchmaker
from .store import SessionStore
from .transport import Transport


class Lobby:
    """Owns all session state for one application instance.

    Socket.IO handlers may run on several threads, so every entry point
    takes the same lock and runs to completion (broadcasts included)
    before the next event touches a session.
    """

    def __init__(self, transport: Transport, new_session_interval: int = 3, max_observers: int = 2) -> None:
        self.store = SessionStore()
        self.matchmaker = Matchmaker(self.store, transport,
                                     new_session_interval=new_session_interval,
                                     max_observers=max_observers)
        self.coordinator = SessionCoordinator(self.store, transport)
        self.lock = threading.RLock()

    @classmethod
    def from_config(cls, config, transport: Transport) -> 'Lobby':
        return cls(
            transport,
            new_session_interval=int(config.get('NEW_SESSION_INTERVAL', 3)),
            max_observers=int(config.get('MAX_OBSERVERS', 2)),
        )

    @property
    def connection_count(self) -> int:
        with self.lock:
            return self.matchmaker.connection_count

    def connect(self, connection_id: str):
        with self.lock:
            return self.matchmaker.assign(connection_id)

    def submit_move(self, connection_id: str, move: Any) -> None:
        with self.lock:
            self.coordinator.submit_move(connection_id, move)

    def disconnect(self, connection_id: str):
        with self.lock:
            return self.coordinator.disconnect(connection_id)

    def snapshot(self) -> List[Dict[str, Any]]:
        with self.lock:
            return [session.to_dict() for session in self.store]

    def summary(self) -> Dict[str, Any]:
        """Connection count and session list taken under one lock."""
        with self.lock:
            return {
                'connection_count': self.matchmaker.connection_count,
                'sessions': [session.to_dict() for session in self.store],
            }

    def describe(self, session_id: str) -> Optional[Dict[str, Any]]:
        with self.lock:
            session = self.store.get(session_id)
            return session.to_dict() if session else None
