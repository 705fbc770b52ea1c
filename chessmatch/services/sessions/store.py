from typing import Dict, Iterator, Optional

from chessmatch.models import Session


class SessionStore:
    """In-memory mapping of session id to Session, kept in creation order."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def insert(self, session: Session) -> Session:
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def find_by_connection(self, connection_id: str) -> Optional[Session]:
        for session in self._sessions.values():
            if session.role_of(connection_id) is not None:
                return session
        return None

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __iter__(self) -> Iterator[Session]:
        # Snapshot so callers may delete while iterating
        return iter(list(self._sessions.values()))

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
