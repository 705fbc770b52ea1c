import logging
from typing import Any, Optional

from chessmatch.models import Role, Session
from .store import SessionStore
from .transport import Transport

logger = logging.getLogger(__name__)


class SessionCoordinator:
    def __init__(self, store: SessionStore, transport: Transport) -> None:
        self.store = store
        self.transport = transport

    def submit_move(self, connection_id: str, move: Any) -> None:
        """Apply ``move`` for ``connection_id`` if it holds the seat to move.

        Legal moves are broadcast to the whole session room, mover
        included. Illegal or malformed moves are bounced back to the
        submitter only, as are moves from connections that sit in no
        session. Out-of-turn moves are dropped without a reply.
        """
        session = self.store.find_by_connection(connection_id)
        if session is None:
            logger.debug(f"[move-rejected] sid={connection_id} reason=no_session")
            self.transport.emit(connection_id, 'move_rejected', {'move': move, 'reason': 'no_session'})
            return

        side = session.rules.side_to_move()
        if session.seat_holder(side) != connection_id:
            logger.debug(f"[move-ignored] sid={connection_id} session={session.id} reason=not_your_turn turn={side}")
            return

        result = session.rules.apply(move)
        if not result.legal:
            logger.info(f"[move-rejected] sid={connection_id} session={session.id} move={move!r} reason={result.reason}")
            self.transport.emit(connection_id, 'move_rejected', {'move': move, 'reason': result.reason})
            return

        logger.info(f"[move] sid={connection_id} session={session.id} san={result.san}")
        self.transport.broadcast(session.room, 'move_applied', {
            'session_id': session.id,
            'move': move,
            'san': result.san,
        })
        self.transport.broadcast(session.room, 'board_state', {
            'session_id': session.id,
            'fen': result.fen,
        })

    def disconnect(self, connection_id: str) -> Optional[Session]:
        """Release every slot held by ``connection_id``.

        Returns the affected session, or None if the connection held no
        slot anywhere.
        """
        for session in self.store:
            role = session.role_of(connection_id)
            if role is None:
                continue
            if role is Role.FIRST_PLAYER:
                self._destroy(session, reason='first_player_left')
            elif role is Role.SECOND_PLAYER:
                self._release_second_seat(session)
            else:
                session.observers.remove(connection_id)
                logger.info(f"[leave] sid={connection_id} session={session.id} role=observer")
            # Connection ids are unique, so the first match is the only one
            return session

        logger.debug(f"[leave] sid={connection_id} reason=no_session")
        return None

    def _release_second_seat(self, session: Session) -> None:
        leaving = session.second_player
        session.second_player = None
        if session.first_player is None:
            # The seat was held by a promoted player; nobody is left to play
            self._destroy(session, reason='no_seats_left')
            return

        promoted = session.first_player
        session.second_player = promoted
        session.first_player = None
        logger.info(f"[promote] session={session.id} left={leaving} promoted={promoted}")
        self.transport.broadcast(session.room, 'role_changed', {
            'role': Role.SECOND_PLAYER.value,
            'color': Role.SECOND_PLAYER.color,
            'connection_id': promoted,
        })

    def _destroy(self, session: Session, reason: str) -> None:
        logger.info(f"[session-end] session={session.id} reason={reason}")
        self.store.delete(session.id)
        self.transport.close_room(session.room)
