import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chessmatch.services.sessions.rules import ChessRules, WHITE, BLACK


class Role(str, Enum):
    FIRST_PLAYER = 'first_player'
    SECOND_PLAYER = 'second_player'
    OBSERVER = 'observer'

    @property
    def color(self) -> Optional[str]:
        if self is Role.FIRST_PLAYER:
            return WHITE
        if self is Role.SECOND_PLAYER:
            return BLACK
        return None


@dataclass
class Session:
    """One chess game: two seats, a bounded observer list and its own board."""
    first_player: Optional[str] = None
    second_player: Optional[str] = None
    observers: List[str] = field(default_factory=list)
    rules: ChessRules = field(default_factory=ChessRules)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)

    @property
    def room(self) -> str:
        return self.id

    @property
    def is_empty(self) -> bool:
        return self.first_player is None and self.second_player is None

    def participants(self) -> List[str]:
        seats = [sid for sid in (self.first_player, self.second_player) if sid is not None]
        return seats + list(self.observers)

    def role_of(self, connection_id: str) -> Optional[Role]:
        if connection_id == self.first_player:
            return Role.FIRST_PLAYER
        if connection_id == self.second_player:
            return Role.SECOND_PLAYER
        if connection_id in self.observers:
            return Role.OBSERVER
        return None

    def seat_holder(self, color: str) -> Optional[str]:
        # White is always the first seat, black the second
        return self.first_player if color == WHITE else self.second_player

    def to_dict(self):
        return {
            'id': self.id,
            'first_player': self.first_player,
            'second_player': self.second_player,
            'observers': list(self.observers),
            'fen': self.rules.fen(),
            'turn': self.rules.side_to_move(),
            'created_at': self.created_at,
        }
