"""Rules-engine adapter over python-chess.

The session core only needs three answers from the rules engine: whose turn
it is, whether a move can be applied, and the resulting position as FEN.
Move legality failures come back as a ``MoveResult`` instead of an exception.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import chess

WHITE = 'w'
BLACK = 'b'


@dataclass(frozen=True)
class MoveResult:
    legal: bool
    fen: str
    san: Optional[str] = None
    reason: Optional[str] = None


class ChessRules:
    def __init__(self, fen: Optional[str] = None) -> None:
        self.board = chess.Board(fen) if fen else chess.Board()

    def fen(self) -> str:
        return self.board.fen()

    def side_to_move(self) -> str:
        return WHITE if self.board.turn == chess.WHITE else BLACK

    def apply(self, move: Any) -> MoveResult:
        """Try to play ``move`` on the board.

        ``move`` is either a mapping with ``from``/``to`` squares and an
        optional ``promotion`` piece letter, or a SAN/UCI string.
        """
        try:
            parsed = self._parse(move)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            return MoveResult(legal=False, fen=self.fen(), reason=str(exc) or exc.__class__.__name__)
        # Null moves ("0000", "--") parse fine but never count as a played move
        if not parsed:
            return MoveResult(legal=False, fen=self.fen(), reason=f"illegal move: {move!r}")
        san = self.board.san(parsed)
        self.board.push(parsed)
        return MoveResult(legal=True, fen=self.fen(), san=san)

    def _parse(self, move: Any) -> Optional[chess.Move]:
        if isinstance(move, str):
            return self._parse_text(move.strip())
        if isinstance(move, Mapping):
            return self._parse_squares(move)
        raise TypeError(f"unsupported move descriptor: {type(move).__name__}")

    def _parse_text(self, text: str) -> Optional[chess.Move]:
        if not text:
            raise ValueError('empty move')
        try:
            return self.board.parse_san(text)
        except ValueError:
            pass
        # parse_uci raises IllegalMoveError (a ValueError) for well-formed but illegal moves
        return self.board.parse_uci(text.lower())

    def _parse_squares(self, move: Mapping) -> Optional[chess.Move]:
        from_square = chess.parse_square(str(move['from']).lower())
        to_square = chess.parse_square(str(move['to']).lower())
        promotion = move.get('promotion')
        promotion_piece = None
        if promotion:
            symbol = str(promotion).lower()
            if symbol not in ('q', 'r', 'b', 'n'):
                raise ValueError(f"invalid promotion piece: {promotion}")
            promotion_piece = chess.Piece.from_symbol(symbol).piece_type
        for candidate in self.board.legal_moves:
            if candidate.from_square != from_square or candidate.to_square != to_square:
                continue
            # Promotion letter is ignored for ordinary moves, required for promotions
            if candidate.promotion is None or candidate.promotion == promotion_piece:
                return candidate
        return None
