"""Defines the pieces that stand on the board"""

from dataclasses import dataclass, replace
from typing import Self

from src.core.shared_types import Color, PieceType
from src.engine.position import Position

# White pawns move UP the screen (towards smaller y), Black pawns move DOWN.
PAWN_DIRECTION: dict[Color, int] = {
    Color.WHITE: -1,
    Color.BLACK: 1,
}

# NOTE: the double step is granted by standing on this rank, not by `has_moved`.
PAWN_START_RANK: dict[Color, int] = {
    Color.WHITE: 6,
    Color.BLACK: 1,
}

# Last rank of the starting board. A pawn promotes on this rank or beyond it (where the board grew outwards),
# and only once no cell is left ahead of it. A cell added halfway up the board is never a promotion square.
PROMOTION_RANK: dict[Color, int] = {
    Color.WHITE: 0,
    Color.BLACK: 7,
}


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    """
    Immutable value record of a single piece.

    Moving or promoting a piece returns a new value, so older snapshots that still reference the old value stay valid.
    """

    id: str
    type: PieceType
    color: Color
    position: Position
    has_moved: bool = False

    def moved_to(self, position: Position) -> Self:
        return replace(self, position=position, has_moved=True)

    def promoted_to(self, piece_type: PieceType) -> Self:
        return replace(self, type=piece_type)

    @property
    def forward(self) -> int:
        """Direction along y in which this piece would move as a pawn"""
        return PAWN_DIRECTION[self.color]

    @property
    def on_start_rank(self) -> bool:
        return self.position.y == PAWN_START_RANK[self.color]

    def reached_promotion_rank(self, position: Position) -> bool:
        """Is `position` on (or past) the last rank of the starting board, seen from this piece's side?"""
        return (position.y - PROMOTION_RANK[self.color]) * self.forward >= 0
