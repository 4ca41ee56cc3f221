"""The Board snapshot: everything there is to know about the game at one instant (cells, pieces, turn, last move)"""

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Iterable, Optional, Self

from src.core.exceptions import InvalidSnapshotError
from src.core.shared_types import Color, PieceType
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.position import CellSet, Position, rectangle

# The game starts on a regular board. It only becomes amorphous once it starts growing.
STANDARD_SIZE = 8
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
HOME_RANKS: dict[Color, tuple[int, int]] = {
    # (back rank, pawn rank)
    Color.WHITE: (7, 6),
    Color.BLACK: (0, 1),
}
ID_PREFIX: dict[Color, str] = {Color.WHITE: "w", Color.BLACK: "b"}


@dataclass(frozen=True)
class BoardBounds:
    """Smallest rectangle around all cells. Handy for anyone drawing the board."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of the game.
    ----

    * cells: the playable positions. Membership, not a coordinate range, defines the shape of the board.
    * pieces: all pieces on the board (ids are unique). Stored sorted by id, so the order they were passed in
      never makes two snapshots compare unequal
    * turn: color to move
    * last_move: the move that led to this snapshot (None at the start of the game)

    Nothing in the engine mutates a Board. Every change produces a new one.
    """

    cells: CellSet
    pieces: tuple[Piece, ...]
    turn: Color = Color.WHITE
    last_move: Optional[Move] = None

    def __post_init__(self) -> None:
        # accept any iterable, but store the hashable / immutable versions
        object.__setattr__(self, "cells", frozenset(self.cells))
        object.__setattr__(
            self, "pieces", tuple(sorted(self.pieces, key=lambda piece: (piece.id, piece.position)))
        )

    @classmethod
    def standard(cls) -> Self:
        """
        Standard chess setup on an 8x8 board.

        Black's pieces are on y=0 (pawns on y=1), White's on y=7 (pawns on y=6). White to move.
        """
        pieces: list[Piece] = []
        for color, (back_rank, pawn_rank) in HOME_RANKS.items():
            prefix = ID_PREFIX[color]
            for x, piece_type in enumerate(BACK_RANK):
                pieces.append(
                    Piece(f"{prefix}-p-{x}", PieceType.PAWN, color, Position(x, pawn_rank))
                )
                pieces.append(
                    Piece(f"{prefix}-m-{x}", piece_type, color, Position(x, back_rank))
                )
        return cls(rectangle(STANDARD_SIZE, STANDARD_SIZE), tuple(pieces))

    @cached_property
    def _occupancy(self) -> dict[Position, Piece]:
        return {piece.position: piece for piece in self.pieces}

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self._occupancy.get(position)

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.pieces if piece.color == color]

    def king_of(self, color: Color) -> Optional[Piece]:
        """The engine expects one king per color, but does not insist on it: the first one found is used"""
        return next(
            (
                piece
                for piece in self.pieces
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    def with_pieces(self, pieces: Iterable[Piece]) -> Self:
        return replace(self, pieces=tuple(pieces))

    def with_cells(self, cells: Iterable[Position]) -> Self:
        return replace(self, cells=frozenset(cells))

    def bounds(self) -> BoardBounds:
        """
        NOTE: the board is never empty in a real game. An empty cell set has no bounds
        """
        if not self.cells:
            raise InvalidSnapshotError("A board without cells has no bounds.")
        xs = [cell.x for cell in self.cells]
        ys = [cell.y for cell in self.cells]
        return BoardBounds(min(xs), max(xs), min(ys), max(ys))
