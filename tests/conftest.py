"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple modules.
"""

from typing import Callable, Iterable, Optional

import pytest

from src.core.shared_types import Color, PieceType
from src.engine.board import Board
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.position import Position, rectangle

# Same letters as in FEN: lower case for Black pieces, upper case for White pieces
CHAR_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

Layout = dict[tuple[int, int], str]
BoardFactory = Callable[..., Board]


def piece_from_char(char: str, x: int, y: int, has_moved: bool = False) -> Piece:
    color = Color.WHITE if char.isupper() else Color.BLACK
    return Piece(
        id=f"{char}-{x}-{y}",
        type=CHAR_TO_PIECE[char.lower()],
        color=color,
        position=Position(x, y),
        has_moved=has_moved,
    )


@pytest.fixture
def board_with() -> BoardFactory:
    """
    Call the inner function with a layout like {(4, 7): "K", (4, 0): "k"}.
    Cells default to the regular 8x8 board.
    """

    def _create_board(
        layout: Layout,
        cells: Optional[Iterable[Position]] = None,
        turn: Color = Color.WHITE,
        last_move: Optional[Move] = None,
        moved: Iterable[tuple[int, int]] = (),
    ) -> Board:
        moved_squares = set(moved)
        pieces = [
            piece_from_char(char, x, y, has_moved=(x, y) in moved_squares)
            for (x, y), char in layout.items()
        ]
        return Board(
            cells=frozenset(cells) if cells is not None else rectangle(8, 8),
            pieces=tuple(pieces),
            turn=turn,
            last_move=last_move,
        )

    return _create_board


@pytest.fixture
def castling_board(board_with: BoardFactory) -> Board:
    """Only the Kings and the Rooks on their starting squares. Ready to perform any castling move (if allowed)."""
    return board_with(
        {
            (4, 7): "K",
            (0, 7): "R",
            (7, 7): "R",
            (4, 0): "k",
            (0, 0): "r",
            (7, 0): "r",
        }
    )
