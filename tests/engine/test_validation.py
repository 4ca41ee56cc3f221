"""Unit tests for /src/engine/validation.py"""

import pytest

from src.core.exceptions import InvalidSnapshotError
from src.core.shared_types import Color, PieceType
from src.engine.board import Board
from src.engine.pieces import Piece
from src.engine.position import Position, rectangle
from src.engine.validation import snapshot_problems, validate_board


def test_standard_board_is_valid() -> None:
    board = Board.standard()
    assert snapshot_problems(board) == []
    assert validate_board(board) is board


def test_grown_board_is_valid() -> None:
    """Pieces may stand anywhere, as long as it is a cell"""
    cells = rectangle(8, 8) | {Position(-1, 3)}
    board = Board(
        cells=cells,
        pieces=(Piece("w-m-0", PieceType.ROOK, Color.WHITE, Position(-1, 3)),),
    )
    assert snapshot_problems(board) == []


def test_board_without_kings_is_valid() -> None:
    board = Board(cells=rectangle(2, 2), pieces=())
    assert snapshot_problems(board) == []


@pytest.mark.parametrize(
    "pieces, expected_fragment",
    [
        (
            (Piece("w-p-0", PieceType.PAWN, Color.WHITE, Position(9, 9)),),
            "not a cell",
        ),
        (
            (
                Piece("twin", PieceType.PAWN, Color.WHITE, Position(0, 0)),
                Piece("twin", PieceType.PAWN, Color.BLACK, Position(1, 1)),
            ),
            "used 2 times",
        ),
        (
            (
                Piece("a", PieceType.PAWN, Color.WHITE, Position(0, 0)),
                Piece("b", PieceType.KNIGHT, Color.BLACK, Position(0, 0)),
            ),
            "share position 0,0",
        ),
        (
            (
                Piece("k1", PieceType.KING, Color.BLACK, Position(0, 0)),
                Piece("k2", PieceType.KING, Color.BLACK, Position(1, 1)),
            ),
            "black has 2 kings",
        ),
    ],
)
def test_broken_snapshots(pieces: tuple[Piece, ...], expected_fragment: str) -> None:
    board = Board(cells=rectangle(8, 8), pieces=pieces)
    problems = snapshot_problems(board)
    assert len(problems) == 1
    assert expected_fragment in problems[0]

    with pytest.raises(InvalidSnapshotError, match=expected_fragment):
        validate_board(board)


def test_all_problems_are_reported() -> None:
    pieces = (
        Piece("twin", PieceType.KING, Color.WHITE, Position(0, 0)),
        Piece("twin", PieceType.KING, Color.WHITE, Position(20, 20)),
    )
    board = Board(cells=rectangle(8, 8), pieces=pieces)
    assert len(snapshot_problems(board)) == 3
