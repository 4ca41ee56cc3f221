"""
Checks for the invariants the rule engine takes for granted.

The engine never produces a broken snapshot itself, so these only need to run on snapshots that come from elsewhere
(ex. received from the other player, or put together by hand for a puzzle).
"""

from collections import Counter

from src.core.exceptions import InvalidSnapshotError
from src.core.shared_types import Color, PieceType
from src.engine.board import Board


def snapshot_problems(board: Board) -> list[str]:
    """Describe every broken invariant. Empty list if the snapshot is fine."""
    problems: list[str] = []

    for piece in board.pieces:
        if piece.position not in board.cells:
            problems.append(f"Piece {piece.id!r} stands on {piece.position.to_key()}, which is not a cell of the board.")

    id_counts = Counter(piece.id for piece in board.pieces)
    for piece_id, count in id_counts.items():
        if count > 1:
            problems.append(f"Piece id {piece_id!r} is used {count} times.")

    position_counts = Counter(piece.position for piece in board.pieces)
    for position, count in position_counts.items():
        if count > 1:
            problems.append(f"{count} pieces share position {position.to_key()}.")

    for color in Color:
        kings = [
            piece
            for piece in board.pieces_of(color)
            if piece.type == PieceType.KING
        ]
        if len(kings) > 1:
            problems.append(f"{color} has {len(kings)} kings.")

    return problems


def validate_board(board: Board) -> Board:
    """Raise if the snapshot breaks an invariant, otherwise hand it back (so it can be used inline)."""
    problems = snapshot_problems(board)
    if problems:
        raise InvalidSnapshotError("Invalid board snapshot:\n" + "\n".join(problems))
    return board
