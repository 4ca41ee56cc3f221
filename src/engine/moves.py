"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the raw destination sets for each piece type.

Every rule here ignores check. Castling and the check-safety filter need to simulate moves, so they live in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.shared_types import PieceType
from src.engine.pieces import Piece
from src.engine.position import CellSet, Position, Vector


@dataclass(frozen=True)
class Move:
    """
    A move of a single piece.

    Serves both as a request to move and as the record kept in `Board.last_move`,
    which is what en passant eligibility is read from on the next turn.
    """

    from_position: Position
    to_position: Position
    piece: Piece
    captured: Optional[Piece] = None
    promote_to: Optional[PieceType] = None

    @property
    def dx(self) -> int:
        return self.to_position.x - self.from_position.x

    @property
    def dy(self) -> int:
        return self.to_position.y - self.from_position.y

    def is_pawn_double_step(self) -> bool:
        return self.piece.type == PieceType.PAWN and abs(self.dy) == 2

    def is_castling(self) -> bool:
        """The king never travels two files in a single move, unless castling"""
        return self.piece.type == PieceType.KING and abs(self.dx) == 2 and self.dy == 0


class Board(Protocol):
    """Just the parts the movement strategies need"""

    cells: CellSet
    last_move: Optional[Move]

    def piece_at(self, position: Position) -> Optional[Piece]: ...


# --- DIRECTIONS ---
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


# --- MOVEMENT RULES ---
def raycasting_move(piece: Piece, board: Board, directions: list[Vector]) -> list[Position]:
    """
    Raycasting algorithm
    -----

    ---
    Walk along each direction until we leave the set of playable cells or hit another piece.
    An opponent's piece is included (it can be captured), your own piece is not.

    NOTE: there is no edge of the board to compare against, only cells that exist or not.
    A hole in the board therefore stops the ray just like the outer rim does.
    """
    moves: list[Position] = []
    for dx, dy in directions:
        target = piece.position.shifted(dx, dy)
        while target in board.cells:
            occupant = board.piece_at(target)
            if occupant is not None:
                if occupant.color != piece.color:
                    moves.append(target)
                break
            moves.append(target)
            target = target.shifted(dx, dy)
    return moves


def single_step_move(piece: Piece, board: Board, deltas: list[Vector]) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that jump to a fixed offset"""
    moves: list[Position] = []
    for dx, dy in deltas:
        target = piece.position.shifted(dx, dy)
        if target not in board.cells:
            continue

        occupant = board.piece_at(target)
        if occupant is None or occupant.color != piece.color:
            moves.append(target)
    return moves


def is_en_passant_target(piece: Piece, target: Position, last_move: Optional[Move]) -> bool:
    """
    Could the pawn take en passant on the (empty) target square?

    Only if the previous move was an enemy pawn advancing two ranks, that ended up on the target's file
    and right next to our pawn (same rank as our pawn stands on).
    """
    if last_move is None or not last_move.is_pawn_double_step():
        return False
    return (
        last_move.piece.color != piece.color
        and last_move.to_position.x == target.x
        and last_move.to_position.y == piece.position.y
    )


def candidate_pawn_moves(piece: Piece, board: Board) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward onto an empty cell.
    - can move by two from its start rank, when both cells on the way exist and are empty
    - takes diagonally forward
    - takes en passant onto the empty cell behind a pawn that just made a double step
    """
    moves: list[Position] = []
    forward = piece.forward

    one_step = piece.position.shifted(0, forward)
    if one_step in board.cells and board.piece_at(one_step) is None:
        moves.append(one_step)
        two_step = piece.position.shifted(0, 2 * forward)
        if (
            piece.on_start_rank
            and two_step in board.cells
            and board.piece_at(two_step) is None
        ):
            moves.append(two_step)

    for dx in [-1, 1]:
        target = piece.position.shifted(dx, forward)
        if target not in board.cells:
            continue

        occupant = board.piece_at(target)
        if occupant is not None:
            if occupant.color != piece.color:
                moves.append(target)
        elif is_en_passant_target(piece, target, board.last_move):
            moves.append(target)
    return moves


def candidate_knight_moves(piece: Piece, board: Board) -> list[Position]:
    """Knights always jump such that |dx| + |dy| = 3"""
    return single_step_move(piece, board, KNIGHT_DELTAS)


def candidate_bishop_moves(piece: Piece, board: Board) -> list[Position]:
    """Bishops move diagonally: |dx| = |dy|"""
    return raycasting_move(piece, board, DIAGONALS)


def candidate_rook_moves(piece: Piece, board: Board) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(piece, board, STRAIGHTS)


def candidate_queen_moves(piece: Piece, board: Board) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_bishop_moves(piece, board) + candidate_rook_moves(piece, board)


def candidate_king_moves(piece: Piece, board: Board) -> list[Position]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately).
    """
    return single_step_move(piece, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board], list[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}
