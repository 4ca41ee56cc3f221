"""
Legality rules of the game.
----

Combines the raw movement rules (moves.py) with everything that requires looking one move ahead:

* check detection
* filtering out moves that leave your own king in check (pins and "do not walk into check" follow from this)
* castling (cannot castle out of, through, or into check)
* checkmate and stalemate

There is no pin table or attack map: a candidate move is simply simulated on a copy of the snapshot and the
opponent's pieces are asked whether they can reach the king.
"""

from src.core.shared_types import Color, PieceType
from src.engine.board import Board
from src.engine.moves import MOVEMENT_RULES, CandidateMovesFn, Move
from src.engine.pieces import Piece, opponent_of
from src.engine.position import Position

# The king only needs the first two squares on its way to be safe: those are the ones it crosses / lands on
CASTLING_KING_STEPS = 2


def generate_moves(
    board: Board, position: Position, ignore_check: bool = False
) -> set[Position]:
    """
    Destinations for the piece standing on `position`.
    ----

    With `ignore_check=False` (the default) only legal moves are returned.
    `ignore_check=True` returns the raw movement rule (no castling, no check filter); it is what the
    check detection uses to find attacked squares and must never be presented to a player as legal.

    An empty position simply has no moves.
    """
    piece = board.piece_at(position)
    if piece is None:
        return set()

    movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
    candidates = movement_rule(piece, board)
    if ignore_check:
        return set(candidates)

    if piece.type == PieceType.KING:
        candidates.extend(castling_moves(board, piece))

    return {
        target
        for target in candidates
        if not leaves_king_in_check(board, piece, target)
    }


def legal_moves(board: Board, color: Color) -> dict[Position, set[Position]]:
    """All legal destinations per piece of a color. Pieces without any legal move are left out."""
    all_moves: dict[Position, set[Position]] = {}
    for piece in board.pieces_of(color):
        destinations = generate_moves(board, piece.position)
        if destinations:
            all_moves[piece.position] = destinations
    return all_moves


def is_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of the given color attacked?

    A board without a king of that color is never in check.
    """
    king = board.king_of(color)
    if king is None:
        return False

    for attacker in board.pieces_of(opponent_of(color)):
        if king.position in generate_moves(board, attacker.position, ignore_check=True):
            return True
    return False


def leaves_king_in_check(board: Board, piece: Piece, target: Position) -> bool:
    """Simulate the move and check if the mover's own king is (still) under attack afterwards"""
    simulated = apply_move(board, Move(piece.position, target, piece))
    return is_in_check(simulated, piece.color)


def apply_move(board: Board, move: Move) -> Board:
    """
    Pure transformation of the snapshot: make the move on a new Board.
    ----

    1. Remove whatever stands on the destination (capture)
    2. Relocate the piece on the origin, marking it as moved
    3. A pawn moving diagonally onto a cell that was empty is taking en passant:
       also remove the enemy piece on the destination's file and the origin's rank.

    NOTE: the turn, last move, promotion and the rook of a castling move are NOT handled here.
    The check detection only needs the king's safety. Full plies are assembled in ply.py
    """
    target_was_empty = board.piece_at(move.to_position) is None
    pieces: list[Piece] = []
    for piece in board.pieces:
        if piece.position == move.to_position:
            continue
        if piece.position == move.from_position:
            pieces.append(piece.moved_to(move.to_position))
        else:
            pieces.append(piece)

    is_en_passant = (
        move.piece.type == PieceType.PAWN and move.dx != 0 and target_was_empty
    )
    if is_en_passant:
        taken_square = Position(move.to_position.x, move.from_position.y)
        pieces = [
            piece
            for piece in pieces
            if piece.position != taken_square or piece.color == move.piece.color
        ]

    return board.with_pieces(pieces)


def castling_moves(board: Board, king: Piece) -> list[Position]:
    """
    Castling destinations for the king.
    ----

    **you are allowed to castle with a rook if**

    * Neither the king nor that rook has moved yet.
    * You are not currently in check (you cannot castle out of check).
    * The rook stands on the king's rank, with at least two cells in between.
    * Every cell in between exists and is empty.
    * The king is not attacked on the two squares it crosses / lands on.

    The king then jumps two squares towards the rook.
    """
    if king.has_moved or is_in_check(board, king.color):
        return []

    moves: list[Position] = []
    for rook in board.pieces_of(king.color):
        if rook.type != PieceType.ROOK or rook.has_moved:
            continue
        if rook.position.y != king.position.y:
            continue

        distance = abs(rook.position.x - king.position.x)
        if distance <= CASTLING_KING_STEPS:
            continue

        direction = 1 if rook.position.x > king.position.x else -1
        if _castling_path_is_clear(board, king, direction, distance):
            moves.append(king.position.shifted(CASTLING_KING_STEPS * direction, 0))
    return moves


def _castling_path_is_clear(
    board: Board, king: Piece, direction: int, distance: int
) -> bool:
    for step in range(1, distance):
        square = king.position.shifted(step * direction, 0)
        if square not in board.cells or board.piece_at(square) is not None:
            return False

        # Cannot pass through (or land on) a square that is under attack
        if step <= CASTLING_KING_STEPS and leaves_king_in_check(board, king, square):
            return False
    return True


# --- CHECKS FOR ENDING THE GAME ---
def has_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first piece that can still move"""
    return any(generate_moves(board, piece.position) for piece in board.pieces_of(color))


def is_checkmate(board: Board, color: Color) -> bool:
    return is_in_check(board, color) and not has_legal_move(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_in_check(board, color) and not has_legal_move(board, color)
