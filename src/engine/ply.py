"""
A full ply: everything that happens when a player actually makes a move.
----

`rules.apply_move()` is deliberately minimal (it is used to simulate moves while checking for check).
Playing a move for real needs a few more steps on top of it:

1. make sure it is your turn and the move is legal
2. apply the move
3. castling? --> also move the rook next to the king
4. pawn reached the promotion zone? --> promote it
5. hand the turn to the opponent and remember the move (for en passant next turn)
"""

import logging
from dataclasses import replace
from typing import Optional

from src.core.config import DEFAULT_SETTINGS, PROMOTION_OPTIONS, EngineSettings
from src.core.exceptions import IllegalMoveError, NotYourTurnError
from src.core.shared_types import Color, GameStatus, PieceType
from src.engine.board import Board
from src.engine.moves import Move
from src.engine.pieces import Piece, opponent_of
from src.engine.position import Position
from src.engine.rules import apply_move, generate_moves, has_legal_move, is_in_check

logger = logging.getLogger("chaotic_chess.ply")


def is_promotion_move(board: Board, move: Move) -> bool:
    """
    A pawn promotes on the far edge of the board on its file, as long as that edge is on or past the last rank
    of the starting board (see `PROMOTION_RANK`).

    NOTE: on the starting 8x8 board this is the usual last rank. Once the board grows past it, the promotion
    zone moves along. A bump that growth added in the middle of the board does not promote.
    """
    if move.piece.type != PieceType.PAWN:
        return False
    if not move.piece.reached_promotion_rank(move.to_position):
        return False
    ahead = move.to_position.shifted(0, move.piece.forward)
    return ahead not in board.cells


def en_passant_victim(board: Board, piece: Piece, to_position: Position) -> Optional[Piece]:
    """The pawn taken when moving diagonally onto an empty cell. Stands on the destination's file and the origin's rank."""
    is_diagonal_to_empty = (
        piece.type == PieceType.PAWN
        and to_position.x != piece.position.x
        and board.piece_at(to_position) is None
    )
    if not is_diagonal_to_empty:
        return None
    victim = board.piece_at(Position(to_position.x, piece.position.y))
    if victim is None or victim.color == piece.color:
        return None
    return victim


def build_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    promote_to: Optional[PieceType] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Move:
    """
    Snapshot of the moving piece / captured piece before the update is done.

    Pawns moving into the promotion zone without an explicit choice promote into `settings.default_promotion`.
    """
    piece = board.piece_at(from_position)
    if piece is None:
        raise IllegalMoveError(f"There is no piece on {from_position.to_key()}.")

    captured = board.piece_at(to_position) or en_passant_victim(board, piece, to_position)
    move = Move(from_position, to_position, piece, captured)

    if not is_promotion_move(board, move):
        if promote_to is not None:
            raise IllegalMoveError(
                f"Only a pawn entering the promotion zone can promote. Move: {from_position.to_key()} -> {to_position.to_key()}"
            )
        return move

    choice = promote_to or settings.default_promotion
    if choice not in PROMOTION_OPTIONS:
        raise IllegalMoveError(
            f"Cannot promote into {choice}. Pick one from {','.join(PROMOTION_OPTIONS)}"
        )
    return replace(move, promote_to=choice)


def finalize_ply(board: Board, move: Move) -> Board:
    """
    Apply an (already validated) move, including its side effects, and pass the turn.
    """
    after = apply_move(board, move)

    if move.is_castling():
        after = _move_castling_rook(board, after, move)

    if move.promote_to is not None:
        after = _promote_pawn(after, move)

    return replace(after, turn=opponent_of(move.piece.color), last_move=move)


def play_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    promote_to: Optional[PieceType] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Board:
    """
    Attempt to make a move
    -----

    Raises NotYourTurnError / IllegalMoveError if the move cannot be played. Otherwise returns the new snapshot.
    """
    piece = board.piece_at(from_position)
    if piece is None:
        raise IllegalMoveError(f"There is no piece on {from_position.to_key()}.")

    if piece.color != board.turn:
        raise NotYourTurnError(
            f"It is not your turn. Waiting for {board.turn} to make a move first."
        )

    if to_position not in generate_moves(board, from_position):
        raise IllegalMoveError(
            f"Move not allowed: {piece.type} {from_position.to_key()} -> {to_position.to_key()}"
        )

    move = build_move(board, from_position, to_position, promote_to, settings)
    logger.debug(
        f"{piece.color} plays {piece.type} {from_position.to_key()} -> {to_position.to_key()}"
    )
    return finalize_ply(board, move)


def game_status(board: Board) -> GameStatus:
    """Has the game ended for the player that is about to move?"""
    if has_legal_move(board, board.turn):
        return GameStatus.IN_PROGRESS
    if is_in_check(board, board.turn):
        return GameStatus.CHECKMATE
    return GameStatus.STALEMATE


def winner(board: Board) -> Optional[Color]:
    """
    Only checkmate has a winner.
    Given we know it is checkmate, the player who is to move just got mated and the opponent must be the winner
    """
    if game_status(board) != GameStatus.CHECKMATE:
        return None
    return opponent_of(board.turn)


# -- PRIVATE HELPERS ---
def _move_castling_rook(before: Board, after: Board, move: Move) -> Board:
    """The rook jumps over the king: it ends up on the square the king just crossed."""
    direction = 1 if move.dx > 0 else -1
    king_from = move.from_position
    rooks = [
        piece
        for piece in before.pieces_of(move.piece.color)
        if piece.type == PieceType.ROOK
        and piece.position.y == king_from.y
        and (piece.position.x - king_from.x) * direction > 0
    ]
    if not rooks:
        # castling moves are only ever generated towards a rook
        return after

    rook = min(rooks, key=lambda piece: abs(piece.position.x - king_from.x))
    rook_to = king_from.shifted(direction, 0)
    logger.info(f"{move.piece.color} castles: rook {rook.position.to_key()} -> {rook_to.to_key()}")
    return after.with_pieces(
        rook.moved_to(rook_to) if piece.id == rook.id else piece
        for piece in after.pieces
    )


def _promote_pawn(after: Board, move: Move) -> Board:
    """promote the pawn on the target square"""
    # for the type checker
    assert move.promote_to is not None
    logger.info(f"{move.piece.color} promotes {move.piece.id!r} into {move.promote_to}")
    return after.with_pieces(
        piece.promoted_to(move.promote_to) if piece.position == move.to_position else piece
        for piece in after.pieces
    )
