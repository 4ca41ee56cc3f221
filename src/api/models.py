"""
Transport models for replicating a board snapshot to the other player.

A set of positions does not serialize by itself, so cells travel as an explicit list of "x,y" keys
(same goes for every other position in the payload).
"""

from typing import Optional, Self

from pydantic import BaseModel, field_validator

from src.core.shared_types import Color, PieceType
from src.engine.board import Board
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.position import Position
from src.engine.validation import validate_board

PositionKey = str


def _validate_key(value: PositionKey) -> PositionKey:
    # raises InvalidRequestError for anything that does not look like "x,y"
    Position.from_key(value)
    return value


class PieceModel(BaseModel):
    id: str
    type: PieceType
    color: Color
    position: PositionKey
    has_moved: bool = False

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: PositionKey) -> PositionKey:
        return _validate_key(value)

    @classmethod
    def from_piece(cls, piece: Piece) -> Self:
        return cls(
            id=piece.id,
            type=piece.type,
            color=piece.color,
            position=piece.position.to_key(),
            has_moved=piece.has_moved,
        )

    def to_piece(self) -> Piece:
        return Piece(
            id=self.id,
            type=self.type,
            color=self.color,
            position=Position.from_key(self.position),
            has_moved=self.has_moved,
        )


class MoveModel(BaseModel):
    from_position: PositionKey
    to_position: PositionKey
    piece: PieceModel
    captured: Optional[PieceModel] = None
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_position", "to_position"])
    @classmethod
    def validate_position(cls, value: PositionKey) -> PositionKey:
        return _validate_key(value)

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            from_position=move.from_position.to_key(),
            to_position=move.to_position.to_key(),
            piece=PieceModel.from_piece(move.piece),
            captured=PieceModel.from_piece(move.captured) if move.captured else None,
            promote_to=move.promote_to,
        )

    def to_move(self) -> Move:
        return Move(
            from_position=Position.from_key(self.from_position),
            to_position=Position.from_key(self.to_position),
            piece=self.piece.to_piece(),
            captured=self.captured.to_piece() if self.captured else None,
            promote_to=self.promote_to,
        )


class SnapshotModel(BaseModel):
    """Transport-safe representation of a Board"""

    cells: list[PositionKey]
    pieces: list[PieceModel]
    turn: Color
    last_move: Optional[MoveModel] = None

    @field_validator("cells")
    @classmethod
    def validate_cells(cls, value: list[PositionKey]) -> list[PositionKey]:
        return [_validate_key(key) for key in value]

    @classmethod
    def from_board(cls, board: Board) -> Self:
        """Cells are sorted, so equal boards always produce equal payloads"""
        return cls(
            cells=[cell.to_key() for cell in sorted(board.cells)],
            pieces=[PieceModel.from_piece(piece) for piece in board.pieces],
            turn=board.turn,
            last_move=MoveModel.from_move(board.last_move) if board.last_move else None,
        )

    def to_board(self) -> Board:
        """Rebuild the snapshot. Raises InvalidSnapshotError if the received data breaks the board's invariants."""
        board = Board(
            cells=frozenset(Position.from_key(key) for key in self.cells),
            pieces=tuple(piece.to_piece() for piece in self.pieces),
            turn=self.turn,
            last_move=self.last_move.to_move() if self.last_move else None,
        )
        return validate_board(board)
