"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError

Vector = tuple[int, int]


@dataclass(frozen=True, order=True)
class Position:
    """
    Integer coordinates of a cell.

    There are no bounds here: a board is whatever set of positions is currently playable.
    Whether a position "exists" is only ever answered by the cell set of a board.
    """

    x: int
    y: int

    @classmethod
    def from_key(cls, key: str) -> Position:
        """Text form used on the wire: '3,-1' gets converted to (3, -1)"""
        parts = key.split(",")
        if len(parts) != 2:
            raise InvalidRequestError(f"Cannot interpret {key!r} as a position.")
        try:
            x, y = (int(part) for part in parts)
        except ValueError as e:
            raise InvalidRequestError(f"Cannot interpret {key!r} as a position.") from e
        return cls(x, y)

    def to_key(self) -> str:
        return f"{self.x},{self.y}"

    def shifted(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)


CellSet = frozenset[Position]


def rectangle(width: int, height: int) -> CellSet:
    """All positions with 0 <= x < width and 0 <= y < height"""
    return frozenset(Position(x, y) for y in range(height) for x in range(width))
