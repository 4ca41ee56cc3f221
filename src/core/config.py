"""
Engine settings.

Geometry of the starting board lives as constants next to the code that uses it (see src/engine/board.py).
Only the knobs a game host may reasonably want to turn are collected here.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from src.core.exceptions import ConfigurationError
from src.core.shared_types import PieceType

PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)


class GrowthSettings(BaseModel):
    """How many cells a single growth event tries to add, and how hard it tries."""

    model_config = ConfigDict(frozen=True)

    min_cells: int = 1
    max_cells: int = 8
    max_attempts: int = 50

    @field_validator(*["min_cells", "max_attempts"])
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ConfigurationError(f"Growth setting must be at least 1, got {value}.")
        return value

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        if self.max_cells < self.min_cells:
            raise ConfigurationError(
                f"max_cells ({self.max_cells}) cannot be smaller than min_cells ({self.min_cells})."
            )
        return self


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    growth: GrowthSettings = GrowthSettings()
    default_promotion: PieceType = PieceType.QUEEN

    @field_validator("default_promotion")
    @classmethod
    def validate_promotion(cls, value: PieceType) -> PieceType:
        if value not in PROMOTION_OPTIONS:
            raise ConfigurationError(
                f"Cannot promote into {value}. Pick one from {','.join(PROMOTION_OPTIONS)}"
            )
        return value


DEFAULT_SETTINGS = EngineSettings()
