"""
Board growth: the playable area spreads out, a few cells at a time.
"""

import logging
import random
from typing import NamedTuple, Optional

from src.core.config import DEFAULT_SETTINGS, GrowthSettings
from src.engine.board import Board
from src.engine.position import CellSet, Position, Vector

logger = logging.getLogger("chaotic_chess.growth")

NEIGHBOUR_DELTAS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]


class GrowthResult(NamedTuple):
    cells: CellSet
    added_count: int


def grow_board(
    cells: CellSet,
    rng: Optional[random.Random] = None,
    settings: GrowthSettings = DEFAULT_SETTINGS.growth,
) -> GrowthResult:
    """
    Randomly attach new cells to the edge of the board.
    ----

    1. Pick how many cells to add (uniform between `min_cells` and `max_cells`)
    2. Pick a random existing cell and one of its four neighbours. If the neighbour is new, add it.
    3. Repeat until enough cells were added, or `max_attempts` picks have been spent

    Best effort: picking a neighbour that already exists just costs an attempt, so fewer cells than
    planned may end up being added. The input set is never modified.

    NOTE: only cells of the input are used as seeds, so new cells do not sprout further cells in the same event.
    """
    rng = rng if rng is not None else random.Random()
    if not cells:
        logger.debug("Cannot grow a board without cells.")
        return GrowthResult(frozenset(), 0)

    target_count = rng.randint(settings.min_cells, settings.max_cells)
    # sorted: iteration order of a set is not stable, which would make a seeded rng useless
    seeds: list[Position] = sorted(cells)
    grown: set[Position] = set(cells)
    added = 0

    attempts = 0
    while attempts < settings.max_attempts and added < target_count:
        attempts += 1
        seed = rng.choice(seeds)
        dx, dy = rng.choice(NEIGHBOUR_DELTAS)
        candidate = seed.shifted(dx, dy)
        if candidate not in grown:
            grown.add(candidate)
            added += 1

    logger.debug(
        f"Board grew by {added}/{target_count} cells in {attempts} attempts ({len(grown)} cells total)"
    )
    return GrowthResult(frozenset(grown), added)


def expand_board(
    board: Board,
    rng: Optional[random.Random] = None,
    settings: GrowthSettings = DEFAULT_SETTINGS.growth,
) -> tuple[Board, int]:
    """Convenience method: grow the cells of a snapshot and return the new snapshot + number of cells added"""
    cells, added = grow_board(board.cells, rng=rng, settings=settings)
    return board.with_cells(cells), added
