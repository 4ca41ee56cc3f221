"""Unit tests for /src/engine/growth.py"""

import random
from unittest.mock import Mock

import pytest

from src.core.config import GrowthSettings
from src.engine.board import Board
from src.engine.growth import NEIGHBOUR_DELTAS, expand_board, grow_board
from src.engine.position import Position, rectangle


@pytest.mark.parametrize("seed", range(25))
def test_growth_is_superset(seed: int) -> None:
    cells = rectangle(8, 8)
    grown, added = grow_board(cells, rng=random.Random(seed))
    assert cells <= grown
    assert added == len(grown) - len(cells)
    assert 0 <= added <= 8


@pytest.mark.parametrize("seed", range(25))
def test_new_cells_touch_old_cells(seed: int) -> None:
    """Every new cell is an axis neighbour of a cell that existed before the growth event"""
    cells = rectangle(3, 3)
    grown, _ = grow_board(cells, rng=random.Random(seed))
    for cell in grown - cells:
        assert any(cell.shifted(dx, dy) in cells for dx, dy in NEIGHBOUR_DELTAS)


def test_growth_does_not_touch_input() -> None:
    cells = {Position(0, 0), Position(1, 0)}
    copy = set(cells)
    grow_board(frozenset(cells), rng=random.Random(1))
    assert cells == copy


def test_growth_is_reproducible_with_seed() -> None:
    """Set iteration order must not leak into the result"""
    cells = rectangle(8, 8)
    first = grow_board(cells, rng=random.Random(42))
    second = grow_board(frozenset(sorted(cells, reverse=True)), rng=random.Random(42))
    assert first == second


def test_growth_without_cells() -> None:
    assert grow_board(frozenset(), rng=random.Random(0)) == (frozenset(), 0)


def test_growth_best_effort_when_attempts_run_out() -> None:
    """
    Random source that keeps picking the same neighbour: after the first hit every attempt is a collision,
    and the growth gives up after `max_attempts` with fewer cells than planned.
    """
    rng = Mock(spec=random.Random)
    rng.randint.return_value = 3
    rng.choice.side_effect = lambda options: options[0]

    grown, added = grow_board(frozenset({Position(0, 0)}), rng=rng)
    assert added == 1
    assert grown == {Position(0, 0), Position(1, 0)}
    # one pick of a cell + one pick of a neighbour per attempt
    assert rng.choice.call_count == 2 * GrowthSettings().max_attempts
    rng.randint.assert_called_once_with(1, 8)


def test_growth_stops_at_target() -> None:
    rng = Mock(spec=random.Random)
    rng.randint.return_value = 2
    deltas = iter(NEIGHBOUR_DELTAS)
    rng.choice.side_effect = lambda options: next(deltas) if options is NEIGHBOUR_DELTAS else options[0]

    grown, added = grow_board(frozenset({Position(0, 0)}), rng=rng)
    assert added == 2
    assert grown == {Position(0, 0), Position(1, 0), Position(-1, 0)}
    assert rng.choice.call_count == 4


def test_growth_settings() -> None:
    settings = GrowthSettings(min_cells=3, max_cells=3, max_attempts=1)
    grown, added = grow_board(frozenset({Position(0, 0)}), rng=random.Random(0), settings=settings)
    # a single attempt can add a single cell at most
    assert added == 1
    assert len(grown) == 2


def test_growth_settings_exact_count() -> None:
    """A lone cell has four free neighbours, so asking for two new cells will (practically always) succeed"""
    settings = GrowthSettings(min_cells=2, max_cells=2)
    _, added = grow_board(frozenset({Position(0, 0)}), rng=random.Random(7), settings=settings)
    assert added == 2


def test_expand_board_keeps_everything_but_cells() -> None:
    board = Board.standard()
    grown, added = expand_board(board, rng=random.Random(3))
    assert grown.pieces == board.pieces
    assert grown.turn == board.turn
    assert grown.last_move == board.last_move
    assert len(grown.cells) == len(board.cells) + added
    assert len(board.cells) == 64
