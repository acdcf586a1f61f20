import random

import pytest

from pursuit_grid.components import Position
from pursuit_grid.utils.placement import (
    border_position,
    interior_region,
    sample_position,
    sample_positions,
)
from tests.test_utils import on_border_ring


def test_interior_region_respects_margin() -> None:
    rng = random.Random(0)
    candidate = interior_region(12, 10, margin=2)
    for _ in range(200):
        pos = candidate(rng)
        assert 2 <= pos.x <= 9
        assert 2 <= pos.y <= 7


def test_interior_region_rejects_empty_region() -> None:
    with pytest.raises(ValueError):
        interior_region(5, 5, margin=3)


def test_border_position_stays_on_inner_ring() -> None:
    rng = random.Random(1)
    candidate = border_position(12, 10)
    seen = {candidate(rng) for _ in range(500)}
    assert all(on_border_ring(pos, 12, 10) for pos in seen)
    # All four edges get used.
    assert any(pos.y == 1 for pos in seen)
    assert any(pos.y == 8 for pos in seen)
    assert any(pos.x == 1 for pos in seen)
    assert any(pos.x == 10 for pos in seen)


def test_sample_positions_are_distinct_and_avoid_exclusions() -> None:
    rng = random.Random(2)
    excluded = {Position(x, y) for x in range(1, 6) for y in range(1, 9)}
    placed = sample_positions(rng, 10, interior_region(12, 10), exclusions=excluded)
    assert len(placed) == len(set(placed))
    assert not set(placed) & excluded


def test_sample_positions_keeps_distance_from_anchor() -> None:
    rng = random.Random(3)
    anchor = Position(6, 5)
    placed = sample_positions(
        rng,
        5,
        interior_region(12, 10),
        anchor=anchor,
        min_separation=4.0,
        max_attempts=1000,
    )
    assert placed
    assert all(pos.distance_to(anchor) >= 4.0 for pos in placed)


def test_sample_positions_shortfall_when_budget_runs_out() -> None:
    rng = random.Random(4)
    # 3 x 3 playfield has a single interior cell.
    placed = sample_positions(rng, 3, interior_region(3, 3))
    assert placed == [Position(1, 1)]


def test_sample_positions_zero_count() -> None:
    assert sample_positions(random.Random(0), 0, interior_region(12, 10)) == []


def test_sample_position_returns_none_when_everything_excluded() -> None:
    rng = random.Random(5)
    assert (
        sample_position(rng, interior_region(3, 3), exclusions={Position(1, 1)})
        is None
    )
