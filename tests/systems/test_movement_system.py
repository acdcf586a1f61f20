from dataclasses import replace

import pytest

from pursuit_grid.components import Enemy, Position
from pursuit_grid.systems.movement import (
    enemy_movement_system,
    pursue,
    step_size,
    wander,
)
from pursuit_grid.types import SpeedRounding
from tests.test_utils import (
    SMALL_CONFIG,
    FixedRandom,
    enemy_ids,
    make_state,
    with_enemy,
)

NO_OBSTACLES: frozenset = frozenset()


@pytest.mark.parametrize(
    "speed,rounding,expected",
    [
        (1.0, SpeedRounding.TRUNCATE, 1),
        (1.03, SpeedRounding.TRUNCATE, 1),
        (1.99, SpeedRounding.TRUNCATE, 1),
        (2.0, SpeedRounding.TRUNCATE, 2),
        (0.5, SpeedRounding.TRUNCATE, 0),
        (1.5, SpeedRounding.NEAREST, 2),
        (1.49, SpeedRounding.NEAREST, 1),
    ],
)
def test_step_size(speed: float, rounding: SpeedRounding, expected: int) -> None:
    assert step_size(speed, rounding) == expected


def test_pursue_prefers_larger_horizontal_distance() -> None:
    assert pursue(Position(5, 5), Position(9, 6), 1, NO_OBSTACLES, SMALL_CONFIG) == Position(6, 5)


def test_pursue_tie_moves_vertically() -> None:
    assert pursue(Position(5, 5), Position(8, 8), 1, NO_OBSTACLES, SMALL_CONFIG) == Position(5, 6)


def test_pursue_same_row_moves_horizontally() -> None:
    assert pursue(Position(5, 5), Position(2, 5), 1, NO_OBSTACLES, SMALL_CONFIG) == Position(4, 5)


def test_pursue_on_target_stays() -> None:
    assert pursue(Position(5, 5), Position(5, 5), 1, NO_OBSTACLES, SMALL_CONFIG) == Position(5, 5)


def test_pursue_blocked_does_not_slide() -> None:
    obstacles = frozenset({Position(5, 6)})
    assert pursue(Position(5, 5), Position(8, 8), 1, obstacles, SMALL_CONFIG) == Position(5, 5)


def test_pursue_never_leaves_interior() -> None:
    # Two-cell step would land on the frame.
    assert pursue(Position(2, 5), Position(1, 5), 2, NO_OBSTACLES, SMALL_CONFIG) == Position(2, 5)


def test_pursue_multi_cell_step_can_overshoot() -> None:
    assert pursue(Position(5, 5), Position(6, 5), 2, NO_OBSTACLES, SMALL_CONFIG) == Position(7, 5)


def test_wander_counts_idle_ticks() -> None:
    enemy = Enemy(speed=1.0, vision_range=10.0)
    rng = FixedRandom(value=0.0, index=1)

    enemy, pos = wander(enemy, Position(5, 5), 1, NO_OBSTACLES, SMALL_CONFIG, rng)
    assert (enemy.idle_ticks, pos) == (1, Position(5, 5))
    enemy, pos = wander(enemy, pos, 1, NO_OBSTACLES, SMALL_CONFIG, rng)
    assert (enemy.idle_ticks, pos) == (2, Position(5, 5))
    enemy, pos = wander(enemy, pos, 1, NO_OBSTACLES, SMALL_CONFIG, rng)
    # Third idle tick: counter resets and the roll succeeds (index 1 is right).
    assert (enemy.idle_ticks, pos) == (0, Position(6, 5))


def test_wander_failed_roll_stays_put() -> None:
    enemy = Enemy(speed=1.0, vision_range=10.0, idle_ticks=2)
    enemy, pos = wander(
        enemy, Position(5, 5), 1, NO_OBSTACLES, SMALL_CONFIG, FixedRandom(value=0.9)
    )
    assert (enemy.idle_ticks, pos) == (0, Position(5, 5))


def test_wander_blocked_stays_put() -> None:
    enemy = Enemy(speed=1.0, vision_range=10.0, idle_ticks=2)
    # Index 0 is up; (5, 4) holds an obstacle.
    enemy, pos = wander(
        enemy,
        Position(5, 5),
        1,
        frozenset({Position(5, 4)}),
        SMALL_CONFIG,
        FixedRandom(value=0.0, index=0),
    )
    assert (enemy.idle_ticks, pos) == (0, Position(5, 5))


def test_movement_system_pursues_alerted_enemy() -> None:
    state = make_state(player=(6, 5), enemies=[(2, 5)])
    (eid,) = enemy_ids(state)
    state = with_enemy(state, eid, sees_player=True)

    state = enemy_movement_system(state, FixedRandom())

    assert state.position[eid] == Position(3, 5)
    assert state.enemy[eid].idle_ticks == 0


def test_movement_system_wanders_idle_enemy() -> None:
    state = make_state(player=(8, 5), enemies=[(2, 5)])
    (eid,) = enemy_ids(state)
    rng = FixedRandom(value=0.0, index=2)

    for _ in range(3):
        state = enemy_movement_system(state, rng)

    assert state.position[eid] == Position(2, 6)


def test_movement_system_zero_speed_enemy_stays() -> None:
    state = make_state(player=(6, 5), enemies=[(2, 5)])
    (eid,) = enemy_ids(state)
    state = with_enemy(state, eid, sees_player=True, speed=0.5)

    state = enemy_movement_system(state, FixedRandom())

    assert state.position[eid] == Position(2, 5)


def test_movement_system_nearest_rounding() -> None:
    config = replace(SMALL_CONFIG, speed_rounding=SpeedRounding.NEAREST)
    state = make_state(player=(8, 5), enemies=[(2, 5)], config=config)
    (eid,) = enemy_ids(state)
    state = with_enemy(state, eid, sees_player=True, speed=1.5)

    state = enemy_movement_system(state, FixedRandom())

    assert state.position[eid] == Position(4, 5)


def test_enemies_may_share_a_cell() -> None:
    state = make_state(player=(6, 5), enemies=[(3, 5), (5, 5)])
    first, second = enemy_ids(state)
    state = with_enemy(state, first, sees_player=True, speed=2.0)

    state = enemy_movement_system(state, FixedRandom(value=0.9))

    assert state.position[first] == Position(5, 5)
    assert state.position[second] == Position(5, 5)
