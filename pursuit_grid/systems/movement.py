"""Enemy movement system.

Each enemy takes one of two mutually exclusive steps per tick, selected by its
``sees_player`` flag:

1. **Pursuit** (alerted): move along the axis with the larger distance to the
    player (horizontal when ``|dx| > |dy|``, otherwise vertical, falling back
    to horizontal when ``dy`` is zero). A landing cell holding an obstacle or
    outside the interior cancels the move; there is no sliding and no retry on
    the other axis.
2. **Wander** (idle): the idle counter grows every tick. When it reaches the
    configured threshold it resets and, with ``wander_chance`` probability, the
    enemy tries a random cardinal step, cancelled by the same checks.

Step length is the enemy's float speed converted by ``SpeedRounding``; with
the default truncation no fractional remainder carries over between ticks.
Enemies may share cells with each other.
"""

import random
from dataclasses import replace
from typing import AbstractSet, Tuple

from pursuit_grid.components import Enemy, Position
from pursuit_grid.config import WorldConfig
from pursuit_grid.state import State
from pursuit_grid.types import SpeedRounding
from pursuit_grid.utils.ecs import get_player_id
from pursuit_grid.utils.grid import is_in_interior, obstacle_positions

# (dx, dy) for up, right, down, left
WANDER_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def step_size(speed: float, rounding: SpeedRounding = SpeedRounding.TRUNCATE) -> int:
    """Whole cells an enemy with ``speed`` covers in one step."""
    if rounding == SpeedRounding.NEAREST:
        return int(speed + 0.5)
    return int(speed)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _can_enter(
    pos: Position, obstacles: AbstractSet[Position], config: WorldConfig
) -> bool:
    return is_in_interior(config.width, config.height, pos) and pos not in obstacles


def pursue(
    pos: Position,
    target: Position,
    step: int,
    obstacles: AbstractSet[Position],
    config: WorldConfig,
) -> Position:
    """Greedy axis-prioritised step from ``pos`` toward ``target``."""
    dx = target.x - pos.x
    dy = target.y - pos.y
    if dx == 0 and dy == 0:
        return pos

    if abs(dx) > abs(dy):
        candidate = Position(pos.x + _sign(dx) * step, pos.y)
    elif dy != 0:
        candidate = Position(pos.x, pos.y + _sign(dy) * step)
    else:
        candidate = Position(pos.x + _sign(dx) * step, pos.y)

    return candidate if _can_enter(candidate, obstacles, config) else pos


def wander(
    enemy: Enemy,
    pos: Position,
    step: int,
    obstacles: AbstractSet[Position],
    config: WorldConfig,
    rng: random.Random,
) -> Tuple[Enemy, Position]:
    """Idle behaviour: occasional random cardinal step.

    Returns the enemy with its updated idle counter and its new position.
    """
    idle_ticks = enemy.idle_ticks + 1
    if idle_ticks < config.wander_threshold:
        return replace(enemy, idle_ticks=idle_ticks), pos

    enemy = replace(enemy, idle_ticks=0)
    if rng.random() >= config.wander_chance:
        return enemy, pos

    dx, dy = WANDER_DIRECTIONS[rng.randrange(len(WANDER_DIRECTIONS))]
    candidate = Position(pos.x + dx * step, pos.y + dy * step)
    if not _can_enter(candidate, obstacles, config):
        return enemy, pos
    return enemy, candidate


def step_enemy(
    enemy: Enemy,
    pos: Position,
    target: Position,
    obstacles: AbstractSet[Position],
    config: WorldConfig,
    rng: random.Random,
) -> Tuple[Enemy, Position]:
    """Resolve one enemy's move for this tick."""
    step = step_size(enemy.speed, config.speed_rounding)
    if enemy.sees_player:
        return enemy, pursue(pos, target, step, obstacles, config)
    return wander(enemy, pos, step, obstacles, config, rng)


def enemy_movement_system(state: State, rng: random.Random) -> State:
    """Advance every enemy one step, in entity id order."""
    pid = get_player_id(state)
    if pid is None:
        return state

    target = state.position[pid]
    obstacles = obstacle_positions(state)
    state_enemy = state.enemy
    state_position = state.position
    for enemy_id in sorted(state.enemy):
        enemy, pos = step_enemy(
            state.enemy[enemy_id],
            state.position[enemy_id],
            target,
            obstacles,
            state.config,
            rng,
        )
        state_enemy = state_enemy.set(enemy_id, enemy)
        state_position = state_position.set(enemy_id, pos)

    return replace(state, enemy=state_enemy, position=state_position)
