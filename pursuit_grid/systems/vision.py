"""Line-of-sight vision system.

An enemy sees the player when the player is within its vision range and the
Bresenham line between the two cells crosses no obstacle. The origin cell is
never tested, and neither is the target: the walk stops as soon as the target
is reached. There is no partial occlusion and no fog.

:func:`vision_system` is the first pass of alert propagation; see
:mod:`pursuit_grid.systems.alert` for the relay pass.
"""

from dataclasses import replace
from typing import AbstractSet, Iterator

from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.utils.ecs import get_player_id
from pursuit_grid.utils.grid import obstacle_positions


def line_cells(start: Position, end: Position) -> Iterator[Position]:
    """Yield the cells of the integer line from ``start`` to ``end`` inclusive."""
    x0, y0 = start.x, start.y
    x1, y1 = end.x, end.y
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        yield Position(x0, y0)
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def can_see(
    source: Position,
    target: Position,
    obstacles: AbstractSet[Position],
    vision_range: float,
) -> bool:
    """Return True if ``target`` is visible from ``source``."""
    if source.distance_to(target) > vision_range:
        return False
    for cell in line_cells(source, target):
        if cell == target:
            return True
        if cell != source and cell in obstacles:
            return False
    return True  # pragma: no cover - the line always ends on the target


def vision_system(state: State) -> State:
    """Recompute ``sees_player`` for every enemy from direct line of sight."""
    pid = get_player_id(state)
    if pid is None:
        return state

    player_pos = state.position[pid]
    obstacles = obstacle_positions(state)
    state_enemy = state.enemy
    for enemy_id, enemy in state.enemy.items():
        sees = can_see(
            state.position[enemy_id], player_pos, obstacles, enemy.vision_range
        )
        if sees != enemy.sees_player:
            state_enemy = state_enemy.set(enemy_id, replace(enemy, sees_player=sees))
    return replace(state, enemy=state_enemy)
