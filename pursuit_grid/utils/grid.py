"""Grid math / collision helpers.

Utility predicates used by the movement, vision and placement code.
Functions here are pure and intentionally lightweight to keep inner loops
fast. The playable *interior* excludes the one-cell border frame.
"""

from functools import lru_cache
from typing import FrozenSet, Mapping

from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.types import EntityID


def is_in_interior(width: int, height: int, pos: Position) -> bool:
    """Return True if ``pos`` lies strictly inside the border frame."""
    return 1 <= pos.x <= width - 2 and 1 <= pos.y <= height - 2


def is_in_bounds(state: State, pos: Position) -> bool:
    """Return True if ``pos`` is a playable cell of ``state``."""
    return is_in_interior(state.width, state.height, pos)


@lru_cache(maxsize=256)
def _obstacle_cells(
    position_store: Mapping[EntityID, Position],
    obstacle_store: Mapping[EntityID, object],
) -> FrozenSet[Position]:
    """Positions of all obstacles.

    Both arguments are persistent PMaps, which are hashable and thus safe to
    use with ``lru_cache``. Obstacles never move, so the index is effectively
    built once per game.
    """
    return frozenset(position_store[eid] for eid in obstacle_store)


def obstacle_positions(state: State) -> FrozenSet[Position]:
    """Return the set of cells occupied by obstacles."""
    return _obstacle_cells(state.position, state.obstacle)


def is_obstacle_at(state: State, pos: Position) -> bool:
    """Return True if an obstacle occupies ``pos``."""
    return pos in obstacle_positions(state)


def enemy_positions(state: State) -> FrozenSet[Position]:
    """Return the set of cells currently occupied by enemies."""
    return frozenset(state.position[eid] for eid in state.enemy)
