"""Host-side move validation.

The engine trusts the moves it receives; it is the input layer's job to only
submit directions whose destination is a free interior cell. These helpers
implement that contract so every host (Streamlit app, Gymnasium env, tests)
validates moves the same way.
"""

from typing import List

from pursuit_grid.actions import ACTION_DELTAS, MOVE_ACTIONS, Action
from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.utils.ecs import get_player_id
from pursuit_grid.utils.grid import is_in_bounds, is_obstacle_at


def destination(state: State, action: Action) -> Position:
    """Cell the player would occupy after ``action``.

    Raises:
        ValueError: If the state has no player or ``action`` is not a
            direction.
    """
    pid = get_player_id(state)
    if pid is None:
        raise ValueError("State contains no player")
    if action not in ACTION_DELTAS:
        raise ValueError(f"{action!r} is not a movement action")
    pos = state.position[pid]
    dx, dy = ACTION_DELTAS[action]
    return Position(pos.x + dx, pos.y + dy)


def is_valid_move(state: State, action: Action) -> bool:
    """Return True if ``action`` moves the player into a free interior cell."""
    if action not in MOVE_ACTIONS or get_player_id(state) is None:
        return False
    dest = destination(state, action)
    return is_in_bounds(state, dest) and not is_obstacle_at(state, dest)


def valid_moves(state: State) -> List[Action]:
    """All movement actions currently accepted, in ``MOVE_ACTIONS`` order."""
    return [action for action in MOVE_ACTIONS if is_valid_move(state, action)]
