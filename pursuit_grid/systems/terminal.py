"""Terminal condition systems.

Set ``state.win`` or ``state.lose`` exactly once when the player reaches the
token threshold or shares a cell with an enemy. Other systems and the reducer
short-circuit once either flag is set.
"""

from dataclasses import replace
from typing import Optional, Tuple

from pursuit_grid.events import Caught
from pursuit_grid.state import State
from pursuit_grid.types import EntityID
from pursuit_grid.utils.ecs import enemies_at


def is_terminal_state(state: State) -> bool:
    """Return True if the game is already won or lost."""
    return state.win or state.lose


def win_system(state: State, player_id: EntityID) -> State:
    """Set ``win`` if the player has collected enough tokens."""
    if is_terminal_state(state):
        return state
    if state.player[player_id].has_won:
        return replace(state, win=True, message="All required tokens collected")
    return state


def catch_system(
    state: State, player_id: EntityID
) -> Tuple[State, Optional[Caught]]:
    """Set ``lose`` if any enemy stands on the player's cell.

    The first enemy in id order on that cell is reported as the catcher.
    """
    if is_terminal_state(state):
        return state, None
    pos = state.position[player_id]
    catchers = enemies_at(state, pos)
    if not catchers:
        return state, None
    player = state.player[player_id]
    state = replace(
        state,
        player=state.player.set(player_id, replace(player, alive=False)),
        lose=True,
        message="Caught by an enemy",
    )
    return state, Caught(catchers[0], pos)
