"""Player movement system.

Applies the host's already validated move. The engine trusts the host to only
submit moves into free interior cells; anything else raises
:class:`pursuit_grid.errors.InvalidMoveError` instead of being silently
ignored, leaving the state untouched.
"""

from dataclasses import replace

from pursuit_grid.actions import MOVE_ACTIONS, Action
from pursuit_grid.errors import InvalidMoveError
from pursuit_grid.moves import destination, is_valid_move
from pursuit_grid.state import State
from pursuit_grid.types import EntityID


def player_move_system(state: State, player_id: EntityID, action: Action) -> State:
    """Move the player one cell and count the move.

    Raises:
        InvalidMoveError: If ``action`` is not a direction or its destination
            is outside the interior or blocked by an obstacle.
    """
    if not is_valid_move(state, action):
        dest = destination(state, action) if action in MOVE_ACTIONS else None
        raise InvalidMoveError(action, dest)

    player = state.player[player_id]
    return replace(
        state,
        position=state.position.set(player_id, destination(state, action)),
        player=state.player.set(
            player_id, replace(player, move_count=player.move_count + 1)
        ),
    )


def quit_system(state: State, player_id: EntityID) -> State:
    """Abandon the game: the player dies and the game is lost."""
    player = state.player[player_id]
    return replace(
        state,
        player=state.player.set(player_id, replace(player, alive=False)),
        lose=True,
        message="Player quit",
    )
