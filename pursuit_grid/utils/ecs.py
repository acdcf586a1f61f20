"""Entity lookups shared by the systems.

Cell queries answer "who is standing here" for the two kinds of entity the
player can meet on a cell: tokens to pick up and enemies that catch. Both
return the lowest entity id first so pickup and catch attribution stay
deterministic when several entities share a cell.
"""

from typing import List, Optional

from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.types import EntityID


def get_player_id(state: State) -> Optional[EntityID]:
    """Return the player's entity id, or None for an empty world."""
    return next(iter(state.player.keys()), None)


def uncollected_token_at(state: State, pos: Position) -> Optional[EntityID]:
    """Lowest-id token on ``pos`` that has not been collected yet."""
    for token_id in sorted(state.token):
        if state.position[token_id] == pos and not state.token[token_id].collected:
            return token_id
    return None


def enemies_at(state: State, pos: Position) -> List[EntityID]:
    """Ids of enemies standing on ``pos``, ascending."""
    return [eid for eid in sorted(state.enemy) if state.position[eid] == pos]
