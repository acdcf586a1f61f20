"""Token pickup system.

When the player stands on an uncollected token the token is marked collected
and the player's counter grows by one. Collected tokens keep their entity and
position, so stepping on the same cell again finds nothing to collect.
"""

from dataclasses import replace
from typing import Optional, Tuple

from pursuit_grid.events import TokenCollected
from pursuit_grid.state import State
from pursuit_grid.types import EntityID
from pursuit_grid.utils.ecs import uncollected_token_at


def collectible_system(
    state: State, player_id: EntityID
) -> Tuple[State, Optional[TokenCollected]]:
    """Collect the uncollected token under the player, if any.

    Returns:
        Tuple[State, TokenCollected | None]: Updated state and the pickup
        event, or the unchanged state and ``None``.
    """
    pos = state.position[player_id]
    token_id = uncollected_token_at(state, pos)
    if token_id is None:
        return state, None

    player = state.player[player_id]
    player = replace(player, tokens_collected=player.tokens_collected + 1)
    state = replace(
        state,
        token=state.token.set(token_id, replace(state.token[token_id], collected=True)),
        player=state.player.set(player_id, player),
    )
    return state, TokenCollected(token_id, pos, player.tokens_collected)
