"""State reducer and tick orchestration.

This module wires the systems together in the fixed order of one *tick*. The
exported :func:`step` is the only gameplay progression entry point and is
pure apart from drawing from the random source it is handed: it returns a
*new* :class:`pursuit_grid.state.State` plus the events of the tick.

Ordering:

1. ``player_move_system`` applies the validated move and counts it.
2. ``collectible_system`` picks up an uncollected token at the destination.
3. ``win_system``; on a win nothing else runs this tick.
4. ``propagate`` recomputes vision and relays alerts.
5. ``catch_system``: the player may have walked into an enemy.
6. ``enemy_movement_system`` pursues or wanders.
7. ``catch_system`` again: an enemy may have reached the player.
8. ``wave_system`` escalates on move-count thresholds.

``Action.QUIT`` skips all of that and ends the game as a loss.
"""

import random
from dataclasses import replace
from typing import List, Optional, Tuple

from pursuit_grid.actions import Action
from pursuit_grid.events import Event, PlayerQuit
from pursuit_grid.state import State
from pursuit_grid.systems.alert import propagate
from pursuit_grid.systems.collectible import collectible_system
from pursuit_grid.systems.movement import enemy_movement_system
from pursuit_grid.systems.player import player_move_system, quit_system
from pursuit_grid.systems.terminal import catch_system, is_terminal_state, win_system
from pursuit_grid.systems.wave import wave_system
from pursuit_grid.types import EntityID
from pursuit_grid.utils.ecs import get_player_id


def step(
    state: State,
    action: Action,
    rng: random.Random,
    player_id: Optional[EntityID] = None,
) -> Tuple[State, List[Event]]:
    """Advance the simulation by one accepted player action.

    Args:
        state (State): Previous immutable world state.
        action (Action): Player action; a direction or ``QUIT``.
        rng (random.Random): Random source for wandering and wave spawns.
        player_id (EntityID | None): Explicit player entity id. If ``None`` the
            first entity in ``state.player`` is used.

    Returns:
        Tuple[State, List[Event]]: Next state and the events of this tick. A
        terminal input state is returned unchanged with no events.

    Raises:
        ValueError: If there is no player.
        InvalidMoveError: If ``action`` is not a legal move (state untouched).
    """
    if player_id is None and (player_id := get_player_id(state)) is None:
        raise ValueError("State contains no player")

    if is_terminal_state(state):
        return state, []

    if action == Action.QUIT:
        move_count = state.player[player_id].move_count
        return quit_system(state, player_id), [PlayerQuit(move_count)]

    events: List[Event] = []

    state = player_move_system(state, player_id, action)
    state = replace(state, turn=state.turn + 1)

    state, collected = collectible_system(state, player_id)
    if collected is not None:
        events.append(collected)

    state = win_system(state, player_id)
    if state.win:
        return state, events

    state = propagate(state)

    state, caught = catch_system(state, player_id)
    if caught is not None:
        events.append(caught)
        return state, events

    state = enemy_movement_system(state, rng)

    state, caught = catch_system(state, player_id)
    if caught is not None:
        events.append(caught)
        return state, events

    state, advanced = wave_system(state, player_id, rng)
    if advanced is not None:
        events.append(advanced)

    return state, events
