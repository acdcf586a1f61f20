"""Group alert relay.

Enemies that see the player directly alert every non-seeing enemy within
``alert_radius`` of themselves. The relay is a single hop: only enemies that
saw the player in the vision pass can alert others, so an enemy alerted by
relay does not pass the alert on within the same tick. Alert state carries no
memory; it is derived from scratch every tick.
"""

from dataclasses import replace
from typing import List

from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.systems.vision import vision_system


def alert_system(state: State) -> State:
    """Relay alerts from direct seers to nearby non-seeing enemies.

    Must run after :func:`pursuit_grid.systems.vision.vision_system`; it reads
    ``sees_player`` as the vision pass left it.
    """
    seers: List[Position] = [
        state.position[eid] for eid, enemy in state.enemy.items() if enemy.sees_player
    ]
    if not seers:
        return state

    radius = state.config.alert_radius
    state_enemy = state.enemy
    for enemy_id, enemy in state.enemy.items():
        if enemy.sees_player:
            continue
        pos = state.position[enemy_id]
        if any(pos.distance_to(seer) <= radius for seer in seers):
            state_enemy = state_enemy.set(enemy_id, replace(enemy, sees_player=True))
    return replace(state, enemy=state_enemy)


def propagate(state: State) -> State:
    """Vision pass followed by the alert relay pass."""
    return alert_system(vision_system(state))
