from dataclasses import replace

from pursuit_grid.config import WorldConfig
from pursuit_grid.systems.alert import alert_system, propagate
from pursuit_grid.systems.vision import vision_system
from tests.test_utils import SMALL_CONFIG, enemy_ids, make_state, with_enemy

# 20 x 10 playfield with short sight so relay distances are easy to reason about.
RELAY_CONFIG: WorldConfig = replace(
    SMALL_CONFIG, width=20, vision_range=3.0, alert_radius=4.0
)


def test_seer_alerts_enemy_within_radius() -> None:
    state = make_state(player=(2, 4), enemies=[(5, 4), (9, 4)], config=RELAY_CONFIG)
    seer, relayed = enemy_ids(state)

    state = vision_system(state)
    assert state.enemy[seer].sees_player
    assert not state.enemy[relayed].sees_player

    state = alert_system(state)
    assert state.enemy[relayed].sees_player


def test_relay_is_single_hop() -> None:
    state = make_state(
        player=(2, 4), enemies=[(5, 4), (9, 4), (13, 4)], config=RELAY_CONFIG
    )
    seer, relayed, beyond = enemy_ids(state)

    state = propagate(state)

    assert state.enemy[seer].sees_player
    assert state.enemy[relayed].sees_player
    assert not state.enemy[beyond].sees_player


def test_no_seers_no_alerts() -> None:
    state = make_state(player=(2, 4), enemies=[(12, 4), (14, 4)], config=RELAY_CONFIG)
    state = propagate(state)
    assert not any(enemy.sees_player for enemy in state.enemy.values())


def test_alert_is_recomputed_every_tick() -> None:
    state = make_state(player=(2, 4), enemies=[(12, 4), (14, 4)], config=RELAY_CONFIG)
    first, second = enemy_ids(state)
    state = with_enemy(state, first, sees_player=True)
    state = with_enemy(state, second, sees_player=True)

    state = propagate(state)

    assert not state.enemy[first].sees_player
    assert not state.enemy[second].sees_player


def test_relay_ignores_obstacles() -> None:
    state = make_state(
        player=(2, 4),
        enemies=[(5, 4), (5, 7)],
        obstacles=[(5, 5), (5, 6)],
        config=RELAY_CONFIG,
    )
    seer, hidden = enemy_ids(state)

    state = propagate(state)

    assert state.enemy[seer].sees_player
    assert state.enemy[hidden].sees_player
