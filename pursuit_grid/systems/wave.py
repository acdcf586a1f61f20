"""Wave escalation system.

Escalation is keyed on the player's cumulative move count: every
``moves_per_wave`` moves the game enters a new wave. A wave transition

1. recomputes the population multiplier as
    ``speed_multiplier x (1 + (wave - 1) x speed_increase_per_wave)``;
2. spawns ``1 + wave // wave_spawn_step`` enemies on the border whose speed is
    ``base_speed x`` the new multiplier;
3. multiplies the speed of every enemy, the newcomers included, by
    ``1 + speed_increase_per_wave``.

Every enemy compounds one bump per transition it lives through, while each
wave's newcomers start from the recomputed multiplier, so older and newer
enemies drift apart over time.
"""

import logging
import random
from dataclasses import replace
from typing import Optional, Tuple

from pursuit_grid.components import Enemy
from pursuit_grid.config import WorldConfig
from pursuit_grid.entity import Entity, next_entity_id
from pursuit_grid.events import WaveAdvanced
from pursuit_grid.state import EnemyPopulation, State
from pursuit_grid.types import EntityID
from pursuit_grid.utils.ecs import get_player_id
from pursuit_grid.utils.grid import enemy_positions, obstacle_positions
from pursuit_grid.utils.placement import border_position, sample_positions

logger = logging.getLogger(__name__)

SPAWN_ATTEMPTS_PER_ENEMY = 20


def wave_multiplier(wave: int, config: WorldConfig) -> float:
    """Population multiplier for ``wave``."""
    return config.speed_multiplier * (
        1.0 + (wave - 1) * config.speed_increase_per_wave
    )


def maybe_escalate(
    population: EnemyPopulation, move_count: int, config: WorldConfig
) -> Tuple[EnemyPopulation, bool, int]:
    """Pure wave arithmetic.

    Returns:
        Tuple[EnemyPopulation, bool, int]: The (possibly advanced) population,
        whether a new wave was reached, and how many enemies it requests.
    """
    expected_wave = 1 + move_count // config.moves_per_wave
    if expected_wave <= population.wave:
        return population, False, 0

    population = EnemyPopulation(
        wave=expected_wave,
        speed_multiplier=wave_multiplier(expected_wave, config),
    )
    return population, True, 1 + expected_wave // config.wave_spawn_step


def spawn_enemies(
    state: State, count: int, speed_multiplier: float, rng: random.Random
) -> Tuple[State, int]:
    """Place up to ``count`` new enemies on free border cells.

    Border cells holding an obstacle, the player or another enemy are skipped.

    Returns:
        Tuple[State, int]: Updated state and the number actually spawned.
    """
    config = state.config
    exclusions = set(obstacle_positions(state)) | set(enemy_positions(state))
    pid = get_player_id(state)
    if pid is not None:
        exclusions.add(state.position[pid])

    positions = sample_positions(
        rng,
        count,
        border_position(config.width, config.height),
        exclusions=exclusions,
        max_attempts=count * SPAWN_ATTEMPTS_PER_ENEMY,
    )

    state_entity = state.entity
    state_position = state.position
    state_enemy = state.enemy
    for pos in positions:
        eid = next_entity_id(state_entity)
        state_entity = state_entity.set(eid, Entity())
        state_position = state_position.set(eid, pos)
        state_enemy = state_enemy.set(
            eid,
            Enemy(
                speed=config.base_speed * speed_multiplier,
                vision_range=config.vision_range,
            ),
        )
    state = replace(
        state, entity=state_entity, position=state_position, enemy=state_enemy
    )
    return state, len(positions)


def wave_system(
    state: State, player_id: EntityID, rng: random.Random
) -> Tuple[State, Optional[WaveAdvanced]]:
    """Advance the wave if the player's move count calls for it."""
    config = state.config
    move_count = state.player[player_id].move_count
    population, advanced, spawn_count = maybe_escalate(
        state.population, move_count, config
    )
    if not advanced:
        return state, None

    state = replace(state, population=population)
    state, spawned = spawn_enemies(state, spawn_count, population.speed_multiplier, rng)

    bump = 1.0 + config.speed_increase_per_wave
    state_enemy = state.enemy
    for enemy_id, enemy in state.enemy.items():
        state_enemy = state_enemy.set(enemy_id, replace(enemy, speed=enemy.speed * bump))
    state = replace(state, enemy=state_enemy)

    logger.debug(
        "Wave %d: multiplier %.3f, spawned %d/%d enemies (%d total)",
        population.wave,
        population.speed_multiplier,
        spawned,
        spawn_count,
        len(state.enemy),
    )
    return state, WaveAdvanced(population.wave, spawned, population.speed_multiplier)
