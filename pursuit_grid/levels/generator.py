"""Procedural world generation.

Builds the initial :class:`pursuit_grid.state.State` for a ``WorldConfig``:

1. the player at the centre of the playfield;
2. the initial enemies on random border cells;
3. obstacles, kept ``obstacle_min_distance`` away from the player start and
    off every cell placed so far;
4. tokens, off every cell placed so far.

Each batch goes through the rejection sampler with a bounded attempt budget,
so crowded configurations end up with fewer obstacles or tokens than
requested instead of failing.
"""

import logging
import random
from dataclasses import replace
from typing import AbstractSet, List, Optional

from pursuit_grid.components import Enemy, Obstacle, Player, Position, Token
from pursuit_grid.config import WorldConfig
from pursuit_grid.entity import Entity, next_entity_id
from pursuit_grid.state import EnemyPopulation, State
from pursuit_grid.utils.placement import (
    border_position,
    interior_region,
    sample_positions,
)

logger = logging.getLogger(__name__)

ENEMY_ATTEMPTS_PER_ENTITY = 20
OBSTACLE_ATTEMPTS_PER_ENTITY = 10
TOKEN_ATTEMPTS_PER_ENTITY = 20


def place_player(state: State, position: Position) -> State:
    player_id = next_entity_id(state.entity)
    return replace(
        state,
        entity=state.entity.set(player_id, Entity()),
        position=state.position.set(player_id, position),
        player=state.player.set(
            player_id, Player(tokens_to_win=state.config.tokens_to_win)
        ),
    )


def place_enemies(
    state: State,
    positions: List[Position],
    speed_multiplier: float,
) -> State:
    config = state.config
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
    return replace(
        state, entity=state_entity, position=state_position, enemy=state_enemy
    )


def place_obstacles(state: State, positions: List[Position]) -> State:
    state_entity = state.entity
    state_position = state.position
    state_obstacle = state.obstacle
    for pos in positions:
        eid = next_entity_id(state_entity)
        state_entity = state_entity.set(eid, Entity())
        state_position = state_position.set(eid, pos)
        state_obstacle = state_obstacle.set(eid, Obstacle())
    return replace(
        state, entity=state_entity, position=state_position, obstacle=state_obstacle
    )


def place_tokens(state: State, positions: List[Position]) -> State:
    state_entity = state.entity
    state_position = state.position
    state_token = state.token
    for pos in positions:
        eid = next_entity_id(state_entity)
        state_entity = state_entity.set(eid, Entity())
        state_position = state_position.set(eid, pos)
        state_token = state_token.set(eid, Token())
    return replace(
        state, entity=state_entity, position=state_position, token=state_token
    )


def _occupied(state: State) -> AbstractSet[Position]:
    return frozenset(state.position.values())


def generate(
    config: Optional[WorldConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> State:
    """Generate a fresh world.

    Arguments:
        config: World tuning; defaults to ``WorldConfig()``.
        rng: Random source to draw from. When omitted a new
            ``random.Random(seed)`` is created.
        seed: Recorded on the state (and used to build ``rng`` if needed).

    Returns:
        State: Running state at wave 1, turn 0.
    """
    if config is None:
        config = WorldConfig()
    if rng is None:
        rng = random.Random(seed)

    state = State(
        config=config,
        population=EnemyPopulation(wave=1, speed_multiplier=config.speed_multiplier),
        seed=seed,
    )

    start = Position(*config.player_start)
    state = place_player(state, start)

    enemy_cells = sample_positions(
        rng,
        config.initial_enemy_count,
        border_position(config.width, config.height),
        exclusions=_occupied(state),
        max_attempts=config.initial_enemy_count * ENEMY_ATTEMPTS_PER_ENTITY,
    )
    state = place_enemies(state, enemy_cells, config.speed_multiplier)

    region = interior_region(config.width, config.height, config.placement_margin)
    obstacle_cells = sample_positions(
        rng,
        config.obstacle_count,
        region,
        exclusions=_occupied(state),
        anchor=start,
        min_separation=config.obstacle_min_distance,
        max_attempts=config.obstacle_count * OBSTACLE_ATTEMPTS_PER_ENTITY,
    )
    state = place_obstacles(state, obstacle_cells)

    token_cells = sample_positions(
        rng,
        config.token_count,
        region,
        exclusions=_occupied(state),
        max_attempts=config.token_count * TOKEN_ATTEMPTS_PER_ENTITY,
    )
    state = place_tokens(state, token_cells)

    logger.debug(
        "Generated %dx%d world: %d enemies, %d obstacles, %d tokens",
        config.width,
        config.height,
        len(state.enemy),
        len(state.obstacle),
        len(state.token),
    )
    return state
