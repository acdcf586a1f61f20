"""Pursuit engine facade.

:class:`PursuitEngine` owns the two pieces of mutable state in a game: the
current immutable :class:`pursuit_grid.state.State` and the random source all
systems draw from. Hosts create one with :func:`new_game`, feed it one
validated move per :func:`tick`, and read :func:`snapshot` to render.

Usage::

    engine = new_game(config_for(Difficulty.NORMAL), seed=7)
    result = tick(engine, Action.LEFT)
    if result.phase is not Phase.RUNNING:
        ...

The engine never ticks on its own and never blocks; reusing a seed with the
same moves replays the same game.
"""

import logging
import random
from typing import Optional

from pursuit_grid.actions import Action
from pursuit_grid.config import WorldConfig
from pursuit_grid.events import Caught, PlayerQuit, TickResult, WaveAdvanced
from pursuit_grid.levels.generator import generate
from pursuit_grid.snapshot import Snapshot, take_snapshot
from pursuit_grid.state import State
from pursuit_grid.step import step
from pursuit_grid.types import EntityID, Phase
from pursuit_grid.utils.ecs import get_player_id

logger = logging.getLogger(__name__)


class PursuitEngine:
    """Owner of one game's state and random source."""

    def __init__(self, state: State, rng: random.Random):
        player_id = get_player_id(state)
        if player_id is None:
            raise ValueError("State contains no player")
        self.state = state
        self.rng = rng
        self.player_id: EntityID = player_id

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def tick(self, move: Optional[Action]) -> TickResult:
        """Advance one tick with the host's move.

        ``None`` means the host had no accepted input: nothing happens and the
        current phase is reported with no events.

        Raises:
            InvalidMoveError: If ``move`` is not a legal move; the engine state
                is left as it was.
        """
        if move is None:
            return TickResult(self.state.phase)

        was_running = self.state.phase == Phase.RUNNING
        self.state, events = step(self.state, move, self.rng, self.player_id)

        for event in events:
            if isinstance(event, WaveAdvanced):
                logger.info(
                    "Wave %d reached, %d enemies spawned",
                    event.wave,
                    event.new_enemy_count,
                )
            elif isinstance(event, Caught):
                logger.info("Player caught at %s by enemy %d", event.position, event.enemy_id)
            elif isinstance(event, PlayerQuit):
                logger.info("Player quit after %d moves", event.move_count)

        if was_running and self.state.phase == Phase.WON:
            logger.info("Player won on turn %d", self.state.turn)

        return TickResult(self.state.phase, tuple(events))

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.state)


def new_game(
    config: Optional[WorldConfig] = None, seed: Optional[int] = None
) -> PursuitEngine:
    """Generate a world and return an engine ready to tick."""
    if config is None:
        config = WorldConfig()
    rng = random.Random(seed)
    state = generate(config, rng=rng, seed=seed)
    logger.info(
        "New %dx%d game (seed=%s): %d enemies, %d obstacles, %d tokens",
        config.width,
        config.height,
        seed,
        len(state.enemy),
        len(state.obstacle),
        len(state.token),
    )
    return PursuitEngine(state, rng)


def tick(engine: PursuitEngine, move: Optional[Action]) -> TickResult:
    """Functional alias of :meth:`PursuitEngine.tick`."""
    return engine.tick(move)


def snapshot(engine: PursuitEngine) -> Snapshot:
    """Functional alias of :meth:`PursuitEngine.snapshot`."""
    return engine.snapshot()
