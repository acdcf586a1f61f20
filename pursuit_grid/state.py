"""Core immutable ECS `State` dataclass.

This module defines the frozen :class:`State` object that represents the
whole pursuit world at a single tick. All systems are pure functions that take
a previous ``State`` (plus the player's move or an explicit random source) and
return a *new* ``State``; no mutation happens in-place. Only
:class:`pursuit_grid.engine.PursuitEngine` swaps its current ``State`` for the
next one.

Design notes:

* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. Absence of a key means the entity does not possess that
    component. ``position`` is shared by every entity kind.
* Wave bookkeeping lives in :class:`EnemyPopulation` rather than in module
    level counters, so two games never share escalation state.
* ``win`` / ``lose`` flags are mutually exclusive terminal markers. The
    reducer short-circuits on terminal states.

See :mod:`pursuit_grid.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from pyrsistent import PMap, pmap

from pursuit_grid.components import Enemy, Obstacle, Player, Position, Token
from pursuit_grid.config import WorldConfig
from pursuit_grid.entity import Entity
from pursuit_grid.types import EntityID, Phase


@dataclass(frozen=True)
class EnemyPopulation:
    """Wave escalation counters.

    Attributes:
        wave: Current wave (1 once the initial enemies are placed).
        speed_multiplier: Base multiplier of enemies spawned this wave, before
            the transition bump.
    """

    wave: int = 1
    speed_multiplier: float = 1.0


@dataclass(frozen=True)
class State:
    """Immutable pursuit world state.

    Instances are *value objects*; every tick creates a new ``State``.

    Attributes:
        config (WorldConfig): Tuning the world was generated with.
        entity (PMap[EntityID, Entity]): Registry of entity descriptors.
        position (PMap[EntityID, Position]): Grid position of every entity.
        obstacle (PMap[EntityID, Obstacle]): Static blocking cells.
        token (PMap[EntityID, Token]): Collectible tokens (collected ones stay).
        player (PMap[EntityID, Player]): The single player.
        enemy (PMap[EntityID, Enemy]): Chasers; only ever grows.
        population (EnemyPopulation): Wave counter and current multiplier.
        turn (int): Accepted ticks so far.
        win (bool): True once the token threshold is reached.
        lose (bool): True once the player is caught or quits.
        message (str | None): Terminal / informational message.
        seed (int | None): Seed the engine's random source was created with.
    """

    config: WorldConfig = field(default_factory=WorldConfig)

    # Entity
    entity: PMap[EntityID, Entity] = pmap()

    # Components
    position: PMap[EntityID, Position] = pmap()
    obstacle: PMap[EntityID, Obstacle] = pmap()
    token: PMap[EntityID, Token] = pmap()
    player: PMap[EntityID, Player] = pmap()
    enemy: PMap[EntityID, Enemy] = pmap()

    # Escalation
    population: EnemyPopulation = EnemyPopulation()

    # Status
    turn: int = 0
    win: bool = False
    lose: bool = False
    message: Optional[str] = None

    # RNG
    seed: Optional[int] = None

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def phase(self) -> Phase:
        if self.win:
            return Phase.WON
        if self.lose:
            return Phase.LOST
        return Phase.RUNNING

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse serialization of non-empty fields.

        Iterates dataclass fields and returns a persistent map including only
        those that are non-empty (for component maps) or set (for scalars).
        Useful for lightweight diagnostics without dumping empty maps.

        Returns:
            PMap[str, Any]: Persistent map of field name to value for all
            populated fields.
        """
        description: PMap[str, Any] = pmap()
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, type(pmap())) and len(value) == 0:
                continue
            if value is None:
                continue
            description = description.set(name, value)
        return description
