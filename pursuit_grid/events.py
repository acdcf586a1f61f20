"""Tick events and results.

Systems that change something a host may want to announce return an event
alongside the new ``State``. :class:`TickResult` bundles the events of one
tick with the phase the game is in afterwards.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

from pursuit_grid.components import Position
from pursuit_grid.types import EntityID, Phase


@dataclass(frozen=True)
class TokenCollected:
    """The player picked up a token.

    Attributes:
        token_id: Entity id of the collected token.
        position: Cell of the token.
        tokens_collected: Player's total after this pickup.
    """

    token_id: EntityID
    position: Position
    tokens_collected: int


@dataclass(frozen=True)
class WaveAdvanced:
    """Escalation reached a new wave.

    Attributes:
        wave: The new wave number.
        new_enemy_count: Enemies actually spawned (may be below the request
            when border placement runs out of attempts).
        speed_multiplier: Population multiplier of the new wave.
    """

    wave: int
    new_enemy_count: int
    speed_multiplier: float


@dataclass(frozen=True)
class Caught:
    """An enemy occupies the player's cell."""

    enemy_id: EntityID
    position: Position


@dataclass(frozen=True)
class PlayerQuit:
    """The host submitted ``Action.QUIT``."""

    move_count: int


Event = Union[TokenCollected, WaveAdvanced, Caught, PlayerQuit]


@dataclass(frozen=True)
class TickResult:
    """Outcome of one ``tick`` call."""

    phase: Phase
    events: Tuple[Event, ...] = field(default_factory=tuple)
