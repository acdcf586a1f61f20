"""pursuit_grid.components
=========================

Aggregate import surface for the component dataclasses used by the engine.

All component classes are simple frozen ``@dataclass`` value objects; they
carry no behavior beyond their fields and are replaced (never mutated) by
systems during the tick pipeline. See the ``systems`` package for the
transformation logic::

    from pursuit_grid.components import Enemy, Position, Token
"""

from .enemy import Enemy
from .obstacle import Obstacle
from .player import Player
from .position import Position
from .token import Token

__all__ = [
    "Enemy",
    "Obstacle",
    "Player",
    "Position",
    "Token",
]
