"""Action enumerations.

Defines the human readable :class:`Action` (string enum) accepted by the
engine and a stable integer :class:`GymAction` mapping for Gymnasium.

``MOVE_ACTIONS`` is the canonical ordered list of movement actions; checks like
``if action in MOVE_ACTIONS`` are preferred over enum name comparisons.
``QUIT`` ends the game as a loss, like pressing Escape in the console game.
"""

from enum import IntEnum, StrEnum, auto
from typing import Dict, Tuple


class Action(StrEnum):
    """String enum of player actions.

    Members:
        UP, DOWN, LEFT, RIGHT: Single-cell movement.
        QUIT: Abandon the game (counts as a loss).
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    QUIT = auto()


MOVE_ACTIONS = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]

ACTION_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}


class GymAction(IntEnum):
    """Stable integer mapping for integration with Gymnasium ``Discrete`` spaces.

    ``QUIT`` is not exposed to learning agents.
    """

    UP = 0  # start at 0 for explicitness
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
