"""Common type aliases and enumerations.

``EntityID`` keys every component store on :class:`pursuit_grid.state.State`.
``Phase`` is the tick state machine; ``SpeedRounding`` selects how fractional
enemy speeds become whole-cell steps.
"""

from enum import StrEnum, auto


EntityID = int


class Phase(StrEnum):
    """Game phase. ``WON`` and ``LOST`` are terminal."""

    RUNNING = auto()
    WON = auto()
    LOST = auto()


class SpeedRounding(StrEnum):
    """Conversion of an enemy's float speed into a step length in cells.

    ``TRUNCATE`` drops the fractional part, so speeds in ``[1, 2)`` always step
    one cell and early wave speed-ups have no visible effect. ``NEAREST`` rounds
    half up instead; it changes how fast enemies close in and is opt-in.
    """

    TRUNCATE = auto()
    NEAREST = auto()
