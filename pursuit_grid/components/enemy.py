"""Enemy component.

Chaser state. ``speed`` starts at ``base_speed x population multiplier`` and
only ever grows through wave escalation. ``sees_player`` is transient and is
re-derived by the vision and alert systems every tick. ``idle_ticks`` counts
ticks spent wandering since the last wander attempt.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Enemy:
    """Pursuing enemy.

    Attributes:
        speed: Cells per step before rounding (see ``SpeedRounding``).
        vision_range: Maximum line-of-sight distance.
        sees_player: Alerted this tick, either directly or by relay.
        idle_ticks: Wander counter; resets when a wander attempt happens.
    """

    speed: float
    vision_range: float
    sees_player: bool = False
    idle_ticks: int = 0
