"""Obstacle component.

Marks a static cell that is impassable for every mover and opaque to enemy
vision. Obstacles are placed once at level generation and never move.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Obstacle:
    """Marker (no data)."""

    pass
