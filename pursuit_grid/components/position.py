"""Position component.

Immutable integer grid coordinates. Stored in ``State.position`` keyed by
entity id. Equality and Euclidean distance are the only operations.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance to ``other``."""
        return math.hypot(self.x - other.x, self.y - other.y)
