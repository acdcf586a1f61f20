"""Engine exceptions."""

from typing import Optional

from pursuit_grid.components import Position


class InvalidMoveError(ValueError):
    """A move reached the engine that the host should have rejected.

    Raised for actions outside the direction set and for destinations that are
    outside the interior or occupied by an obstacle. The state is untouched.
    """

    def __init__(self, action: object, destination: Optional[Position] = None):
        self.action = action
        self.destination = destination
        detail = f" to {destination}" if destination is not None else ""
        super().__init__(f"Invalid move {action!r}{detail}")
