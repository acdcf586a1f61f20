"""Token component.

Collectible coin the player gathers to win. A token is never removed from the
world: once ``collected`` flips it stays in ``State.token`` so its cell cannot
be collected twice, while pickup and rendering skip it and spawning ignores it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """Collectible token.

    Attributes:
        collected: True once the player has picked it up.
    """

    collected: bool = False
