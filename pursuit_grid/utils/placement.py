"""Rejection-sampling placement.

Spawners (level generation, wave escalation) draw candidate cells from a
*candidate function* and reject those that collide with an exclusion set,
duplicate a cell already placed in the same batch, or sit too close to an
anchor cell (the player's start). The attempt budget is finite: when it runs
out the sampler returns what it has, so requested counts are upper bounds
rather than guarantees.

All randomness comes from the ``random.Random`` passed in by the caller.
"""

import logging
import random
from typing import AbstractSet, Callable, List, Optional

from pursuit_grid.components import Position

logger = logging.getLogger(__name__)

CandidateFn = Callable[[random.Random], Position]

DEFAULT_MAX_ATTEMPTS = 100


def interior_region(width: int, height: int, margin: int = 1) -> CandidateFn:
    """Uniform draw over cells at least ``margin`` cells from the outer edge.

    ``margin=1`` covers the whole interior; level generation keeps obstacles
    and tokens one further cell away from the frame (``margin=2``).
    """
    if width - 2 * margin < 1 or height - 2 * margin < 1:
        raise ValueError(
            f"Margin {margin} leaves no cells in a {width}x{height} playfield"
        )

    def candidate(rng: random.Random) -> Position:
        return Position(
            rng.randint(margin, width - 1 - margin),
            rng.randint(margin, height - 1 - margin),
        )

    return candidate


def border_position(width: int, height: int) -> CandidateFn:
    """Random cell on the interior ring next to the frame.

    Picks one of the four edges, then a coordinate along it. The frame cells
    themselves (including its corners) are never returned.
    """

    def candidate(rng: random.Random) -> Position:
        edge = rng.randrange(4)
        if edge == 0:  # top
            return Position(rng.randint(1, width - 2), 1)
        if edge == 1:  # right
            return Position(width - 2, rng.randint(1, height - 2))
        if edge == 2:  # bottom
            return Position(rng.randint(1, width - 2), height - 2)
        return Position(1, rng.randint(1, height - 2))  # left

    return candidate


def sample_positions(
    rng: random.Random,
    count: int,
    candidate_fn: CandidateFn,
    exclusions: AbstractSet[Position] = frozenset(),
    anchor: Optional[Position] = None,
    min_separation: float = 0.0,
    max_attempts: Optional[int] = None,
) -> List[Position]:
    """Draw up to ``count`` distinct valid positions.

    Arguments:
        rng: Random source.
        count: Requested number of positions.
        candidate_fn: Region to draw from (see :func:`interior_region`,
            :func:`border_position`).
        exclusions: Cells that must not be returned.
        anchor: Optional cell every result must keep ``min_separation`` from.
        min_separation: Minimum Euclidean distance from ``anchor``.
        max_attempts: Total draws for the whole batch; defaults to
            ``count * 10``.

    Returns:
        List[Position]: At most ``count`` positions, in draw order. Shorter
        when the attempt budget is exhausted.
    """
    if max_attempts is None:
        max_attempts = count * 10

    placed: List[Position] = []
    taken = set(exclusions)
    attempts = 0
    while len(placed) < count and attempts < max_attempts:
        attempts += 1
        pos = candidate_fn(rng)
        if pos in taken:
            continue
        if anchor is not None and pos.distance_to(anchor) < min_separation:
            continue
        placed.append(pos)
        taken.add(pos)

    if len(placed) < count:
        logger.debug(
            "Placed %d of %d requested positions after %d attempts",
            len(placed),
            count,
            attempts,
        )
    return placed


def sample_position(
    rng: random.Random,
    candidate_fn: CandidateFn,
    exclusions: AbstractSet[Position] = frozenset(),
    anchor: Optional[Position] = None,
    min_separation: float = 0.0,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Optional[Position]:
    """Draw one valid position, or ``None`` if the budget runs out."""
    placed = sample_positions(
        rng,
        1,
        candidate_fn,
        exclusions=exclusions,
        anchor=anchor,
        min_separation=min_separation,
        max_attempts=max_attempts,
    )
    return placed[0] if placed else None
