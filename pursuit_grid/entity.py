"""Entity primitives & ID allocation.

The engine models each *thing* (player, enemy, obstacle, token) as an
``EntityID`` (an integer) plus component dataclasses stored in persistent maps
on :class:`pursuit_grid.state.State`.

IDs are allocated from the state's own entity registry rather than from a
process-wide counter, so independent games (and tests) never interfere and
the same seed always yields the same ids.

Examples
--------
>>> from pyrsistent import pmap
>>> next_entity_id(pmap())
0
>>> next_entity_ids(pmap({0: Entity(), 1: Entity()}), 2)
[2, 3]
"""

from dataclasses import dataclass
from typing import List, Mapping

from pursuit_grid.types import EntityID


@dataclass(frozen=True)
class Entity:
    """Marker for a registered entity (no data)."""

    pass


def next_entity_id(registry: Mapping[EntityID, Entity]) -> EntityID:
    """Return the smallest ID greater than every registered one."""
    return max(registry.keys(), default=-1) + 1


def next_entity_ids(registry: Mapping[EntityID, Entity], n: int) -> List[EntityID]:
    """Return ``n`` fresh consecutive IDs for ``registry``."""
    start = next_entity_id(registry)
    return list(range(start, start + n))
