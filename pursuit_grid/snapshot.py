"""Read-only world snapshots for renderers and hosts.

A :class:`Snapshot` flattens the component maps of a ``State`` into plain
view tuples so renderers never need to know about entity ids or persistent
maps. Views are frozen; holding one across ticks is safe.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from pursuit_grid.components import Position
from pursuit_grid.state import State
from pursuit_grid.types import EntityID, Phase
from pursuit_grid.utils.ecs import get_player_id
from pursuit_grid.utils.grid import obstacle_positions


@dataclass(frozen=True)
class PlayerView:
    position: Position
    alive: bool
    move_count: int
    tokens_collected: int
    tokens_to_win: int


@dataclass(frozen=True)
class EnemyView:
    id: EntityID
    position: Position
    speed: float
    sees_player: bool


@dataclass(frozen=True)
class TokenView:
    id: EntityID
    position: Position
    collected: bool


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame.

    Attributes:
        width: Playfield width including the border frame.
        height: Playfield height including the border frame.
        player: Player view, or None for an empty world.
        enemies: Enemy views in entity id order.
        obstacles: Obstacle cells.
        tokens: Token views (collected ones included) in entity id order.
        wave: Current wave.
        speed_multiplier: Multiplier of the current wave.
        turn: Accepted ticks so far.
        phase: Running, won or lost.
        message: Terminal message, if any.
    """

    width: int
    height: int
    player: Optional[PlayerView]
    enemies: Tuple[EnemyView, ...]
    obstacles: FrozenSet[Position]
    tokens: Tuple[TokenView, ...]
    wave: int
    speed_multiplier: float
    turn: int
    phase: Phase
    message: Optional[str] = None


def take_snapshot(state: State) -> Snapshot:
    """Build a :class:`Snapshot` of ``state``."""
    player_view: Optional[PlayerView] = None
    pid = get_player_id(state)
    if pid is not None:
        player = state.player[pid]
        player_view = PlayerView(
            position=state.position[pid],
            alive=player.alive,
            move_count=player.move_count,
            tokens_collected=player.tokens_collected,
            tokens_to_win=player.tokens_to_win,
        )

    enemies = tuple(
        EnemyView(
            id=eid,
            position=state.position[eid],
            speed=state.enemy[eid].speed,
            sees_player=state.enemy[eid].sees_player,
        )
        for eid in sorted(state.enemy)
    )
    tokens = tuple(
        TokenView(id=eid, position=state.position[eid], collected=state.token[eid].collected)
        for eid in sorted(state.token)
    )

    return Snapshot(
        width=state.width,
        height=state.height,
        player=player_view,
        enemies=enemies,
        obstacles=obstacle_positions(state),
        tokens=tokens,
        wave=state.population.wave,
        speed_multiplier=state.population.speed_multiplier,
        turn=state.turn,
        phase=state.phase,
        message=state.message,
    )
