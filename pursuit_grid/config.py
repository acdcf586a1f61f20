"""World tuning and difficulty tiers.

:class:`WorldConfig` is the immutable snapshot of every tunable for one game.
The defaults reproduce the classic console game (an 80 x 30 console with a
two-row HUD, hence a 80 x 28 playfield). :data:`DIFFICULTY_REGISTRY` holds the
presets offered by the difficulty menu; ``NORMAL`` equals the defaults.

Example::

    config = config_for(Difficulty.HARD, width=40, height=20)
"""

from dataclasses import dataclass, replace
from enum import StrEnum, auto
from typing import Any, Dict

from pursuit_grid.types import SpeedRounding


@dataclass(frozen=True)
class WorldConfig:
    """Immutable per-game tuning.

    Attributes:
        width: Playfield width including the one-cell border frame.
        height: Playfield height including the border frame.
        initial_enemy_count: Enemies spawned on the border at game start.
        base_speed: Speed of an enemy before any multiplier.
        speed_multiplier: Base multiplier applied at wave 1.
        speed_increase_per_wave: Fractional speed-up per wave transition.
        moves_per_wave: Player moves between wave transitions.
        vision_range: Enemy line-of-sight distance.
        alert_radius: Distance over which a seeing enemy alerts another.
        obstacle_count: Requested obstacles (best effort).
        token_count: Requested tokens (best effort).
        tokens_to_win: Tokens the player needs to win.
        obstacle_min_distance: Minimum obstacle distance from the player start.
        placement_margin: Cells kept free next to the border when placing
            obstacles and tokens.
        wander_threshold: Idle ticks between wander attempts.
        wander_chance: Probability that a wander attempt moves.
        wave_spawn_step: Every this many waves one more enemy spawns per wave.
        speed_rounding: Float speed to step length conversion.
    """

    width: int = 80
    height: int = 28
    initial_enemy_count: int = 2
    base_speed: float = 1.0
    speed_multiplier: float = 1.0
    speed_increase_per_wave: float = 0.03
    moves_per_wave: int = 15
    vision_range: float = 10.0
    alert_radius: float = 15.0
    obstacle_count: int = 25
    token_count: int = 15
    tokens_to_win: int = 10
    obstacle_min_distance: float = 5.0
    placement_margin: int = 2
    wander_threshold: int = 3
    wander_chance: float = 0.4
    wave_spawn_step: int = 7
    speed_rounding: SpeedRounding = SpeedRounding.TRUNCATE

    def __post_init__(self) -> None:
        if self.width < 3 or self.height < 3:
            raise ValueError(
                f"Playfield {self.width}x{self.height} has no interior; need at least 3x3"
            )
        if self.placement_margin < 1:
            raise ValueError("placement_margin must be at least 1 (the border frame)")
        if min(self.width, self.height) <= 2 * self.placement_margin:
            raise ValueError(
                f"Margin {self.placement_margin} leaves no placement cells in a "
                f"{self.width}x{self.height} playfield"
            )
        for name in ("moves_per_wave", "wander_threshold", "wave_spawn_step"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in (
            "initial_enemy_count",
            "obstacle_count",
            "token_count",
            "tokens_to_win",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.tokens_to_win > self.token_count:
            raise ValueError(
                f"tokens_to_win ({self.tokens_to_win}) exceeds token_count ({self.token_count})"
            )
        if self.base_speed < 0 or self.speed_multiplier < 0:
            raise ValueError("Enemy speeds must be non-negative")
        if self.speed_increase_per_wave < 0:
            raise ValueError("speed_increase_per_wave must be non-negative")
        if not 0.0 <= self.wander_chance <= 1.0:
            raise ValueError(f"wander_chance must be in [0, 1], got {self.wander_chance}")

    @property
    def player_start(self) -> tuple[int, int]:
        """Centre of the playfield, where the player spawns."""
        return self.width // 2, self.height // 2


class Difficulty(StrEnum):
    """Difficulty tiers offered by the menu."""

    EASY = auto()
    NORMAL = auto()
    HARD = auto()


DIFFICULTY_REGISTRY: Dict[Difficulty, WorldConfig] = {
    Difficulty.EASY: WorldConfig(
        initial_enemy_count=1,
        speed_increase_per_wave=0.02,
        moves_per_wave=20,
        vision_range=8.0,
        alert_radius=10.0,
        obstacle_count=30,
        tokens_to_win=8,
    ),
    Difficulty.NORMAL: WorldConfig(),
    Difficulty.HARD: WorldConfig(
        initial_enemy_count=3,
        speed_increase_per_wave=0.05,
        moves_per_wave=10,
        vision_range=12.0,
        alert_radius=20.0,
        obstacle_count=20,
        tokens_to_win=12,
        wave_spawn_step=5,
    ),
}
"""Difficulty -> preset mapping for the menu and configuration."""


def config_for(difficulty: Difficulty, **overrides: Any) -> WorldConfig:
    """Return the preset for ``difficulty`` with ``overrides`` applied.

    Raises:
        ValueError: If an override produces an invalid configuration.
    """
    return replace(DIFFICULTY_REGISTRY[Difficulty(difficulty)], **overrides)
