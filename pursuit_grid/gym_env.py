"""Gymnasium environment wrapper for the pursuit game.

Provides a structured observation that pairs a rendered RGBA image with an
info dictionary (player status, game status, world config). Reward is the
number of tokens collected this step. ``terminated`` is ``True`` on win,
``truncated`` on lose.

Observation schema:

``{"image": np.ndarray(H,W,4), "info": {"player": {...}, "status": {...}, "config": {...}}}``

Usage:

``env = PursuitEnv(config=config_for(Difficulty.EASY), seed=3)``

A move into a wall or an obstacle is not forwarded to the engine: the
environment reports it with ``info["invalid_move"] = True`` and a zero reward,
and no time passes.
"""

import gymnasium as gym
import numpy as np
from typing import Any, Dict, Optional, Tuple

from PIL.Image import Image as PILImage

from pursuit_grid.actions import Action, GymAction
from pursuit_grid.config import WorldConfig
from pursuit_grid.engine import PursuitEngine, new_game
from pursuit_grid.moves import is_valid_move
from pursuit_grid.renderer.texture import (
    DEFAULT_RESOLUTION,
    DEFAULT_TEXTURE_MAP,
    TextureMap,
    TextureRenderer,
)
from pursuit_grid.snapshot import Snapshot

ObsType = Dict[str, Any]

GYM_TO_ACTION: Dict[GymAction, Action] = {
    GymAction.UP: Action.UP,
    GymAction.DOWN: Action.DOWN,
    GymAction.LEFT: Action.LEFT,
    GymAction.RIGHT: Action.RIGHT,
}


def player_observation_dict(snapshot: Snapshot) -> Dict[str, Any]:
    """Player portion of observation (position, tokens, move count)."""
    player = snapshot.player
    if player is None:
        return {
            "x": -1,
            "y": -1,
            "alive": 0,
            "move_count": 0,
            "tokens_collected": 0,
            "tokens_to_win": 0,
        }
    return {
        "x": int(player.position.x),
        "y": int(player.position.y),
        "alive": int(player.alive),
        "move_count": int(player.move_count),
        "tokens_collected": int(player.tokens_collected),
        "tokens_to_win": int(player.tokens_to_win),
    }


def status_observation_dict(snapshot: Snapshot) -> Dict[str, Any]:
    """Status portion of observation (phase, turn, wave, enemy count)."""
    return {
        "phase": str(snapshot.phase),
        "turn": int(snapshot.turn),
        "wave": int(snapshot.wave),
        "enemies": len(snapshot.enemies),
    }


def config_observation_dict(config: WorldConfig, seed: Optional[int]) -> Dict[str, Any]:
    """Config portion of observation (seed, dimensions, win threshold)."""
    return {
        "seed": -1 if seed is None else int(seed),
        "width": config.width,
        "height": config.height,
        "tokens_to_win": config.tokens_to_win,
    }


class PursuitEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation for the pursuit game.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`pursuit_grid.actions`.
    """

    metadata = {"render_modes": ["human", "texture"]}

    def __init__(
        self,
        render_mode: str = "texture",
        render_resolution: int = DEFAULT_RESOLUTION,
        render_texture_map: TextureMap = DEFAULT_TEXTURE_MAP,
        config: Optional[WorldConfig] = None,
        seed: Optional[int] = None,
    ):
        """Create a new environment instance.

        Arguments:
            render_mode: "texture" to return PIL image frames, "human" to open window.
            render_resolution: Width (pixels) of rendered image; height is scaled.
            render_texture_map: Tile colours used by the renderer.
            config: World tuning; defaults to ``WorldConfig()``.
            seed: Seed for the first episode.
        """
        from gymnasium import spaces

        self.config = config or WorldConfig()
        self._seed = seed
        self.engine: Optional[PursuitEngine] = None

        self._render_mode = render_mode
        self._texture_renderer = TextureRenderer(
            resolution=render_resolution, texture_map=render_texture_map
        )
        image_width, image_height = self._texture_renderer.image_size(
            self.config.width, self.config.height
        )

        def int_box(low: int, high: int) -> spaces.Box:
            return spaces.Box(
                low=np.array(low, dtype=np.int64),
                high=np.array(high, dtype=np.int64),
                shape=(),
                dtype=np.int64,
            )

        self.observation_space = spaces.Dict(
            {
                "image": spaces.Box(
                    low=0,
                    high=255,
                    shape=(image_height, image_width, 4),
                    dtype=np.uint8,
                ),
                "info": spaces.Dict(
                    {
                        "player": spaces.Dict(
                            {
                                "x": int_box(-1, 10_000),
                                "y": int_box(-1, 10_000),
                                "alive": int_box(0, 1),
                                "move_count": int_box(0, 1_000_000_000),
                                "tokens_collected": int_box(0, 1_000_000),
                                "tokens_to_win": int_box(0, 1_000_000),
                            }
                        ),
                        "status": spaces.Dict(
                            {
                                "phase": spaces.Text(max_length=32),
                                "turn": int_box(0, 1_000_000_000),
                                "wave": int_box(1, 1_000_000_000),
                                "enemies": int_box(0, 1_000_000),
                            }
                        ),
                        "config": spaces.Dict(
                            {
                                "seed": int_box(-1, 2**62),
                                "width": int_box(3, 10_000),
                                "height": int_box(3, 10_000),
                                "tokens_to_win": int_box(0, 1_000_000),
                            }
                        ),
                    }
                ),
            }
        )

        self.action_space = spaces.Discrete(len(GymAction))

        self.reset(seed=seed)

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new episode.

        Arguments:
            seed: World seed; falls back to the seed given at construction.
            options: Gymnasium options (unused).

        Returns:
            Observation dict and info dict per Gymnasium API.
        """
        super().reset(seed=seed)
        if seed is not None:
            self._seed = seed
        self.engine = new_game(self.config, seed=self._seed)
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Arguments:
            action: Integer index into the ``GymAction`` enum.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.engine is not None

        if not 0 <= int(action) < len(GymAction):
            raise ValueError(f"Invalid action: {action}")
        move = GYM_TO_ACTION[GymAction(int(action))]

        if not is_valid_move(self.engine.state, move):
            info = self._get_info()
            info["invalid_move"] = True
            return self._get_obs(), 0.0, self.engine.state.win, self.engine.state.lose, info

        prev_tokens = self._tokens_collected()
        result = self.engine.tick(move)
        reward = float(self._tokens_collected() - prev_tokens)

        info = self._get_info()
        info["events"] = [type(event).__name__ for event in result.events]
        return (
            self._get_obs(),
            reward,
            self.engine.state.win,
            self.engine.state.lose,
            info,
        )

    def render(self, mode: Optional[str] = None) -> Optional[PILImage]:  # type: ignore
        """Render the current state.

        Args:
            mode: "human" to display, "texture" to return PIL image. Defaults to
                instance's configured render mode.
        """
        render_mode = mode or self._render_mode
        assert self.engine is not None
        img = self._texture_renderer.render(self.engine.snapshot())
        if render_mode == "human":
            img.show()
            return None
        elif render_mode == "texture":
            return img
        else:
            raise NotImplementedError(f"Render mode '{render_mode}' not supported.")

    def state_info(self) -> Dict[str, Dict[str, Any]]:
        """Return structured ``info`` sub-dict used in observations."""
        assert self.engine is not None
        snapshot = self.engine.snapshot()
        return {
            "player": player_observation_dict(snapshot),
            "status": status_observation_dict(snapshot),
            "config": config_observation_dict(self.config, self.engine.state.seed),
        }

    def _tokens_collected(self) -> int:
        assert self.engine is not None
        player = self.engine.state.player[self.engine.player_id]
        return player.tokens_collected

    def _get_obs(self) -> ObsType:
        """Internal helper constructing the full observation."""
        assert self.engine is not None
        img = self._texture_renderer.render(self.engine.snapshot())
        img_np: np.ndarray = np.array(img)
        return {"image": img_np, "info": self.state_info()}

    def _get_info(self) -> Dict[str, object]:
        return {}

    def close(self) -> None:
        pass
