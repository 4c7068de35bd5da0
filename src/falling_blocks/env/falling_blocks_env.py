from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, ScoringRules, TetrominoType
from falling_blocks.game.pieces import COLORS


# Actions exposed to agents; pause and restart stay with the human player
ENV_ACTIONS: Tuple[Action, ...] = (
    Action.NONE,
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
)

class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, rules: Optional[ScoringRules] = None, render_mode: Optional[str] = None,
                 line_weight: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        # The flashing clear animation would freeze gravity for agents
        self.game = FallingBlocksGame(GameConfig(clear_animation_frames=0), rules)
        self.render_mode = render_mode
        self.line_weight = float(line_weight)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        height, width = self.game.board.height, self.game.board.width
        n_types = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_types, high=n_types, shape=(height, width), dtype=np.int8),
                "next_piece": spaces.Discrete(n_types + 1),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": int(next_piece.kind) if next_piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines": self.game.lines_cleared,
            "level": self.game.level,
            "holes": self.game.board.count_holes(),
            "max_height": self.game.board.get_max_height(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.restart()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = ENV_ACTIONS[int(action)]
        score_before = self.game.score
        lines_before = self.game.lines_cleared
        piece_before = self.game.current_piece

        self.game.handle(action)
        # Gravity: one row per step unless the action already landed the piece
        if not self.game.game_over and self.game.current_piece is piece_before:
            self.game.tick(self.game.drop_interval)

        lines = self.game.lines_cleared - lines_before
        reward = float(self.game.score - score_before) + self.line_weight * float(lines)
        terminated = bool(self.game.game_over)
        if terminated:
            reward -= self.terminal_penalty
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["lines_cleared"] = lines
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = abs(int(state[y, x]))
                    color = COLORS[TetrominoType(v)] if v else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
