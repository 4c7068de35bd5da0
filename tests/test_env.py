import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import ENV_ACTIONS, FallingBlocksEnv
from falling_blocks.game import Action, Piece, TetrominoType


def test_reset_observation():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs["board"].shape == (20, 10)
    assert 1 <= obs["next_piece"] <= 7
    assert info["score"] == 0
    assert info["level"] == 1


def test_seeded_reset_is_deterministic():
    env = FallingBlocksEnv()
    env.reset(seed=3)
    first = (env.game.current_piece.kind, env.game.next_piece.kind)
    env.reset(seed=3)
    assert (env.game.current_piece.kind, env.game.next_piece.kind) == first


def test_noop_step_applies_gravity():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    env.game.current_piece = Piece.spawn(TetrominoType.T)
    obs, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.NONE))
    assert env.game.current_piece.y == 1
    assert reward == 0.0
    assert not terminated
    assert not truncated


def test_hard_drop_reward_and_next_piece():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    env.game.current_piece = Piece.spawn(TetrominoType.T)
    upcoming = env.game.next_piece
    obs, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.HARD_DROP))
    assert reward == 36.0
    assert env.game.current_piece is upcoming
    # the new piece has not been pulled down in the same step
    assert env.game.current_piece.y == Piece.spawn(upcoming.kind).y
    assert info["lines_cleared"] == 0


def test_line_weight_bonus():
    env = FallingBlocksEnv(line_weight=10.0)
    env.reset(seed=0)
    env.game.board.grid[19, :] = 1
    env.game.board.grid[19, 3:7] = 0
    env.game.current_piece = Piece.spawn(TetrominoType.I)
    _, reward, _, _, info = env.step(ENV_ACTIONS.index(Action.HARD_DROP))
    assert info["lines_cleared"] == 1
    assert reward == 2 * 19 + 100 + 10.0


def test_random_rollout_stays_in_spaces():
    env = gym.make("FallingBlocks-v0", max_episode_steps=300)
    obs, info = env.reset(seed=1)
    env.action_space.seed(1)
    for _ in range(300):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()


def test_truncation():
    env = FallingBlocksEnv(max_episode_steps=2)
    env.reset(seed=0)
    env.game.current_piece = Piece.spawn(TetrominoType.T)
    assert not env.step(0)[3]
    assert env.step(0)[3]


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert isinstance(img, np.ndarray)
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8


def test_random_agent_runs(capsys):
    from falling_blocks.rl.random_agent import run_random

    total = run_random(steps=200, seed=0)
    assert isinstance(total, float)
    assert "Random agent total reward" in capsys.readouterr().out
