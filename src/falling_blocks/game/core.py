from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import Board, ClearResult
from .pieces import Piece
from .rules import ScoringRules


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    PAUSE = 6
    RESTART = 7


class GameState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


WALL_KICKS: Tuple[int, ...] = (-1, 1, -2, 2)


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    clear_animation_frames: int = 30
    flash_interval: int = 3


@dataclass
class ClearAnimation:
    rows: Tuple[int, ...]
    frame: int = 0
    duration: int = 30
    flash_interval: int = 3

    @property
    def flash_on(self) -> bool:
        return self.frame % self.flash_interval < max(1, self.flash_interval // 2)

    @property
    def finished(self) -> bool:
        return self.frame >= self.duration


@dataclass(frozen=True)
class GameView:
    """Read-only picture of a game handed to renderers."""

    grid: np.ndarray
    current: Optional[Piece]
    ghost: Optional[Piece]
    next: Optional[Piece]
    animation: Optional[ClearAnimation]
    score: int
    level: int
    lines: int
    state: GameState


class FallingBlocksGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board()
        self.score = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval(1)
        self.state = GameState.RUNNING
        self.animation: Optional[ClearAnimation] = None
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.last_clear: Optional[ClearResult] = None
        self._since_drop = 0.0
        self.restart()

    def restart(self) -> None:
        self.board.reset()
        self.score = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval(1)
        self.state = GameState.RUNNING
        self.animation = None
        self.last_clear = None
        self._since_drop = 0.0
        self.current_piece = self._random_piece()
        self.next_piece = self._random_piece()

    reset = restart

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def is_animating(self) -> bool:
        return self.animation is not None

    @property
    def lines_cleared(self) -> int:
        return self.board.lines_cleared

    def _random_piece(self) -> Piece:
        return Piece.spawn(rng=self.rng)

    def _can_act(self) -> bool:
        return self.state is GameState.RUNNING and self.animation is None and self.current_piece is not None

    # -- time -------------------------------------------------------------

    def tick(self, elapsed_ms: float) -> None:
        """Advance the game by `elapsed_ms` milliseconds (one frame)."""
        if self.state is GameState.GAME_OVER:
            return
        self._advance_animation()
        if self.state is GameState.PAUSED:
            return
        self._since_drop += elapsed_ms
        if self._since_drop >= self.drop_interval:
            self._since_drop = 0.0
            if self.animation is None:
                self._gravity_step()

    def _advance_animation(self) -> None:
        if self.animation is None:
            return
        self.animation.frame += 1
        if self.animation.finished:
            self.animation = None

    def _gravity_step(self) -> bool:
        """Move the active piece down one row, landing it when blocked.

        Returns True if the piece descended.
        """
        assert self.current_piece is not None
        if not self.board.collides(self.current_piece, 0, 1):
            self.current_piece.y += 1
            return True
        self._land_piece()
        return False

    # -- landing ----------------------------------------------------------

    def _land_piece(self) -> None:
        assert self.current_piece is not None
        self.board.merge(self.current_piece)
        result = self.board.clear_lines()
        self.last_clear = result
        if result.cleared > 0:
            self.score += self.rules.score_for_lines(result.cleared, self.level)
            self._start_clear_animation(result.rows)
            self._check_level_up()
        if self.board.is_game_over():
            self.state = GameState.GAME_OVER
            return
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()

    def _start_clear_animation(self, rows: Tuple[int, ...]) -> None:
        if self.config.clear_animation_frames <= 0:
            return
        self.animation = ClearAnimation(
            rows=rows,
            duration=self.config.clear_animation_frames,
            flash_interval=self.config.flash_interval,
        )

    def _check_level_up(self) -> None:
        new_level = self.rules.level_for_lines(self.board.lines_cleared)
        if new_level > self.level:
            self.level = new_level
            self.drop_interval = self.rules.drop_interval(self.level)

    # -- player actions ---------------------------------------------------

    def move(self, dx: int) -> bool:
        if not self._can_act():
            return False
        if self.board.collides(self.current_piece, dx, 0):
            return False
        self.current_piece.x += dx
        return True

    def rotate(self) -> bool:
        if not self._can_act():
            return False
        piece = self.current_piece
        piece.rotate()
        if not self.board.collides(piece, 0, 0):
            return True
        for kick in WALL_KICKS:
            if not self.board.collides(piece, kick, 0):
                piece.x += kick
                return True
        piece.revert_rotation()
        return False

    def soft_drop(self) -> bool:
        if not self._can_act():
            return False
        self.score += self.rules.soft_drop_points
        self._gravity_step()
        return True

    def hard_drop(self) -> int:
        """Drop the active piece to rest and land it. Returns rows descended."""
        if not self._can_act():
            return 0
        rows = 0
        while not self.board.collides(self.current_piece, 0, 1):
            self.current_piece.y += 1
            rows += 1
        self.score += rows * self.rules.hard_drop_points
        self._land_piece()
        return rows

    def toggle_pause(self) -> bool:
        if self.state is GameState.GAME_OVER:
            return False
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
            self._since_drop = 0.0
        else:
            self.state = GameState.PAUSED
        return True

    def handle(self, action: Action) -> bool:
        """Apply a discrete player action. Returns True if it changed anything."""
        action = Action(action)
        if action == Action.RESTART:
            self.restart()
            return True
        if self.state is GameState.GAME_OVER:
            return False
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            if not self._can_act():
                return False
            self.hard_drop()
            return True
        if action == Action.PAUSE:
            return self.toggle_pause()
        return False

    # -- observation ------------------------------------------------------

    def ghost(self) -> Optional[Piece]:
        if self.current_piece is None:
            return None
        return self.current_piece.ghost(self.board)

    def view(self) -> GameView:
        return GameView(
            grid=self.board.snapshot(),
            current=self.current_piece.copy() if self.current_piece is not None else None,
            ghost=self.ghost(),
            next=self.next_piece.copy() if self.next_piece is not None else None,
            animation=replace(self.animation) if self.animation is not None else None,
            score=self.score,
            level=self.level,
            lines=self.board.lines_cleared,
            state=self.state,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.board.snapshot()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.board.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current_piece.color
        return state


def run_game_demo(pieces: int = 12, seed: int = 0) -> None:  # pragma: no cover
    from .grid import print_board

    game = FallingBlocksGame(GameConfig(random_seed=seed, clear_animation_frames=0))
    print("=== Falling Blocks Demo ===")
    for i in range(pieces):
        if game.game_over:
            break
        piece = game.current_piece
        offset = game.rng.randint(-4, 4)
        for _ in range(abs(offset)):
            game.move(1 if offset > 0 else -1)
        rows = game.hard_drop()
        print(f"\nPiece {i}: {piece.kind.name} dropped {rows} rows, score {game.score}, lines {game.lines_cleared}")
        print_board(game.get_state())
    print(f"\nFinal score: {game.score}  level: {game.level}  state: {game.state.value}")


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
