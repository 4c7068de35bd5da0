"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Well grid, collision, merging and line clearing
- Piece: Tetromino piece with rotation mechanics
- TetrominoType: Enum of available piece types
- ScoringRules: Scoring, level and drop speed configuration
- FallingBlocksGame: Game state machine driven by ticks and actions
"""

from .grid import Board, ClearResult, BOARD_WIDTH, BOARD_HEIGHT, print_board
from .pieces import Piece, TetrominoType, rotate_clockwise
from .rules import ScoringRules
from .core import FallingBlocksGame, Action, GameConfig, GameState, GameView, ClearAnimation

__all__ = [
    "Board",
    "ClearResult",
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "print_board",
    "Piece",
    "TetrominoType",
    "rotate_clockwise",
    "ScoringRules",
    "FallingBlocksGame",
    "Action",
    "GameConfig",
    "GameState",
    "GameView",
    "ClearAnimation",
]
