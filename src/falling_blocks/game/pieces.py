from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from .grid import Board


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate a square matrix 90 degrees clockwise.

    new[x][size - 1 - y] = old[y][x]
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
}

COLORS: Dict[TetrominoType, Tuple[int, int, int]] = {
    TetrominoType.I: (0, 255, 255),  # cyan
    TetrominoType.J: (0, 0, 255),    # blue
    TetrominoType.L: (255, 127, 0),  # orange
    TetrominoType.O: (255, 255, 0),  # yellow
    TetrominoType.S: (0, 255, 0),    # green
    TetrominoType.T: (128, 0, 128),  # purple
    TetrominoType.Z: (255, 0, 0),    # red
}

# Top-left anchor of the matrix when a piece enters the board
SPAWN_POSITIONS: Dict[TetrominoType, Tuple[int, int]] = {
    TetrominoType.I: (3, -1),
    TetrominoType.J: (3, 0),
    TetrominoType.L: (3, 0),
    TetrominoType.O: (4, 0),
    TetrominoType.S: (3, 0),
    TetrominoType.T: (3, 0),
    TetrominoType.Z: (3, 0),
}


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    x: int = 0
    y: int = 0
    rotation: int = 0  # 0..3
    matrix: Shape = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.matrix is None:
            self.matrix = BASE_SHAPES[self.kind].copy()
            for _ in range(self.rotation % 4):
                if self.kind != TetrominoType.O:
                    self.matrix = rotate_clockwise(self.matrix)

    @classmethod
    def spawn(cls, kind: Optional[TetrominoType] = None, rng: Optional[random.Random] = None) -> "Piece":
        """Create a piece at its spawn anchor, drawing the type uniformly when not given."""
        if kind is None:
            kind = (rng or random).choice(list(TetrominoType))
        x, y = SPAWN_POSITIONS[kind]
        return cls(kind=kind, x=x, y=y)

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    def shape(self) -> Shape:
        return self.matrix.copy()

    def rotate(self) -> None:
        if self.kind == TetrominoType.O:
            return
        self.matrix = rotate_clockwise(self.matrix)
        self.rotation = (self.rotation + 1) % 4

    def revert_rotation(self) -> None:
        if self.kind == TetrominoType.O:
            return
        for _ in range(3):
            self.rotate()

    def copy(self) -> "Piece":
        return Piece(self.kind, self.x, self.y, self.rotation, self.matrix.copy())

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Board coordinates (x, y) of the filled cells, offset by (dx, dy)."""
        ys, xs = np.nonzero(self.matrix)
        return [(self.x + int(cx) + dx, self.y + int(cy) + dy) for cy, cx in zip(ys, xs)]

    def ghost(self, board: "Board") -> "Piece":
        ghost = self.copy()
        while not board.collides(ghost, 0, 1):
            ghost.y += 1
        return ghost
