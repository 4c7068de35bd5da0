from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .pieces import Piece


BOARD_WIDTH = 10
BOARD_HEIGHT = 20


@dataclass(frozen=True)
class ClearResult:
    cleared: int
    total: int
    rows: Tuple[int, ...] = ()


class Board:
    """Fixed-size well that stacked pieces are merged into.

    The grid uses 0 for empty cells and the piece color (its type value) for
    filled cells. Row 0 is the top of the well. Piece cells above the well
    (negative y) are ignored by collision and merge.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.lines_cleared = 0

    def reset(self) -> None:
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.lines_cleared = 0

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        for x, y in piece.cells(dx, dy):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y < 0:
                continue
            if self.grid[y, x] != 0:
                return True
        return False

    def merge(self, piece: Piece) -> None:
        for x, y in piece.cells():
            if self.is_inside(x, y):
                self.grid[y, x] = piece.color

    def clear_lines(self) -> ClearResult:
        """Remove complete rows, dropping everything above them.

        Returns the number of rows removed by this call, the lifetime total
        and the (pre-clear) indices of the removed rows.
        """
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        num = int(full_rows.size)
        if num > 0:
            remaining = np.delete(self.grid, full_rows, axis=0)
            new_rows = np.zeros((num, self.width), dtype=np.int8)
            self.grid = np.vstack((new_rows, remaining))
        self.lines_cleared += num
        return ClearResult(cleared=num, total=self.lines_cleared, rows=tuple(int(r) for r in full_rows))

    def is_game_over(self) -> bool:
        return bool(np.any(self.grid[0] != 0))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def snapshot(self) -> np.ndarray:
        return self.grid.copy()


def print_board(grid: np.ndarray) -> None:
    for row in grid:
        print("".join(["█" if cell > 0 else ("▒" if cell < 0 else "·") for cell in row]))
