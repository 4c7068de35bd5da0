from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_points: int = 1
    hard_drop_points: int = 2
    lines_per_level: int = 10
    base_interval_ms: float = 1000.0
    speed_factor: float = 0.75

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1] * level
        return 0

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval(self, level: int) -> float:
        """Milliseconds between gravity steps at `level`."""
        return self.base_interval_ms * self.speed_factor ** (level - 1)
