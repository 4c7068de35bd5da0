from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameState, GameView, Piece, TetrominoType
from falling_blocks.game.pieces import COLORS


Color = Tuple[int, int, int]

BACKGROUND: Color = (10, 10, 14)
WELL: Color = (20, 20, 26)
GRID_LINE: Color = (51, 51, 51)
TEXT: Color = (230, 230, 230)


def _color_for_value(v: int) -> Color:
    if v == 0:
        return WELL
    return COLORS[TetrominoType(abs(v))]


def lighten(color: Color, percent: int) -> Color:
    amt = round(2.55 * percent)
    return tuple(min(255, c + amt) for c in color)  # type: ignore[return-value]


def darken(color: Color, percent: int) -> Color:
    amt = round(2.55 * percent)
    return tuple(max(0, c - amt) for c in color)  # type: ignore[return-value]


class Renderer:
    """Draws a `GameView`: the well, ghost, active piece and side panel."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            self.margin * 3 + width * self.cell_size + self.panel_width,
            self.margin * 2 + height * self.cell_size,
        )

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _draw_cell(self, surf: pygame.Surface, px: int, py: int, color: Color) -> None:
        size = self.cell_size
        edge = max(1, size // 10)
        pygame.draw.rect(surf, color, pygame.Rect(px, py, size, size))
        light = lighten(color, 30)
        dark = darken(color, 30)
        pygame.draw.polygon(surf, light, [
            (px, py), (px + size, py), (px + size - edge, py + edge),
            (px + edge, py + edge), (px + edge, py + size - edge), (px, py + size),
        ])
        pygame.draw.polygon(surf, dark, [
            (px + size, py), (px + size, py + size), (px, py + size),
            (px + edge, py + size - edge), (px + size - edge, py + size - edge),
            (px + size - edge, py + edge),
        ])

    def _grid_surface(self, grid: np.ndarray) -> pygame.Surface:
        h, w = grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(WELL)
        for x in range(w + 1):
            pygame.draw.line(surf, GRID_LINE, (x * self.cell_size, 0), (x * self.cell_size, h * self.cell_size))
        for y in range(h + 1):
            pygame.draw.line(surf, GRID_LINE, (0, y * self.cell_size), (w * self.cell_size, y * self.cell_size))
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                if v:
                    self._draw_cell(surf, x * self.cell_size, y * self.cell_size, _color_for_value(v))
        return surf

    def _draw_piece(self, surf: pygame.Surface, piece: Piece) -> None:
        color = COLORS[piece.kind]
        for x, y in piece.cells():
            # Cells above the well are not drawn
            if y >= 0:
                self._draw_cell(surf, x * self.cell_size, y * self.cell_size, color)

    def _draw_ghost(self, surf: pygame.Surface, ghost: Piece) -> None:
        overlay = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        overlay.fill((*COLORS[ghost.kind], 64))
        for x, y in ghost.cells():
            if y >= 0:
                surf.blit(overlay, (x * self.cell_size, y * self.cell_size))

    def _draw_clear_flash(self, surf: pygame.Surface, view: GameView) -> None:
        anim = view.animation
        if anim is None or not anim.flash_on:
            return
        width = view.grid.shape[1] * self.cell_size
        flash = pygame.Surface((width, self.cell_size), pygame.SRCALPHA)
        flash.fill((255, 255, 255, 178))
        for row in anim.rows:
            surf.blit(flash, (0, row * self.cell_size))

    def _draw_next(self, screen: pygame.Surface, piece: Optional[Piece], x0: int, y0: int) -> None:
        box = 4 * self.cell_size
        pygame.draw.rect(screen, WELL, pygame.Rect(x0, y0, box, box))
        if piece is None:
            return
        # Centre the preview matrix in a 4x4 box
        offset = (box - piece.size * self.cell_size) // 2
        shape = piece.shape()
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    self._draw_cell(
                        screen,
                        x0 + offset + px * self.cell_size,
                        y0 + offset + py * self.cell_size,
                        COLORS[piece.kind],
                    )

    def _draw_overlay(self, screen: pygame.Surface, message: str) -> None:
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        screen.blit(shade, (0, 0))
        text = self._font_obj().render(message, True, (255, 255, 255))
        rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(text, rect)

    def draw(self, screen: pygame.Surface, view: GameView) -> None:
        screen.fill(BACKGROUND)
        surf = self._grid_surface(view.grid)
        # Only the stack is drawn while cleared rows flash
        if view.animation is None:
            if view.ghost is not None:
                self._draw_ghost(surf, view.ghost)
            if view.current is not None:
                self._draw_piece(surf, view.current)
        else:
            self._draw_clear_flash(surf, view)
        screen.blit(surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + view.grid.shape[1] * self.cell_size
        font = self._font_obj()
        screen.blit(font.render("Next", True, TEXT), (panel_x, self.margin))
        self._draw_next(screen, view.next, panel_x, self.margin + 30)
        info_y = self.margin + 50 + 4 * self.cell_size
        for i, txt in enumerate((f"Score: {view.score}", f"Level: {view.level}", f"Lines: {view.lines}")):
            screen.blit(font.render(txt, True, TEXT), (panel_x, info_y + i * 28))

        if view.state is GameState.PAUSED:
            self._draw_overlay(screen, "Paused - press P to resume")
        elif view.state is GameState.GAME_OVER:
            self._draw_overlay(screen, f"Game Over - score {view.score} - press R")
        pygame.display.flip()
