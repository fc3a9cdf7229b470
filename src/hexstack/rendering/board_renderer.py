from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Tuple

from hexstack.constants import HEX_DRAW_SCALE
from hexstack.levels import TILE_COLORS
from hexstack.systems.board_ops import hex_center

if TYPE_CHECKING:
    from hexstack.rendering.context import RenderContext

GRID_OUTLINE = (255, 255, 255, 13)
TILE_HIGHLIGHT = (255, 255, 255, 77)
HOVER_SHRINK = 0.9


def hex_points(x: float, y: float, size: float) -> List[Tuple[float, float]]:
    points = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 6
        points.append((x + size * math.cos(angle), y + size * math.sin(angle)))
    return points


class BoardRenderer:
    """Draws the hex grid, tiles, hover preview and clear/burst effects.

    Grid-local coordinates grow downward; arcade's grow upward, so every y is
    flipped against ``window_height``.
    """

    def __init__(self, padding: float = 0.85):
        self._padding = padding

    def render(self, arcade, ctx: RenderContext, window_height: float) -> None:
        size = ctx.hex_size
        for col in range(ctx.cols):
            for row in range(ctx.rows):
                x, y = hex_center(col, row, size, ctx.origin)
                arcade.draw_polygon_outline(hex_points(x, window_height - y, size * self._padding), GRID_OUTLINE, 1)

        for col, column in enumerate(ctx.cells):
            for row, color_index in enumerate(column):
                if color_index is None:
                    continue
                x, y = hex_center(col, row, size, ctx.origin)
                hovered = (col, row) in ctx.hover_group
                draw_size = size * HEX_DRAW_SCALE * (HOVER_SHRINK if hovered else 1.0)
                points = hex_points(x, window_height - y, draw_size)
                arcade.draw_polygon_filled(points, TILE_COLORS[color_index])
                arcade.draw_polygon_outline(points, (255, 255, 255) if hovered else TILE_HIGHLIGHT, 3 if hovered else 1.5)

        for effect in ctx.clear_effects:
            col, row = effect.pos
            x, y = hex_center(col, row, size, ctx.origin)
            r, g, b = TILE_COLORS[effect.color_index]
            grow = 1.0 + (1.0 - effect.alpha) * 0.6
            arcade.draw_polygon_outline(
                hex_points(x, window_height - y, size * HEX_DRAW_SCALE * grow),
                (r, g, b, int(255 * effect.alpha)),
                2,
            )

        for burst in ctx.bursts:
            if not burst.palette:
                continue
            cx, cy = burst.center
            radius = size * (0.5 + 3.0 * burst.progress)
            alpha = int(255 * (1.0 - burst.progress))
            spokes = 24
            for i in range(spokes):
                angle = 2 * math.pi * i / spokes
                r, g, b = burst.palette[i % len(burst.palette)]
                arcade.draw_circle_filled(
                    cx + math.cos(angle) * radius,
                    window_height - (cy + math.sin(angle) * radius),
                    max(1.0, size * 0.15 * (1.0 - burst.progress)),
                    (r, g, b, alpha),
                )
