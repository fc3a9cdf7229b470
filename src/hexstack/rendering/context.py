from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from esper import World

from hexstack.components.animation_fade import FadeAnimation
from hexstack.components.combo_burst import ComboBurst
from hexstack.components.game_state import Screen
from hexstack.levels import get_level
from hexstack.systems.board_ops import Snapshot, board_snapshot, find_board
from hexstack.utils.game_state import current_screen
from hexstack.utils.run_state import get_or_create_run_state
from hexstack.world import get_hex_layout

BoardPos = Tuple[int, int]
Color = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class ClearEffect:
    pos: BoardPos
    color_index: int
    alpha: float


@dataclass(frozen=True, slots=True)
class BurstEffect:
    center: Tuple[float, float]
    palette: Tuple[Color, ...]
    progress: float


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Read-only frame snapshot handed to the renderer.

    Nothing in here aliases live simulation state; the renderer may keep it
    for as long as it likes.
    """

    screen: Screen | None
    cols: int
    rows: int
    cells: Snapshot
    hover_group: FrozenSet[BoardPos]
    fill_progress: float
    score: int
    target_score: int
    combo: int
    level: int
    level_name: str
    accent_color: Color
    hex_size: float
    origin: Tuple[float, float]
    clear_effects: Tuple[ClearEffect, ...] = ()
    bursts: Tuple[BurstEffect, ...] = ()


def build_render_context(world: World) -> RenderContext:
    run = get_or_create_run_state(world)
    layout = get_hex_layout(world)
    board = find_board(world)
    level = get_level(run.level)
    clear_effects = tuple(
        ClearEffect(pos=fade.pos, color_index=fade.color_index, alpha=fade.alpha)
        for _, fade in world.get_component(FadeAnimation)
    )
    bursts = tuple(
        BurstEffect(center=burst.center, palette=burst.palette, progress=burst.linear)
        for _, burst in world.get_component(ComboBurst)
    )
    return RenderContext(
        screen=current_screen(world),
        cols=board.cols if board is not None else 0,
        rows=board.rows if board is not None else 0,
        cells=board_snapshot(board) if board is not None else (),
        hover_group=frozenset(run.hover_group),
        fill_progress=run.fill_progress,
        score=run.score,
        target_score=run.target_score,
        combo=run.combo,
        level=run.level,
        level_name=level.display_name,
        accent_color=level.accent_color,
        hex_size=layout.size,
        origin=(layout.origin_x, layout.origin_y),
        clear_effects=clear_effects,
        bursts=bursts,
    )
