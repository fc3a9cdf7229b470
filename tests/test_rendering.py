from types import SimpleNamespace

import pytest

from hexstack.components.game_state import Screen
from hexstack.constants import HEX_MAX_SIZE, HUD_HEIGHT
from hexstack.events.bus import EVENT_ANIMATION_START
from hexstack.levels import TILE_COLORS, get_level
from hexstack.rendering.board_renderer import BoardRenderer, hex_points
from hexstack.rendering.context import build_render_context
from hexstack.rendering.hud_renderer import BAR_CALM, BAR_DANGER, BAR_WARN, HudRenderer, fill_bar_color
from hexstack.systems.board_ops import place_tile
from hexstack.systems.render import RenderSystem
from hexstack.utils.layout import compute_hex_layout
from hexstack.world import get_hex_layout

from tests.helpers import empty_board, fill_column, playing_game, run_state


class DrawRecorder:
    """Stands in for the arcade module and records draw calls by name."""

    color = SimpleNamespace(WHITE=(255, 255, 255), LIGHT_GRAY=(211, 211, 211), SILVER=(192, 192, 192))

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("draw_"):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))

        return record

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


def test_render_context_is_a_detached_snapshot(tmp_path):
    board = empty_board(3, 4, 3)
    fill_column(board, 1, range(2, 4), 2)
    game = playing_game(tmp_path, level=2, board=board)
    run_state(game).score = 40

    ctx = build_render_context(game.world)
    place_tile(board, 0, 0, 1)
    run_state(game).score = 90

    assert ctx.screen == Screen.PLAYING
    assert (ctx.cols, ctx.rows) == (3, 4)
    assert ctx.cells[1] == (None, None, 2, 2)
    assert ctx.cells[0][0] is None
    assert ctx.score == 40
    assert ctx.level == 2
    assert ctx.level_name == get_level(2).display_name
    assert ctx.accent_color == get_level(2).accent_color


def test_render_context_carries_effects(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    game.event_bus.emit(EVENT_ANIMATION_START, kind="fade", items=[((0, 8), 1)])
    game.event_bus.emit(EVENT_ANIMATION_START, kind="combo_burst", items=[(5.0, 6.0)], meta={"palette": TILE_COLORS[:3]})

    ctx = build_render_context(game.world)

    assert [(e.pos, e.color_index, e.alpha) for e in ctx.clear_effects] == [((0, 8), 1, 1.0)]
    assert [(b.center, b.progress) for b in ctx.bursts] == [((5.0, 6.0), 0.0)]


def test_board_renderer_draws_each_tile_once(tmp_path):
    board = empty_board(2, 3, 3)
    place_tile(board, 0, 2, 0)
    place_tile(board, 1, 2, 1)
    game = playing_game(tmp_path, board=board)
    recorder = DrawRecorder()

    BoardRenderer().render(recorder, build_render_context(game.world), 600)

    filled = recorder.named("draw_polygon_filled")
    assert [call[1][1] for call in filled] == [TILE_COLORS[0], TILE_COLORS[1]]
    # One grid outline per cell plus one per tile.
    assert len(recorder.named("draw_polygon_outline")) == 6 + 2


def test_hex_points_form_a_regular_hexagon():
    points = hex_points(0.0, 0.0, 10.0)
    assert len(points) == 6
    for x, y in points:
        assert x * x + y * y == pytest.approx(100.0)


def test_hud_shows_score_and_fill_bar(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    run = run_state(game)
    run.score = 120
    run.fill_timer_ms = run.fill_interval_ms * 0.9
    recorder = DrawRecorder()

    HudRenderer().render(recorder, build_render_context(game.world), None, 480, 720)

    texts = [call[1][0] for call in recorder.named("draw_text")]
    assert texts == [f"{get_level(1).display_name}  120 / {get_level(1).target_score}"]
    bars = recorder.named("draw_lrbt_rectangle_filled")
    assert bars[-1][1][4] == BAR_DANGER


def test_overlay_screens_show_title_and_progress(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    game.flow.toggle_pause()
    game.flow.to_menu()
    game.flow.open_high_scores()
    game.progress.progress.high_score = 4321
    recorder = DrawRecorder()

    HudRenderer().render(recorder, build_render_context(game.world), game.progress.progress, 480, 720)

    texts = [call[1][0] for call in recorder.named("draw_text")]
    assert texts[0] == "High Score"
    assert "4321" in texts[1]


def test_fill_bar_color_thresholds():
    assert fill_bar_color(0.2) == BAR_CALM
    assert fill_bar_color(0.6) == BAR_WARN
    assert fill_bar_color(0.95) == BAR_DANGER


def test_layout_fits_grid_inside_area():
    layout = compute_hex_layout(480, 656, 7, 9)
    assert 0 < layout.size <= HEX_MAX_SIZE
    right = layout.origin_x + 6 * layout.size * 1.55 + layout.size
    assert right <= 480


def test_layout_is_capped_for_small_boards():
    assert compute_hex_layout(4000, 4000, 3, 3).size == HEX_MAX_SIZE


def test_render_system_refits_layout_when_a_level_starts(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    window = SimpleNamespace(width=480, height=720)
    system = RenderSystem(game.world, game.event_bus, window, progress=game.progress)

    game.flow.toggle_pause()
    assert game.flow.start_level(3, force=True)

    layout = get_hex_layout(game.world)
    expected = compute_hex_layout(480, 720 - HUD_HEIGHT, get_level(3).cols, get_level(3).rows)
    assert layout.size == pytest.approx(expected.size)
    assert layout.origin_y == pytest.approx(expected.origin_y + HUD_HEIGHT)

    system.notify_resize(960, 720)
    assert get_hex_layout(game.world).origin_x > expected.origin_x
