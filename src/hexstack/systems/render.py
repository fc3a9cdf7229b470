from __future__ import annotations

from esper import World

from hexstack.components.game_state import Screen
from hexstack.components.hex_layout import HexLayout
from hexstack.constants import HUD_HEIGHT
from hexstack.events.bus import EVENT_LEVEL_STARTED, EventBus
from hexstack.rendering.board_renderer import BoardRenderer
from hexstack.rendering.context import build_render_context
from hexstack.rendering.hud_renderer import HudRenderer
from hexstack.systems.board_ops import find_board
from hexstack.systems.progress_system import ProgressSystem
from hexstack.utils.layout import compute_hex_layout
from hexstack.world import get_hex_layout

_BOARD_SCREENS = frozenset({Screen.PLAYING, Screen.PAUSED, Screen.LEVEL_COMPLETE, Screen.GAME_OVER})


class RenderSystem:
    """Keeps the HexLayout fitted to the window and draws frame snapshots."""

    def __init__(self, world: World, event_bus: EventBus, window, *, progress: ProgressSystem | None = None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self._progress = progress
        self._board_renderer = BoardRenderer()
        self._hud_renderer = HudRenderer()
        self._last_window_size = (self.window.width, self.window.height)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)

    def notify_resize(self, width: int, height: int):
        self._last_window_size = (width, height)
        self.refit_layout()

    def on_level_started(self, sender, **kwargs):
        self.refit_layout()

    def refit_layout(self) -> HexLayout:
        layout = get_hex_layout(self.world)
        board = find_board(self.world)
        if board is None:
            return layout
        width, height = self._last_window_size
        fitted = compute_hex_layout(width, height - HUD_HEIGHT, board.cols, board.rows)
        layout.size = fitted.size
        layout.origin_x = fitted.origin_x
        layout.origin_y = fitted.origin_y + HUD_HEIGHT
        return layout

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        if (self.window.width, self.window.height) != self._last_window_size:
            self.notify_resize(self.window.width, self.window.height)
        ctx = build_render_context(self.world)
        progress = self._progress.progress if self._progress is not None else None
        if ctx.screen in _BOARD_SCREENS:
            self._board_renderer.render(arcade, ctx, self.window.height)
        self._hud_renderer.render(arcade, ctx, progress, self.window.width, self.window.height)
