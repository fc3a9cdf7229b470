"""Entry point for Hex Stack.

Builds the game core, the render system and an Arcade window that drives it.
"""
import logging

import arcade
from arcade import Window, run, set_background_color

from hexstack.components.game_state import Screen
from hexstack.constants import UPDATE_RATE, WINDOW_HEIGHT, WINDOW_WIDTH
from hexstack.events.bus import EVENT_POINTER
from hexstack.game import create_game
from hexstack.levels import LEVELS
from hexstack.systems.input import GESTURE_HOVER_MOVE, GESTURE_TAP
from hexstack.systems.render import RenderSystem

logger = logging.getLogger(__name__)

# Level select shortcuts: 1..9, 0 for 10, '-' for 11, '=' for 12.
LEVEL_KEYS = {
    arcade.key.KEY_1: 1, arcade.key.KEY_2: 2, arcade.key.KEY_3: 3,
    arcade.key.KEY_4: 4, arcade.key.KEY_5: 5, arcade.key.KEY_6: 6,
    arcade.key.KEY_7: 7, arcade.key.KEY_8: 8, arcade.key.KEY_9: 9,
    arcade.key.KEY_0: 10, arcade.key.MINUS: 11, arcade.key.EQUAL: 12,
}


class HexStackWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Hex Stack", resizable=True)
        self.set_update_rate(UPDATE_RATE)
        self.game = create_game()
        self.render_system = RenderSystem(
            self.game.world,
            self.game.event_bus,
            self,
            progress=self.game.progress,
        )
        set_background_color((16, 18, 32))

    def on_resize(self, width: int, height: int):
        self.render_system.notify_resize(width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.game.loop.advance(delta_time)

    def _emit_pointer(self, x: float, y: float, gesture: str):
        # Grid-local space has its origin at the top-left corner.
        self.game.event_bus.emit(EVENT_POINTER, x=x, y=self.height - y, gesture=gesture)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        self._emit_pointer(x, y, GESTURE_TAP)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self._emit_pointer(x, y, GESTURE_HOVER_MOVE)

    def on_key_press(self, symbol: int, modifiers: int):
        flow = self.game.flow
        screen = flow.screen
        if screen in (Screen.PLAYING, Screen.PAUSED) and symbol == arcade.key.SPACE:
            flow.toggle_pause()
        elif symbol == arcade.key.M and screen in (Screen.PLAYING, Screen.PAUSED, Screen.SETTINGS):
            self.game.progress.toggle_sound()
        elif symbol == arcade.key.ESCAPE:
            if screen == Screen.PLAYING:
                flow.toggle_pause()
            else:
                flow.to_menu()
        elif screen == Screen.MENU:
            if symbol == arcade.key.ENTER:
                flow.play()
            elif symbol == arcade.key.L:
                flow.open_level_select()
            elif symbol == arcade.key.S:
                flow.open_settings()
            elif symbol == arcade.key.H:
                flow.open_high_scores()
        elif screen == Screen.LEVEL_SELECT and symbol in LEVEL_KEYS:
            level_id = LEVEL_KEYS[symbol]
            if level_id <= len(LEVELS):
                flow.start_level(level_id)
        elif screen == Screen.SETTINGS and symbol == arcade.key.R:
            self.game.progress.reset_progress()
        elif screen == Screen.LEVEL_COMPLETE and symbol == arcade.key.ENTER:
            flow.next_level()
        elif screen == Screen.GAME_OVER and symbol == arcade.key.ENTER:
            flow.retry()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = HexStackWindow()
    logger.info("Progress file: %s", window.game.progress.store_path)
    run()


if __name__ == "__main__":
    main()
