"""High-level coordinator for screen transitions."""
from __future__ import annotations

import logging
import random

from esper import World

from hexstack.components.animation_fade import FadeAnimation
from hexstack.components.combo_burst import ComboBurst
from hexstack.components.game_state import Screen
from hexstack.events.bus import (
    EVENT_GAME_OVER,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_STARTED,
    EventBus,
)
from hexstack.levels import MAX_LEVEL_ID, get_level, validate_level
from hexstack.systems.board_ops import initialize_board, install_board
from hexstack.systems.progress_system import ProgressSystem
from hexstack.utils.game_state import current_screen, set_screen
from hexstack.utils.run_state import get_or_create_run_state, reset_run_state

logger = logging.getLogger(__name__)

# Screens a level may be (re)started from.
_STARTABLE = frozenset({
    Screen.MENU,
    Screen.LEVEL_SELECT,
    Screen.LEVEL_COMPLETE,
    Screen.GAME_OVER,
    Screen.PAUSED,
})
# Navigation screens reachable only from the main menu.
_MENU_PAGES = frozenset({Screen.LEVEL_SELECT, Screen.SETTINGS, Screen.HIGH_SCORE})


class GameFlowSystem:
    """Menu <-> playing <-> paused <-> complete/over state machine."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        progress: ProgressSystem | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._progress = progress
        self._rng = rng or getattr(world, "random", None) or random.Random()

        self.event_bus.subscribe(EVENT_LEVEL_COMPLETE, self._on_level_complete)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    @property
    def screen(self) -> Screen | None:
        return current_screen(self.world)

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------

    def start_level(self, level_id: int, *, force: bool = False) -> bool:
        """Begin ``level_id`` with a fresh board and run state.

        Returns False when the current screen cannot start a level or the level
        is still locked. Raises ConfigError for a malformed level before any
        state is touched.
        """
        if self.screen not in _STARTABLE:
            return False
        if not force and self._progress is not None and not self._progress.is_unlocked(level_id):
            logger.debug("Level %d is locked", level_id)
            return False
        level = validate_level(get_level(level_id))
        board = initialize_board(
            level.cols,
            level.rows,
            level.num_colors,
            level.initial_rows,
            rng=self._rng,
        )
        install_board(self.world, board)
        reset_run_state(self.world, level)
        self._clear_effects()
        set_screen(self.world, self.event_bus, Screen.PLAYING)
        logger.debug("Started level %d (%s)", level.id, level.display_name)
        self.event_bus.emit(EVENT_LEVEL_STARTED, level=level.id)
        return True

    def play(self) -> bool:
        """Menu 'play': resume from the highest level reached."""
        level_id = 1
        if self._progress is not None:
            level_id = min(max(1, self._progress.progress.highest_level_reached), MAX_LEVEL_ID)
        return self.start_level(level_id, force=True)

    def toggle_pause(self) -> Screen | None:
        screen = self.screen
        if screen == Screen.PLAYING:
            set_screen(self.world, self.event_bus, Screen.PAUSED)
        elif screen == Screen.PAUSED:
            set_screen(self.world, self.event_bus, Screen.PLAYING)
        return self.screen

    def next_level(self) -> bool:
        if self.screen != Screen.LEVEL_COMPLETE:
            return False
        next_id = get_or_create_run_state(self.world).level + 1
        if next_id > MAX_LEVEL_ID:
            self.to_menu()
            return False
        return self.start_level(next_id, force=True)

    def retry(self) -> bool:
        if self.screen != Screen.GAME_OVER:
            return False
        return self.start_level(get_or_create_run_state(self.world).level, force=True)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def to_menu(self) -> bool:
        if self.screen == Screen.PLAYING:
            return False
        set_screen(self.world, self.event_bus, Screen.MENU)
        return True

    def open_page(self, page: Screen) -> bool:
        if page not in _MENU_PAGES or self.screen != Screen.MENU:
            return False
        set_screen(self.world, self.event_bus, page)
        return True

    def open_level_select(self) -> bool:
        return self.open_page(Screen.LEVEL_SELECT)

    def open_settings(self) -> bool:
        return self.open_page(Screen.SETTINGS)

    def open_high_scores(self) -> bool:
        return self.open_page(Screen.HIGH_SCORE)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_level_complete(self, sender, **payload) -> None:
        if self.screen != Screen.PLAYING:
            return
        set_screen(self.world, self.event_bus, Screen.LEVEL_COMPLETE)

    def _on_game_over(self, sender, **payload) -> None:
        if self.screen != Screen.PLAYING:
            return
        run = get_or_create_run_state(self.world)
        run.hover_group = frozenset()
        set_screen(self.world, self.event_bus, Screen.GAME_OVER)

    def _clear_effects(self) -> None:
        for component_type in (FadeAnimation, ComboBurst):
            for entity, _ in list(self.world.get_component(component_type)):
                self.world.delete_entity(entity, immediate=True)
