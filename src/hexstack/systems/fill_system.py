from __future__ import annotations

import logging
import random
from enum import Enum, auto

from esper import World

from hexstack.components.game_state import Screen
from hexstack.constants import OVERFLOW_OCCUPANCY
from hexstack.events.bus import EVENT_GAME_OVER, EVENT_ROW_INSERTED, EVENT_TICK, EventBus
from hexstack.systems.board_ops import (
    any_column_top_occupied,
    find_board,
    has_full_bottom_pair,
    occupancy_ratio,
    push_row_and_insert,
)
from hexstack.utils.game_state import current_screen
from hexstack.utils.run_state import get_or_create_run_state

logger = logging.getLogger(__name__)


class FillResult(Enum):
    IDLE = auto()
    DEFERRED = auto()
    FILLED = auto()
    GAME_OVER = auto()


class FillSystem:
    """Pushes a new row of tiles in from the top every ``fill_interval_ms`` and
    detects the board overflowing.

    The timer only runs while the screen is PLAYING, so a pause keeps its
    accumulated progress. While a clear is settling the timer keeps counting
    but the fill itself waits until gravity has been applied.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        self.advance(float(dt) * 1000.0)

    def advance(self, dt_ms: float) -> FillResult:
        if current_screen(self.world) != Screen.PLAYING:
            return FillResult.IDLE
        run = get_or_create_run_state(self.world)
        if run.fill_interval_ms <= 0:
            return FillResult.IDLE
        run.fill_timer_ms += max(0.0, dt_ms)
        if run.fill_timer_ms < run.fill_interval_ms:
            return FillResult.IDLE
        if run.animating:
            return FillResult.DEFERRED
        run.fill_timer_ms = 0.0
        return self.fill_step()

    def fill_step(self) -> FillResult:
        board = find_board(self.world)
        if board is None:
            return FillResult.IDLE
        run = get_or_create_run_state(self.world)
        if any_column_top_occupied(board):
            # A tile in row 0 means its column cannot take another row.
            self._game_over(run, reason="top_row_occupied")
            return FillResult.GAME_OVER

        num_colors = board.num_colors
        inserted = push_row_and_insert(board, lambda: self._rng.randrange(num_colors))
        self.event_bus.emit(EVENT_ROW_INSERTED, new_tiles=inserted)
        logger.debug("Inserted row; occupancy %.2f", occupancy_ratio(board))

        if occupancy_ratio(board) > OVERFLOW_OCCUPANCY and has_full_bottom_pair(board):
            self._game_over(run, reason="board_full")
            return FillResult.GAME_OVER

        run.combo = 0
        return FillResult.FILLED

    def _game_over(self, run, *, reason: str) -> None:
        logger.info("Game over on level %d (%s) with %d points", run.level, reason, run.score)
        self.event_bus.emit(EVENT_GAME_OVER, level=run.level, score=run.score, reason=reason)
