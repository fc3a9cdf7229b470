import logging

from esper import World

from hexstack.components.game_state import Screen
from hexstack.events.bus import (
    EVENT_GRAVITY_APPLIED,
    EVENT_LEVEL_COMPLETE,
    EVENT_TICK,
    EventBus,
)
from hexstack.systems.board_ops import apply_gravity, find_board
from hexstack.utils.game_state import current_screen
from hexstack.utils.run_state import get_or_create_run_state

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Finishes a clear: waits out the settle delay, applies gravity once, then
    reports level completion if the clear reached the target."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        run = get_or_create_run_state(self.world)
        if not run.animating:
            return
        # Pausing freezes the settle countdown along with everything else.
        if current_screen(self.world) != Screen.PLAYING:
            return
        run.settle_remaining_ms -= float(dt) * 1000.0
        if run.settle_remaining_ms > 0:
            return
        self.resolve()

    def resolve(self) -> None:
        """Apply the pending gravity pass immediately."""
        run = get_or_create_run_state(self.world)
        if not run.animating:
            return
        run.settle_remaining_ms = 0.0
        board = find_board(self.world)
        moves = apply_gravity(board) if board is not None else []
        run.animating = False
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        if run.level_complete_pending:
            run.level_complete_pending = False
            logger.info("Level %d complete with %d points", run.level, run.score)
            self.event_bus.emit(EVENT_LEVEL_COMPLETE, level=run.level, score=run.score)
