from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Tuple

from esper import World

from hexstack.components.game_state import Screen
from hexstack.constants import (
    COMBO_BONUS_THRESHOLD,
    MAX_COMBO_MULTIPLIER,
    MIN_MATCH_SIZE,
    POINTS_PER_TILE,
    SETTLE_DELAY_MS,
)
from hexstack.events.bus import (
    EVENT_ANIMATION_START,
    EVENT_COMBO_BONUS,
    EVENT_MATCH_CLEARED,
    EVENT_TILE_CLICK,
    EVENT_TILE_HOVER,
    EVENT_TILE_MATCH,
    EventBus,
)
from hexstack.levels import TILE_COLORS
from hexstack.systems.board_ops import clear_tiles, find_board, find_connected_group, group_centroid
from hexstack.utils.game_state import current_screen
from hexstack.utils.run_state import get_or_create_run_state
from hexstack.world import get_hex_layout

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class OutcomeKind(Enum):
    NO_OP = auto()
    MATCHED = auto()


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    kind: OutcomeKind
    cleared_count: int = 0
    points_awarded: int = 0
    new_combo: int = 0
    combo_bonus: bool = False
    level_complete: bool = False
    positions: FrozenSet[Position] = frozenset()
    centroid: Tuple[float, float] | None = None

    @property
    def matched(self) -> bool:
        return self.kind is OutcomeKind.MATCHED


def combo_multiplier(combo: int) -> int:
    return max(1, min(combo, MAX_COMBO_MULTIPLIER))


class MatchSystem:
    """Turns a tap on a cell into a clear, a score change and feedback events.

    A successful clear leaves the run ``animating`` until MatchResolutionSystem
    applies gravity; no further match is accepted in the meantime.
    """

    def __init__(self, world: World, event_bus: EventBus, *, settle_delay_ms: float = SETTLE_DELAY_MS):
        self.world = world
        self.event_bus = event_bus
        self.settle_delay_ms = max(0.0, float(settle_delay_ms))
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_HOVER, self.on_tile_hover)

    def on_tile_click(self, sender, **kwargs):
        col = kwargs.get('col')
        row = kwargs.get('row')
        if col is None or row is None:
            return
        self.attempt_match(col, row)

    def on_tile_hover(self, sender, **kwargs):
        run = get_or_create_run_state(self.world)
        col = kwargs.get('col')
        row = kwargs.get('row')
        if col is None or row is None:
            run.hover_group = frozenset()
            return
        run.hover_group = self.peek_hover_group(col, row)

    def _accepting_input(self) -> bool:
        if current_screen(self.world) != Screen.PLAYING:
            return False
        return not get_or_create_run_state(self.world).animating

    def peek_hover_group(self, col: int, row: int) -> FrozenSet[Position]:
        """Group a tap on (col, row) would clear right now; empty if the tap would be ignored."""
        if not self._accepting_input():
            return frozenset()
        board = find_board(self.world)
        if board is None:
            return frozenset()
        group = find_connected_group(board, col, row)
        if len(group) < MIN_MATCH_SIZE:
            return frozenset()
        return frozenset(group)

    def attempt_match(self, col: int, row: int) -> MatchOutcome:
        run = get_or_create_run_state(self.world)
        no_op = MatchOutcome(kind=OutcomeKind.NO_OP, new_combo=run.combo)
        if not self._accepting_input():
            return no_op
        board = find_board(self.world)
        if board is None:
            return no_op
        group = find_connected_group(board, col, row)
        if len(group) < MIN_MATCH_SIZE:
            return no_op

        cleared = clear_tiles(board, group)
        color_index = cleared[0][1]
        base_points = len(group) * POINTS_PER_TILE
        combo = run.combo + 1
        points = base_points * combo_multiplier(combo)
        run.combo = combo
        run.score += points
        run.animating = True
        run.settle_remaining_ms = self.settle_delay_ms
        run.hover_group = frozenset()
        level_complete = run.score >= run.target_score
        run.level_complete_pending = level_complete
        combo_bonus = combo >= COMBO_BONUS_THRESHOLD

        layout = get_hex_layout(self.world)
        centroid = group_centroid(group, layout.size, (layout.origin_x, layout.origin_y))
        positions = sorted(group)
        logger.debug("Cleared %d tiles at combo %d for %d points", len(group), combo, points)

        self.event_bus.emit(
            EVENT_MATCH_CLEARED,
            positions=positions,
            color_index=color_index,
            points=points,
            combo=combo,
            score=run.score,
        )
        self.event_bus.emit(EVENT_TILE_MATCH, size=len(group))
        self.event_bus.emit(EVENT_ANIMATION_START, kind='fade', items=[(pos, color_index) for pos in positions])
        if combo_bonus:
            self.event_bus.emit(EVENT_COMBO_BONUS, combo=combo, centroid=centroid)
            self.event_bus.emit(
                EVENT_ANIMATION_START,
                kind='combo_burst',
                items=[centroid],
                meta={'palette': TILE_COLORS[:board.num_colors]},
            )

        return MatchOutcome(
            kind=OutcomeKind.MATCHED,
            cleared_count=len(cleared),
            points_awarded=points,
            new_combo=combo,
            combo_bonus=combo_bonus,
            level_complete=level_complete,
            positions=frozenset(group),
            centroid=centroid,
        )
