from __future__ import annotations

from esper import World

from hexstack.events.bus import EVENT_POINTER, EVENT_TILE_CLICK, EVENT_TILE_HOVER, EventBus
from hexstack.systems.board_ops import find_board, nearest_cell
from hexstack.world import get_hex_layout

GESTURE_TAP = "tap"
GESTURE_HOVER_MOVE = "hover_move"


class InputSystem:
    """Maps grid-local pointer positions to cells and forwards them as tile events.

    Taps that land outside every cell's hit radius are dropped; a hover outside
    the grid is forwarded with ``col=None`` so the preview clears.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_POINTER, self.on_pointer)

    def on_pointer(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        gesture = kwargs.get('gesture', GESTURE_TAP)
        if x is None or y is None:
            return
        try:
            xf = float(x)
            yf = float(y)
        except (TypeError, ValueError):
            return
        self.handle_pointer(xf, yf, gesture)

    def cell_at(self, x: float, y: float) -> tuple[int, int] | None:
        board = find_board(self.world)
        if board is None:
            return None
        layout = get_hex_layout(self.world)
        return nearest_cell(board, x, y, layout.size, (layout.origin_x, layout.origin_y))

    def handle_pointer(self, x: float, y: float, gesture: str) -> tuple[int, int] | None:
        cell = self.cell_at(x, y)
        if gesture == GESTURE_HOVER_MOVE:
            if cell is None:
                self.event_bus.emit(EVENT_TILE_HOVER, col=None, row=None)
            else:
                self.event_bus.emit(EVENT_TILE_HOVER, col=cell[0], row=cell[1])
            return cell
        if gesture != GESTURE_TAP or cell is None:
            return cell
        self.event_bus.emit(EVENT_TILE_CLICK, col=cell[0], row=cell[1])
        return cell
