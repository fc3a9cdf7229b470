from __future__ import annotations

from hexstack.constants import MAX_TICK_SECONDS
from hexstack.events.bus import EVENT_TICK, EventBus


class GameLoop:
    """Advances simulated time in bounded steps by emitting ``tick`` on the bus.

    A single step never exceeds ``max_step`` seconds so that a stalled frame
    does not fast-forward the fill timer.
    """

    def __init__(self, event_bus: EventBus, *, max_step: float = MAX_TICK_SECONDS) -> None:
        self.event_bus = event_bus
        self.max_step = max_step
        self.elapsed = 0.0

    def advance(self, delta_time: float) -> float:
        dt = min(max(0.0, float(delta_time)), self.max_step)
        self.elapsed += dt
        self.event_bus.emit(EVENT_TICK, dt=dt)
        return dt
