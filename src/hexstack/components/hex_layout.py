from dataclasses import dataclass

from hexstack.constants import HEX_MAX_SIZE


@dataclass(slots=True)
class HexLayout:
    """Singleton describing how the grid maps onto grid-local pixel space.

    ``size`` is the hex size; ``origin_x``/``origin_y`` is the center of cell (0, 0).
    """
    size: float = HEX_MAX_SIZE
    origin_x: float = 0.0
    origin_y: float = 0.0
