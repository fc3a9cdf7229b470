from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class ComboBurst:
    """Burst effect centred on a cleared group, in grid-local pixel space."""
    center: Tuple[float, float]
    palette: Tuple[Tuple[int, int, int], ...]
    linear: float = 0.0  # 0..1
