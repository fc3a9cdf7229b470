from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class RunState:
    """Per-level session record; replaced whenever a level (re)starts."""

    level: int = 1
    score: int = 0
    combo: int = 0
    target_score: int = 0
    fill_interval_ms: float = 0.0
    fill_timer_ms: float = 0.0
    # Set between a successful clear and the gravity pass that follows it.
    animating: bool = False
    settle_remaining_ms: float = 0.0
    level_complete_pending: bool = False
    hover_group: FrozenSet[Position] = field(default_factory=frozenset)

    @property
    def fill_progress(self) -> float:
        if self.fill_interval_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, self.fill_timer_ms / self.fill_interval_ms))
