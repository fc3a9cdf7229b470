from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set


@dataclass(slots=True)
class PersistentProgress:
    """Progress that survives sessions; written at level-complete and game-over."""

    high_score: int = 0
    highest_level_reached: int = 1
    unlocked_level_ids: Set[int] = field(default_factory=lambda: {1})
    sound_enabled: bool = True
    level_scores: Dict[int, int] = field(default_factory=dict)

    def copy(self) -> "PersistentProgress":
        return PersistentProgress(
            high_score=self.high_score,
            highest_level_reached=self.highest_level_reached,
            unlocked_level_ids=set(self.unlocked_level_ids),
            sound_enabled=self.sound_enabled,
            level_scores=dict(self.level_scores),
        )
