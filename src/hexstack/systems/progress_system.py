from __future__ import annotations

import logging
from pathlib import Path

from esper import World

from hexstack.components.progress import PersistentProgress
from hexstack.errors import StorageUnavailable
from hexstack.events.bus import (
    EVENT_GAME_OVER,
    EVENT_LEVEL_COMPLETE,
    EVENT_MATCH_CLEARED,
    EVENT_PROGRESS_SAVED,
    EventBus,
)
from hexstack.levels import MAX_LEVEL_ID
from hexstack.storage import JsonProgressStore

logger = logging.getLogger(__name__)


class ProgressSystem:
    """Derives and persists long-term progress from level outcomes.

    Storage problems never reach the game: a failed load yields default
    progress and a failed save is dropped.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: JsonProgressStore | None = None,
        save_path: Path | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._store = store or JsonProgressStore(save_path)
        self._progress_entity = self._ensure_progress_entity()

        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self._on_match_cleared)
        self.event_bus.subscribe(EVENT_LEVEL_COMPLETE, self._on_level_complete)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

        if load_existing:
            self.load_progress()

    def _ensure_progress_entity(self) -> int:
        existing = list(self.world.get_component(PersistentProgress))
        if existing:
            return existing[0][0]
        return self.world.create_entity(PersistentProgress())

    @property
    def store_path(self) -> Path:
        return self._store.path

    @property
    def progress(self) -> PersistentProgress:
        return self.world.component_for_entity(self._progress_entity, PersistentProgress)

    def _replace(self, progress: PersistentProgress) -> None:
        self.world.add_component(self._progress_entity, progress)

    def is_unlocked(self, level_id: int) -> bool:
        return level_id in self.progress.unlocked_level_ids

    def load_progress(self) -> PersistentProgress:
        try:
            loaded = self._store.load_progress()
        except StorageUnavailable as exc:
            logger.warning("Progress unavailable, using defaults: %s", exc)
            loaded = PersistentProgress()
        self._replace(loaded)
        return loaded

    def save_progress(self) -> bool:
        snapshot = self.progress.copy()
        try:
            self._store.save_progress(snapshot)
        except StorageUnavailable as exc:
            logger.warning("Progress not saved: %s", exc)
            self.event_bus.emit(EVENT_PROGRESS_SAVED, progress=snapshot, ok=False)
            return False
        self.event_bus.emit(EVENT_PROGRESS_SAVED, progress=snapshot, ok=True)
        return True

    def reset_progress(self) -> None:
        try:
            self._store.clear()
        except StorageUnavailable as exc:
            logger.warning("Stored progress not cleared: %s", exc)
        self._replace(PersistentProgress())

    def toggle_sound(self) -> bool:
        progress = self.progress
        progress.sound_enabled = not progress.sound_enabled
        self.save_progress()
        return progress.sound_enabled

    def record_level_complete(self, level: int, score: int) -> None:
        progress = self.progress
        self._record_level_score(progress, level, score)
        next_level = level + 1
        if next_level <= MAX_LEVEL_ID:
            progress.unlocked_level_ids.add(next_level)
            if next_level > progress.highest_level_reached:
                progress.highest_level_reached = next_level
        if score > progress.high_score:
            progress.high_score = score
        self.save_progress()

    def record_game_over(self, level: int, score: int) -> None:
        progress = self.progress
        self._record_level_score(progress, level, score)
        if score > progress.high_score:
            progress.high_score = score
        self.save_progress()

    @staticmethod
    def _record_level_score(progress: PersistentProgress, level: int, score: int) -> None:
        previous = progress.level_scores.get(level, 0)
        progress.level_scores[level] = max(previous, score)

    # Event handlers -----------------------------------------------------

    def _on_match_cleared(self, sender, **payload) -> None:
        score = payload.get("score")
        if score is None:
            return
        progress = self.progress
        if score > progress.high_score:
            progress.high_score = int(score)

    def _on_level_complete(self, sender, **payload) -> None:
        level = payload.get("level")
        score = payload.get("score")
        if level is None or score is None:
            return
        self.record_level_complete(int(level), int(score))

    def _on_game_over(self, sender, **payload) -> None:
        level = payload.get("level")
        score = payload.get("score")
        if level is None or score is None:
            return
        self.record_game_over(int(level), int(score))
