"""JSON file storage for PersistentProgress.

On-disk layout::

    {
      "highScore": 1200,
      "highestLevelReached": 3,
      "unlockedLevelIds": [1, 2, 3],
      "soundEnabled": true,
      "levelScores": {"1": 450, "2": 780}
    }

Every read or write failure surfaces as StorageUnavailable; a missing file is
not a failure and loads as default progress.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from hexstack.components.progress import PersistentProgress
from hexstack.errors import StorageUnavailable

SAVE_PATH_ENV = "HEXSTACK_SAVE_PATH"


def _checkout_root() -> Path | None:
    """Project root when running from a source checkout, else None."""
    root = Path(__file__).resolve().parents[2]
    if (root / "pyproject.toml").is_file():
        return root
    return None


def default_save_path() -> Path:
    """Save file location: the environment override, then the checkout's
    ``data/`` directory, then ``~/.hexstack`` for an installed package."""
    override = os.environ.get(SAVE_PATH_ENV)
    if override:
        return Path(override)
    root = _checkout_root()
    if root is not None:
        return root / "data" / "progress.json"
    return Path.home() / ".hexstack" / "progress.json"


def progress_to_payload(progress: PersistentProgress) -> Dict[str, Any]:
    return {
        "highScore": progress.high_score,
        "highestLevelReached": progress.highest_level_reached,
        "unlockedLevelIds": sorted(progress.unlocked_level_ids),
        "soundEnabled": progress.sound_enabled,
        "levelScores": {str(level): score for level, score in sorted(progress.level_scores.items())},
    }


def progress_from_payload(payload: Dict[str, Any]) -> PersistentProgress:
    defaults = PersistentProgress()
    if not isinstance(payload, dict):
        raise ValueError("progress payload must be a JSON object")
    unlocked = payload.get("unlockedLevelIds", sorted(defaults.unlocked_level_ids))
    scores = payload.get("levelScores", {})
    return PersistentProgress(
        high_score=int(payload.get("highScore", defaults.high_score)),
        highest_level_reached=int(payload.get("highestLevelReached", defaults.highest_level_reached)),
        unlocked_level_ids={int(level) for level in unlocked} or set(defaults.unlocked_level_ids),
        sound_enabled=bool(payload.get("soundEnabled", defaults.sound_enabled)),
        level_scores={int(level): int(score) for level, score in dict(scores).items()},
    )


class JsonProgressStore:
    """Reads and writes PersistentProgress as a single JSON document."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else default_save_path()

    def load_progress(self) -> PersistentProgress:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return PersistentProgress()
        except (OSError, ValueError) as exc:
            # ValueError covers JSONDecodeError and UnicodeDecodeError.
            raise StorageUnavailable(f"Cannot read progress from {self.path}: {exc}") from exc
        try:
            return progress_from_payload(payload)
        except (TypeError, ValueError, OverflowError) as exc:
            raise StorageUnavailable(f"Malformed progress in {self.path}: {exc}") from exc

    def save_progress(self, progress: PersistentProgress) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(progress_to_payload(progress), handle, indent=2)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write progress to {self.path}: {exc}") from exc

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot remove {self.path}: {exc}") from exc
