import json

import pytest

from hexstack.components.progress import PersistentProgress
from hexstack.errors import StorageUnavailable
from hexstack.storage import SAVE_PATH_ENV, JsonProgressStore, default_save_path


def test_missing_file_loads_defaults(tmp_path):
    store = JsonProgressStore(tmp_path / "nothing-here.json")
    progress = store.load_progress()
    assert progress == PersistentProgress()


def test_saved_progress_loads_back(tmp_path):
    store = JsonProgressStore(tmp_path / "nested" / "progress.json")
    original = PersistentProgress(
        high_score=1200,
        highest_level_reached=3,
        unlocked_level_ids={1, 2, 3},
        sound_enabled=False,
        level_scores={1: 450, 2: 780},
    )
    store.save_progress(original)
    assert store.load_progress() == original


def test_on_disk_layout(tmp_path):
    path = tmp_path / "progress.json"
    JsonProgressStore(path).save_progress(PersistentProgress(high_score=90, level_scores={1: 90}))
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "highScore": 90,
        "highestLevelReached": 1,
        "unlockedLevelIds": [1],
        "soundEnabled": True,
        "levelScores": {"1": 90},
    }


def test_partial_document_fills_in_defaults(tmp_path):
    path = tmp_path / "progress.json"
    path.write_text('{"highScore": 77}', encoding="utf-8")
    progress = JsonProgressStore(path).load_progress()
    assert progress.high_score == 77
    assert progress.unlocked_level_ids == {1}


CORRUPT_SAVES = [
    b"{not json",
    b"[1, 2, 3]",
    b'{"highScore": "lots"}',
    b'{"highScore": 5, "x": "\xff\xfe"}',
    b'{"highScore": 1e999}',
]


@pytest.mark.parametrize("content", CORRUPT_SAVES)
def test_unreadable_progress_raises_storage_unavailable(tmp_path, content):
    path = tmp_path / "progress.json"
    path.write_bytes(content)
    with pytest.raises(StorageUnavailable):
        JsonProgressStore(path).load_progress()


def test_unwritable_location_raises_storage_unavailable(tmp_path):
    # A directory where the file should be cannot be opened for writing.
    path = tmp_path / "progress.json"
    path.mkdir()
    with pytest.raises(StorageUnavailable):
        JsonProgressStore(path).save_progress(PersistentProgress())


def test_clear_removes_the_file_and_tolerates_absence(tmp_path):
    path = tmp_path / "progress.json"
    store = JsonProgressStore(path)
    store.save_progress(PersistentProgress(high_score=5))
    store.clear()
    assert not path.exists()
    store.clear()


def test_save_path_can_be_overridden_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "elsewhere.json"
    monkeypatch.setenv(SAVE_PATH_ENV, str(target))
    assert default_save_path() == target
    assert JsonProgressStore().path == target


def test_installed_package_saves_under_home(tmp_path, monkeypatch):
    monkeypatch.delenv(SAVE_PATH_ENV)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr("hexstack.storage._checkout_root", lambda: None)
    assert default_save_path() == tmp_path / ".hexstack" / "progress.json"


def test_source_checkout_saves_under_data(tmp_path, monkeypatch):
    monkeypatch.delenv(SAVE_PATH_ENV)
    monkeypatch.setattr("hexstack.storage._checkout_root", lambda: tmp_path)
    assert default_save_path() == tmp_path / "data" / "progress.json"
