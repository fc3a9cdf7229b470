import sys, os

# Ensure src (and the repo root, for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest


@pytest.fixture(autouse=True)
def _isolated_save_path(tmp_path, monkeypatch):
    """Keep every test away from the real progress file."""
    monkeypatch.setenv("HEXSTACK_SAVE_PATH", str(tmp_path / "default-progress.json"))
