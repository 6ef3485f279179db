from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the repo root is importable (so `import db.*` works in tests).
REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture()
def engine():
    from db.engine import create_engine

    # In-memory SQLite keeps one connection per thread, so rows survive across `begin()` blocks.
    eng = create_engine("sqlite://")
    yield eng
    eng.dispose()
