# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for test imports like `import wire`, `import host`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from wire import ScratchBuffer  # noqa: E402


@pytest.fixture
def buf() -> ScratchBuffer:
    return ScratchBuffer()


@pytest.fixture
def sample_snapshot_path() -> Path:
    return PROJECT_ROOT / "config" / "raw" / "host_snapshot.json"
