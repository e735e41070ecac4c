import os
import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Keep test output free of debug noise from a developer's .env
os.environ.setdefault("MERKLE_LOG_LEVEL", "WARNING")


@pytest.fixture
def blocks_file(tmp_path):
    """Write lines to a temp file and return its path."""

    def _write(*lines: str) -> Path:
        p = tmp_path / "blocks.txt"
        p.write_text("\n".join(lines), encoding="utf-8")
        return p

    return _write
