# Make src/ importable during tests without installing the package, and keep
# the developer's own ledger environment out of the test run.
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolate_tally_env(monkeypatch):
    monkeypatch.delenv("TALLY_DATA", raising=False)
    monkeypatch.delenv("TALLY_LOG_LEVEL", raising=False)
