import sys
from pathlib import Path

import pytest

# Ensure src package is importable without installation
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _clean_gate_environment(monkeypatch):
    for name in ("FRESHNESS_GATE_FAIL_ON_UPDATE", "FRESHNESS_GATE_VERSION_LABEL", "FRESHNESS_GATE_POLICY"):
        monkeypatch.delenv(name, raising=False)
