import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scorekeeper import config


@pytest.fixture(autouse=True)
def strict_snapshots(monkeypatch):
    """Run every test with snapshot checks on, whatever the environment says."""
    monkeypatch.setattr(config, "STRICT_SNAPSHOTS", True)
    yield
