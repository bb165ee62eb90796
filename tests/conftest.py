# tests/conftest.py
from __future__ import annotations

import pytest

from runner.tools import build_default_registry


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty directory with no tool jail configured."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TOOLS_JAIL_ROOT", raising=False)
    return tmp_path


@pytest.fixture
def registry():
    return build_default_registry()
