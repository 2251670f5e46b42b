"""Shared test fixtures for host facts."""

import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from facts import FactRegistry  # noqa: E402


@pytest.fixture
def registry():
    """Empty registry."""
    return FactRegistry()


@pytest.fixture
def constant():
    """Build a setup callable that resolves to a fixed value."""

    def make(value, **confines):
        def setup(res):
            if confines:
                res.confine(confines)
            res.set_execution(lambda: value)

        return setup

    return make


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clear_facts_path(monkeypatch):
    """Keep a developer's $FACTS_PATH out of config tests."""
    monkeypatch.delenv("FACTS_PATH", raising=False)
