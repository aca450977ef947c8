"""Shared test fixtures for ProjectDash."""

import itertools
import os
from datetime import date

import pytest

from projectdash.config import DashboardConfig
from projectdash.dashboard import Dashboard
from projectdash.store import RelationalStore

FIXED_TODAY = date(2025, 10, 20)


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: p-new-1, t-new-2, ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-new-{next(counter)}"


@pytest.fixture
def store(sequential_ids):
    """Seeded store with a fixed clock and predictable ids."""
    return RelationalStore.seeded(clock=lambda: FIXED_TODAY, id_factory=sequential_ids)


@pytest.fixture
def empty_store():
    return RelationalStore(clock=lambda: FIXED_TODAY)


@pytest.fixture
def events(store):
    """Events published by the ``store`` fixture, in order."""
    received = []
    store.subscribe(received.append)
    return received


@pytest.fixture
def dashboard(store):
    """Dashboard over the seeded store with the delay recorded, not slept."""
    delays = []
    board = Dashboard(store, DashboardConfig(), sleep=delays.append)
    board.delays = delays
    return board


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch):
    """Keep load_config away from the real home/cwd config files and env."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("PROJECTDASH_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def today():
    """The date the ``store`` fixture's clock reports."""
    return FIXED_TODAY
