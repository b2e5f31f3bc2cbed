"""Shared pytest fixtures for PomoWidget tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomowidget.actions import ActionDispatcher
from pomowidget.timer.engine import TimerEngine
from pomowidget.timer.presets import PRESETS

from helpers import FakeHost


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine on the CLASSIC preset."""
    return TimerEngine(parent=None, settings=PRESETS["CLASSIC"])


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def dispatcher(engine, host):
    """Dispatcher wired to the engine and a recording host."""
    d = ActionDispatcher(engine)
    d.attach_host(host)
    host.calls.clear()
    return d
