"""Shared fixtures for contrastwheel tests."""

import pytest

from contrastwheel.app.core import AppState, WheelSettings
from contrastwheel.app.state_manager import StateManager
from contrastwheel.ui.dpg.render_orchestrator import RenderOrchestrator

# Odd so the center pixel sits exactly on the wheel center.
SMALL_CANVAS = (101, 101)


@pytest.fixture
def settings():
    return WheelSettings(canvas_size=SMALL_CANVAS)


@pytest.fixture
def state(settings):
    return AppState(settings=settings)


@pytest.fixture
def manager(state):
    return StateManager(state)


@pytest.fixture
def orchestrator(manager):
    return RenderOrchestrator(manager)
