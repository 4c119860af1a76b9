"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from orbitcam.config.settings import ControllerConfig
from orbitcam.interaction.input import TickInput
from orbitcam.rendering.look_state import LookState


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def front_state():
    """Camera at (0, 0, 5) looking at the origin, Y up."""
    return LookState(eye=(0.0, 0.0, 5.0), target=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0))


@pytest.fixture
def controller_config():
    """Default sensitivities without cursor clamping."""
    return ControllerConfig()


@pytest.fixture
def idle_input():
    """A tick with no motion, scroll or held trigger."""
    return TickInput()


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)
