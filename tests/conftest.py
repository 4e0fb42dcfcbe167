"""
Conftest: shared fixtures for all Van Gogh test modules.

Synthetic frames only — no image files are read or written.
"""

import numpy as np
import pytest


def _make_test_frame(width=32, height=24):
    """Generate a synthetic uint8 test frame (gradient, not blank)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = 128  # constant G
    frame[:, :, 2] = np.linspace(255, 0, width, dtype=np.uint8)  # B inverse
    return frame


@pytest.fixture
def test_frame():
    """32x24 uint8 RGB gradient frame."""
    return _make_test_frame()


@pytest.fixture
def random_frame():
    """24x24 deterministic random float RGB frame in [0, 1]."""
    rng = np.random.RandomState(42)
    return rng.rand(24, 24, 3)


@pytest.fixture
def rings_frame():
    """32x32 float RGB frame of concentric brightness rings (strong contours)."""
    ys, xs = np.mgrid[0:32, 0:32]
    r = np.sqrt((xs - 16.0) ** 2 + (ys - 16.0) ** 2)
    v = 0.5 + 0.5 * np.sin(r / 2.0)
    return np.stack([v, v * 0.8, 1.0 - v], axis=2)


@pytest.fixture
def red_2x2():
    """2x2 pure red float RGB frame."""
    frame = np.zeros((2, 2, 3), dtype=np.float64)
    frame[:, :, 0] = 1.0
    return frame
