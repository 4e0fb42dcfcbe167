"""
Van Gogh — Safety & Preflight Tests
Extent and channel checks, the missing-effect guard, and the error hierarchy.

Run with: pytest tests/test_safety.py -v
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import safety
from core.safety import (
    InvalidExtentError, MissingEffectImageError, SafetyError, preflight, validate_pixels,
)


class TestValidatePixels:

    @pytest.mark.parametrize("shape", [(1, 1, 3), (7, 3, 4), (2, 9, 3)])
    def test_accepts_rgb_and_rgba(self, shape):
        arr = validate_pixels(np.zeros(shape))
        assert arr.shape == shape

    @pytest.mark.parametrize("shape", [(0, 4, 3), (4, 0, 3), (0, 0, 4)])
    def test_zero_extent_rejected(self, shape):
        with pytest.raises(InvalidExtentError, match="Invalid input extent"):
            validate_pixels(np.zeros(shape))

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 1), (4, 4, 2), (4, 4, 5), (2, 2, 2, 3)])
    def test_bad_layout_rejected(self, shape):
        with pytest.raises(InvalidExtentError):
            validate_pixels(np.zeros(shape))

    def test_none_rejected(self):
        with pytest.raises(InvalidExtentError):
            validate_pixels(None)

    def test_pixel_limit(self, monkeypatch):
        monkeypatch.setattr(safety, "MAX_PIXELS", 15)
        validate_pixels(np.zeros((3, 5, 3)))
        with pytest.raises(InvalidExtentError, match="limit"):
            validate_pixels(np.zeros((4, 4, 3)))

    def test_label_in_message(self):
        with pytest.raises(InvalidExtentError, match="effect"):
            validate_pixels(np.zeros((0, 1, 3)), "effect")


class TestPreflight:

    def test_reports_extents(self):
        info = preflight(np.zeros((4, 6, 4)), np.zeros((10, 2, 3)))
        assert info == {"source_size": (6, 4), "effect_size": (2, 10), "source_channels": 4}

    def test_missing_effect(self):
        with pytest.raises(MissingEffectImageError):
            preflight(np.zeros((4, 4, 3)), None)

    def test_missing_effect_checked_first(self):
        with pytest.raises(MissingEffectImageError):
            preflight(np.zeros((0, 4, 3)), None)

    def test_bad_effect(self):
        with pytest.raises(InvalidExtentError, match="effect"):
            preflight(np.zeros((4, 4, 3)), np.zeros((4, 4)))


class TestHierarchy:

    def test_subclasses(self):
        assert issubclass(InvalidExtentError, SafetyError)
        assert issubclass(MissingEffectImageError, SafetyError)

    def test_catch_all(self):
        with pytest.raises(SafetyError):
            preflight(np.zeros((0, 0, 3)), np.zeros((1, 1, 3)))
