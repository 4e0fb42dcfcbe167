"""
Van Gogh — Streamline Integration Tests
Triangle window, step schedule, and both convolution modes.

Run with: pytest tests/test_integrate.py -v
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.buffers import PixelBuffer
from core.integrate import (
    convolve_streamline, lic_image, lic_noise, sample_offsets, triangle_filter,
)
from core.noise import NoiseField, VectorGrid


@pytest.fixture
def noise():
    return NoiseField(VectorGrid.generate(np.random.RandomState(21)), 2.0)


# ---------------------------------------------------------------------------
# TRIANGLE FILTER
# ---------------------------------------------------------------------------

class TestTriangleFilter:

    def test_peak_at_center(self):
        assert triangle_filter(0.0, 5.0) == 1.0

    def test_zero_at_ends(self):
        assert triangle_filter(5.0, 5.0) == 0.0
        assert triangle_filter(-5.0, 5.0) == 0.0

    def test_zero_outside(self):
        assert triangle_filter(7.0, 5.0) == 0.0

    def test_linear(self):
        np.testing.assert_allclose(triangle_filter(np.array([-2.5, 1.0]), 5.0), [0.5, 0.8])


# ---------------------------------------------------------------------------
# STEP SCHEDULE
# ---------------------------------------------------------------------------

class TestSampleOffsets:

    def test_even_division_reaches_end(self):
        step, offsets = sample_offsets(1.0, 2)
        assert step == 1.0
        assert offsets == [0.0, 1.0]

    def test_non_dividing_step_stops_short(self):
        step, offsets = sample_offsets(1.0, 2.5)
        assert step == pytest.approx(0.8)
        assert offsets == pytest.approx([-0.2, 0.6])
        assert offsets[-1] <= 1.0
        assert offsets[-1] + step > 1.0

    def test_step_count(self):
        _, offsets = sample_offsets(2.0, 4)
        assert offsets == [-1.0, 0.0, 1.0, 2.0]

    def test_single_step(self):
        step, offsets = sample_offsets(3.0, 1)
        assert step == 6.0
        assert offsets == [3.0]

    def test_step_larger_than_window(self):
        # 2l / 0.5 = 4l: the first step already overshoots +l
        step, offsets = sample_offsets(1.0, 0.5)
        assert step == 4.0
        assert offsets == []

    def test_step_below_float_resolution_raises(self):
        # 2 * 5 / 1e17 is smaller than the spacing of floats near 5
        with pytest.raises(ValueError, match="float resolution"):
            sample_offsets(5.0, 1e17)

    @pytest.mark.parametrize("steps", [float("inf"), float("nan"), 0.0])
    def test_non_finite_step_raises(self, steps):
        with pytest.raises((ValueError, ZeroDivisionError)):
            sample_offsets(1.0, steps)


# ---------------------------------------------------------------------------
# CONVOLUTION
# ---------------------------------------------------------------------------

class TestConvolveStreamline:

    def test_constant_signal_integrates_to_length(self):
        total = convolve_streamline(lambda x, y: np.ones_like(x), 3.0, 4.0, 1.0, 0.0, 2.0, 4)
        # Area under the triangle window of half-width 2
        assert total == pytest.approx(2.0)

    def test_zero_vector_samples_only_center(self):
        calls = []

        def sample(x, y):
            calls.append((float(x), float(y)))
            return np.asarray(x) * 0 + 1.0

        convolve_streamline(sample, 3.0, 4.0, 0.0, 0.0, 2.0, 4)
        assert set(calls) == {(3.0, 4.0)}

    def test_walks_along_direction(self):
        calls = []

        def sample(x, y):
            calls.append((float(x), float(y)))
            return np.asarray(x) * 0.0

        convolve_streamline(sample, 10.0, 10.0, 0.0, 1.0, 2.0, 4)
        # First sample at u = -l (ahead), then back along -v
        assert calls[0] == (10.0, 12.0)
        assert calls[-1] == (10.0, 8.0)
        assert all(c[0] == 10.0 for c in calls)

    def test_array_input_shape(self):
        xs = np.zeros((3, 4))
        total = convolve_streamline(lambda x, y: x + y, xs, xs, xs, xs, 1.0, 5)
        assert total.shape == (3, 4)


class TestLicNoise:

    def test_output_range(self, noise):
        rng = np.random.RandomState(0)
        xs = rng.uniform(0, 50, (10, 10))
        ys = rng.uniform(0, 50, (10, 10))
        angle = rng.uniform(0, 2 * np.pi, (10, 10))
        value = lic_noise(noise, xs, ys, np.cos(angle), np.sin(angle), 5.0, 25, -2.5, 2.5)
        assert value.min() >= 0.5
        assert value.max() <= 1.0

    def test_zero_vector_closed_form(self, noise):
        x, y, l = 3.3, 7.9, 4.0
        value = lic_noise(noise, x, y, 0.0, 0.0, l, 8, -1.0, 1.0)
        n = float(noise(x, y))
        expected = np.clip((n * l + 1.0) / 2.0, 0.0, 1.0) / 2.0 + 0.5
        assert value == pytest.approx(expected)

    def test_zero_noise_maps_to_three_quarters(self, noise):
        # Grid points have zero noise; symmetric bounds put 0 at the middle
        value = lic_noise(noise, 4.0, 6.0, 0.0, 0.0, 2.0, 4, -1.0, 1.0)
        assert value == pytest.approx(0.75)

    def test_narrow_bounds_saturate(self, noise):
        xs = np.linspace(0.5, 40.5, 200)
        value = lic_noise(noise, xs, xs * 0.3, np.ones_like(xs), np.zeros_like(xs),
                          5.0, 25, -1e-6, 1e-6)
        assert set(np.unique(value)) <= {0.5, 1.0}


class TestLicImage:

    def test_constant_image_reproduced(self):
        buf = PixelBuffer(np.full((8, 8, 3), 0.4))
        out = lic_image(buf, 3.0, 2.0, 0.6, 0.8, 2.0, 4)
        np.testing.assert_allclose(out, [0.4, 0.4, 0.4])

    def test_output_shape_has_channels(self, random_frame):
        buf = PixelBuffer(random_frame)
        xs = np.zeros((2, 5))
        out = lic_image(buf, xs, xs, xs + 1.0, xs, 3.0, 10)
        assert out.shape == (2, 5, 3)

    def test_output_clamped(self):
        px = np.full((6, 6, 3), 2.0)
        px[..., 2] = -1.0
        out = lic_image(PixelBuffer(px), 2.0, 2.0, 1.0, 0.0, 2.0, 4)
        np.testing.assert_allclose(out, [1.0, 1.0, 0.0])

    def test_zero_vector_returns_pixel(self, random_frame):
        buf = PixelBuffer(random_frame)
        out = lic_image(buf, 5.0, 9.0, 0.0, 0.0, 2.0, 4)
        np.testing.assert_allclose(out, random_frame[9, 5])

    def test_alpha_channel_carried(self):
        px = np.zeros((4, 4, 4))
        px[..., 0] = 1.0
        px[..., 3] = 0.5
        out = lic_image(PixelBuffer(px), 1.0, 1.0, 1.0, 0.0, 2.0, 4)
        np.testing.assert_allclose(out, [1.0, 0.0, 0.0, 0.5])
