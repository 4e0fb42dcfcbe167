"""
Van Gogh — Streamline Integration
The Line Integral Convolution itself (Cabral & Leedom, SIGGRAPH '93).

At each pixel (x, y) with unit direction (vx, vy) the signal is sampled
along the straight streamline (x - u*vx, y - u*vy) for u in [-l, l],
weighted by a triangle filter and summed with the trapezoidal rule.

Stepping: the first sample is at u = -l, then u = -l + step, -l + 2*step,
... for as long as u <= l, with u accumulated by repeated addition. When
step does not divide 2l the last sample lands short of +l; it is not
snapped to +l.

Everything here is vectorized: x, y, vx, vy may be arrays of any shape.
"""

import numpy as np

from core.buffers import PixelBuffer
from core.noise import NoiseField


def triangle_filter(u, length: float):
    """Window weight max(0, 1 - |u| / l)."""
    return np.maximum(0.0, 1.0 - np.abs(u) / length)


def sample_offsets(length: float, steps: float) -> tuple[float, list[float]]:
    """Step size and the streamline offsets after the first (u = -l) sample.

    Returns:
        (step, [u1, u2, ...]) where u1 = -l + step and every u <= l.

    Raises:
        ValueError: If the step is not a positive finite number, or is too
            small to move u at the scale of l.
    """
    step = 2.0 * length / steps
    if not np.isfinite(step) or step <= 0:
        raise ValueError(f"Integration step must be positive and finite. Got {step}")
    offsets = []
    u = -length + step
    while u <= length:
        offsets.append(u)
        nxt = u + step
        if nxt == u:
            raise ValueError(
                f"Integration step {step} is below float resolution at l={length}; "
                f"use fewer steps"
            )
        u = nxt
    return step, offsets


def convolve_streamline(sample, x, y, vx, vy, length: float, steps: float):
    """Trapezoidal integral of filter(u) * sample(x - u*vx, y - u*vy) over [-l, l].

    Each step reuses the previous right-endpoint sample as its left endpoint.

    Args:
        sample: Callable (xs, ys) -> array. Trailing channel axes are allowed.
        x, y: Pixel coordinates.
        vx, vy: Unit flow direction (may be zero).
        length: Filter half-width l.
        steps: Number of integration steps across [-l, l].
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    vx = np.asarray(vx, dtype=np.float64)
    vy = np.asarray(vy, dtype=np.float64)
    step, offsets = sample_offsets(length, steps)

    f1 = _weighted(sample(x + length * vx, y + length * vy), triangle_filter(-length, length))
    total = np.zeros_like(f1)
    for u in offsets:
        f2 = _weighted(sample(x - u * vx, y - u * vy), triangle_filter(u, length))
        total += (f1 + f2) * 0.5 * step
        f1 = f2
    return total


def _weighted(values, weight):
    return np.asarray(values, dtype=np.float64) * weight


def lic_noise(noise: NoiseField, x, y, vx, vy, length: float, steps: float,
              minv: float, maxv: float):
    """Synthetic mode: convolve noise along the streamline.

    The integral is normalized over [minv, maxv], clamped to [0, 1] and
    remapped to [0.5, 1.0] so it can be used as a brightness multiplier.
    """
    value = convolve_streamline(noise, x, y, vx, vy, length, steps)
    value = np.clip((value - minv) / (maxv - minv), 0.0, 1.0)
    return value / 2.0 + 0.5


def lic_image(source: PixelBuffer, x, y, vx, vy, length: float, steps: float):
    """Image mode: convolve the bilinearly resampled source along the streamline.

    Returns:
        Colour array of shape x.shape + (source.color_channels,), the running
        sum divided by l and clamped to [0, 1] per channel.
    """
    total = convolve_streamline(source.bilinear, x, y, vx, vy, length, steps)
    total *= 1.0 / length
    return np.clip(total, 0.0, 1.0)
