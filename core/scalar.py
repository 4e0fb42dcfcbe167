"""
Van Gogh — Scalar Extraction
Turns the effect image into the uint8 scalar field whose gradient
steers the streamlines.
"""

import cv2
import numpy as np

from core.buffers import PixelBuffer, ScalarField
from core.params import EffectChannel

# Random jitter added per pixel so flat areas still have some structure
JITTER = 1.0


def rgb_to_hsl(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert float RGB in [0, 1] to (hue, saturation, lightness), each in [0, 1].

    Achromatic pixels get hue 0.
    """
    rgb32 = np.ascontiguousarray(np.clip(rgb[..., :3], 0.0, 1.0), dtype=np.float32)
    hls = cv2.cvtColor(rgb32, cv2.COLOR_RGB2HLS)
    hue = hls[..., 0].astype(np.float64) / 360.0
    lightness = hls[..., 1].astype(np.float64)
    saturation = hls[..., 2].astype(np.float64)
    return hue, saturation, lightness


def extract_scalar_field(effect: PixelBuffer, channel: EffectChannel,
                         rng: np.random.RandomState) -> ScalarField:
    """Build the scalar field from one HSL channel of the effect image.

    Each pixel: channel * 255, plus U[-1, 1] jitter, rounded, clamped to 0..255.
    Alpha is ignored. Consumes one random draw per pixel (row-major).

    Args:
        effect: Effect image (full extent, not just the region of interest).
        channel: Which HSL channel to use.
        rng: Run-scoped random generator.
    """
    channel = EffectChannel(channel)
    hue, saturation, lightness = rgb_to_hsl(effect.pixels)
    if channel == EffectChannel.HUE:
        val = hue * 255.0
    elif channel == EffectChannel.SATURATION:
        val = saturation * 255.0
    else:
        val = lightness * 255.0

    val = val + rng.uniform(-JITTER, JITTER, size=val.shape)
    return ScalarField(np.clip(np.rint(val), 0, 255).astype(np.uint8))
