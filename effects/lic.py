"""
Van Gogh — Line Integral Convolution Effect
Frame-level wrapper around core/render.py: frame in, frame out.
"""

import numpy as np

from core.params import LICParams
from core.render import render_lic


def _to_float(frame):
    """uint8 (or float) pixels -> float64 in [0, 1]. None passes through."""
    if frame is None:
        return None
    arr = np.asarray(frame)
    if arr.dtype == np.uint8:
        return arr.astype(np.float64) / 255.0
    return arr.astype(np.float64)


def _from_float(pixels: np.ndarray, dtype) -> np.ndarray:
    if dtype == np.uint8:
        return np.clip(np.rint(pixels * 255.0), 0, 255).astype(np.uint8)
    return pixels.astype(dtype)


def van_gogh_lic(frame: np.ndarray, effect_image: np.ndarray | None = None,
                 filter_length: float = 5.0, noise_magnitude: float = 2.0,
                 integration_steps: float = 25, min_value: float = -25.0,
                 max_value: float = 25.0, channel: str = "brightness",
                 operator: str = "gradient", convolve: str = "image",
                 seed: int | None = None, has_alpha: bool | None = None,
                 workers: int = 1, progress_callback=None,
                 cancel_event=None) -> np.ndarray:
    """Smear the frame along the flow lines of an effect image.

    Args:
        frame: (H, W, 3) or (H, W, 4) uint8 or float array.
        effect_image: Image whose structure steers the flow. Any size.
            Defaults to the frame itself.
        filter_length: Streamline half-length in pixels (clamped to >= 0.1).
        noise_magnitude: Noise grid spacing in pixels (noise mode only).
        integration_steps: Samples across the streamline.
        min_value: Lower normalization bound, slider scale (noise mode).
        max_value: Upper normalization bound, slider scale (noise mode).
        channel: 'hue', 'saturation', or 'brightness'.
        operator: 'derivative' (flow across edges) or 'gradient' (along edges).
        convolve: 'noise' (brush-stroke texture over the colours) or
            'image' (smear the image itself).
        seed: Random seed; None for fresh randomness each call.
        has_alpha: Treat a 4th channel as alpha. Inferred if None.
        workers: Threads used for the pixel loop.
        progress_callback: Optional fn(fraction).
        cancel_event: Optional threading.Event to abort between row bands.

    Returns:
        Filtered frame, same shape and dtype as the input.
    """
    params = LICParams(
        filter_length=filter_length,
        noise_magnitude=noise_magnitude,
        integration_steps=integration_steps,
        min_value=min_value,
        max_value=max_value,
        channel=channel,
        operator=operator,
        convolve=convolve,
        seed=seed,
    )
    source = _to_float(frame)
    effect = _to_float(effect_image) if effect_image is not None else source

    dest = render_lic(source, effect, params, has_alpha=has_alpha,
                      progress_callback=progress_callback,
                      cancel_event=cancel_event, workers=workers)
    return _from_float(dest, np.asarray(frame).dtype)
