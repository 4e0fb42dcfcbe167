"""
Van Gogh — Pixel Buffers & Scalar Field
Read-only views over image data with toroidal sampling.

PixelBuffer holds float RGB(A) pixels in [0, 1], shape (H, W, C).
ScalarField holds the uint8 channel extracted from the effect image.
"""

import numpy as np

from core.safety import validate_pixels
from core.wrap import Torus


class PixelBuffer:
    """Float RGB(A) image with wrapped point and bilinear sampling.

    Args:
        pixels: (H, W, 3) or (H, W, 4) array with channels in [0, 1].
        has_alpha: Whether the fourth channel is real alpha. Defaults to
            True for 4-channel input. When False only RGB is filtered and
            a fourth channel (if any) rides along untouched.
    """

    def __init__(self, pixels, has_alpha: bool | None = None):
        arr = validate_pixels(pixels, "pixel buffer")
        self.pixels = np.asarray(arr, dtype=np.float64)
        self.height, self.width, self.channels = self.pixels.shape
        if has_alpha is None:
            has_alpha = self.channels == 4
        if has_alpha and self.channels != 4:
            raise ValueError("has_alpha=True requires a 4-channel buffer")
        self.has_alpha = bool(has_alpha)
        self.torus = Torus(self.width, self.height)

    @property
    def color_channels(self) -> int:
        """Number of channels the filter operates on (4 with alpha, else 3)."""
        return 4 if self.has_alpha else 3

    @property
    def color(self) -> np.ndarray:
        """(H, W, color_channels) view of the filtered channels."""
        return self.pixels[:, :, :self.color_channels]

    def sample(self, x, y) -> np.ndarray:
        """Nearest-pixel sample at integer coordinates, wrapped."""
        xi, yi = self.torus.wrap(np.asarray(x, dtype=np.int64), np.asarray(y, dtype=np.int64))
        return self.pixels[yi, xi, :self.color_channels]

    def bilinear(self, u, v) -> np.ndarray:
        """Bilinear sample at real coordinates (u, v), wrapped on both axes.

        With alpha present the interpolation is alpha-weighted: colour is
        interpolated premultiplied, then divided by the interpolated alpha.
        Where the interpolated alpha is zero the colour is zero.

        Returns:
            Array of shape u.shape + (color_channels,).
        """
        u = np.asarray(u, dtype=np.float64)
        v = np.asarray(v, dtype=np.float64)
        fu = np.floor(u)
        fv = np.floor(v)
        fx = (u - fu)[..., np.newaxis]
        fy = (v - fv)[..., np.newaxis]
        ix = 1.0 - fx
        iy = 1.0 - fy

        x1, y1 = self.torus.wrap(fu.astype(np.int64), fv.astype(np.int64))
        x2, y2 = self.torus.wrap(x1 + 1, y1 + 1)

        cc = self.color_channels
        p0 = self.pixels[y1, x1, :cc]
        p1 = self.pixels[y1, x2, :cc]
        p2 = self.pixels[y2, x1, :cc]
        p3 = self.pixels[y2, x2, :cc]

        if not self.has_alpha:
            m0 = ix * p0 + fx * p1
            m1 = ix * p2 + fx * p3
            return iy * m0 + fy * m1

        a0, a1, a2, a3 = (p[..., 3:4] for p in (p0, p1, p2, p3))
        alpha = iy * (ix * a0 + fx * a1) + fy * (ix * a2 + fx * a3)
        m0 = ix * a0 * p0[..., :3] + fx * a1 * p1[..., :3]
        m1 = ix * a2 * p2[..., :3] + fx * a3 * p3[..., :3]
        weighted = iy * m0 + fy * m1
        safe_alpha = np.where(alpha > 0, alpha, 1.0)
        rgb = np.where(alpha > 0, weighted / safe_alpha, 0.0)
        return np.concatenate([rgb, alpha], axis=-1)


class ScalarField:
    """Per-pixel uint8 intensities with toroidal addressing.

    Covers the full extent of the image it was extracted from, which may
    differ in size from the region being filtered.
    """

    def __init__(self, values):
        values = np.asarray(values)
        if values.ndim != 2 or values.size == 0:
            raise ValueError(f"Scalar field must be a non-empty 2D array, got shape {values.shape}")
        self.values = values.astype(np.uint8)
        self.height, self.width = self.values.shape
        self.torus = Torus(self.width, self.height)

    def sample(self, x, y):
        """Intensity at integer (x, y), wrapped. Returns int or int array."""
        xi, yi = self.torus.wrap(np.asarray(x, dtype=np.int64), np.asarray(y, dtype=np.int64))
        return self.values[yi, xi].astype(np.int64)

    def __repr__(self):
        return f"ScalarField({self.width}x{self.height})"
