"""
Van Gogh — Gradient Estimation
Flow direction at each pixel from the scalar field, using Sobel-style
3x3 kernels with wrapped neighbours:

        |1 0 -1|          | 1  2  1|
    DX: |2 0 -2|      DY: | 0  0  0|
        |1 0 -1|          |-1 -2 -1|
"""

import numpy as np

from core.buffers import ScalarField

# Below this magnitude the direction is left as the zero vector
MIN_MAGNITUDE = 1e-6


def sobel(field: ScalarField, x, y):
    """Raw (gx, gy) kernel responses at integer (x, y). Accepts arrays."""
    x = np.asarray(x, dtype=np.int64)
    y = np.asarray(y, dtype=np.int64)
    s = field.sample

    gx = (s(x - 1, y - 1) - s(x + 1, y - 1)
          + 2 * s(x - 1, y) - 2 * s(x + 1, y)
          + s(x - 1, y + 1) - s(x + 1, y + 1))
    gy = (s(x - 1, y - 1) + 2 * s(x, y - 1) + s(x + 1, y - 1)
          - s(x - 1, y + 1) - 2 * s(x, y + 1) - s(x + 1, y + 1))
    return gx, gy


def gradient(field: ScalarField, x, y, rotate: bool = False):
    """Unit flow direction (vx, vy) at integer (x, y).

    Args:
        field: Scalar field, sampled with wraparound.
        x, y: Pixel coordinates (scalars or broadcastable int arrays).
        rotate: Turn the vector 90 degrees, (vx, vy) -> (vy, -vx), so the
            flow runs along level contours instead of across them.

    Returns:
        (vx, vy) float arrays. Unit length, or (0, 0) in flat regions.
    """
    gx, gy = sobel(field, x, y)
    vx = gx.astype(np.float64)
    vy = gy.astype(np.float64)
    if rotate:
        vx, vy = vy, -vx

    mag = np.sqrt(vx * vx + vy * vy)
    ok = mag >= MIN_MAGNITUDE
    scale = np.where(ok, 1.0 / np.where(ok, mag, 1.0), 1.0)
    return vx * scale, vy * scale


def gradient_grid(field: ScalarField, width: int, height: int, rotate: bool = False,
                  y0: int = 0):
    """Flow directions for rows y0 .. y0+height of a width-wide region.

    Returns:
        (vx, vy), each of shape (height, width).
    """
    ys, xs = np.mgrid[y0:y0 + height, 0:width]
    return gradient(field, xs, ys, rotate=rotate)
