"""
Van Gogh — Toroidal Addressing
Every grid in the filter (vector grid, scalar field, pixel buffers) is
periodic: coordinates outside [0, extent) wrap around to the other side.
"""

import numpy as np


def wrap_index(i, extent: int):
    """Wrap an integer index (or int array) into [0, extent).

    Negative indices wrap from the far edge: wrap_index(-1, 40) == 39.
    """
    if extent <= 0:
        raise ValueError(f"Extent must be positive. Got {extent}")
    if isinstance(i, np.ndarray):
        return np.mod(i, extent)
    return int(i) % extent


class Torus:
    """2D toroidal extent. Maps any integer (x, y) into storage bounds."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Torus extent must be positive. Got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    def wrap(self, x, y):
        """Return (x mod width, y mod height)."""
        return wrap_index(x, self.width), wrap_index(y, self.height)

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), matching numpy row-major storage."""
        return (self.height, self.width)

    def __repr__(self):
        return f"Torus({self.width}x{self.height})"
