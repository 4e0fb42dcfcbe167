"""
Van Gogh — Synthetic Noise
2D Perlin-style gradient noise on a small periodic grid of unit vectors.

The grid is GRID_WIDTH x GRID_HEIGHT random directions. Between grid
points the contributions of the four surrounding cells are blended with
a cubic falloff, so noise(x, y) is smooth and tiles every
GRID_WIDTH * dx pixels horizontally (GRID_HEIGHT * dy vertically).

All functions accept scalars or numpy arrays.
"""

import numpy as np

from core.wrap import Torus

GRID_WIDTH = 40
GRID_HEIGHT = 40


class VectorGrid:
    """Fixed grid of unit vectors (gx, gy), indexed [i, j] with wraparound."""

    def __init__(self, gx: np.ndarray, gy: np.ndarray):
        gx = np.asarray(gx, dtype=np.float64)
        gy = np.asarray(gy, dtype=np.float64)
        if gx.shape != gy.shape or gx.ndim != 2:
            raise ValueError(f"gx/gy must be matching 2D arrays, got {gx.shape} and {gy.shape}")
        self.gx = gx
        self.gy = gy
        self.numx, self.numy = gx.shape
        self.torus = Torus(self.numx, self.numy)

    @classmethod
    def generate(cls, rng: np.random.RandomState, numx: int = GRID_WIDTH,
                 numy: int = GRID_HEIGHT) -> "VectorGrid":
        """Fill every cell with an independent random unit vector.

        One draw per cell from the run's generator: angle = U[0, 2) * pi.
        """
        alpha = rng.uniform(0.0, 2.0, size=(numx, numy)) * np.pi
        return cls(np.cos(alpha), np.sin(alpha))

    def vector(self, i, j):
        """(gx, gy) at cell (i, j), wrapped into the grid."""
        wi, wj = self.torus.wrap(i, j)
        return self.gx[wi, wj], self.gy[wi, wj]


def cubic(t):
    """Cubic falloff: |t|^2 (2|t| - 3) + 1 inside (-1, 1), zero outside."""
    at = np.abs(t)
    return np.where(at < 1.0, at * at * (2.0 * at - 3.0) + 1.0, 0.0)


def omega(grid: VectorGrid, u, v, i, j):
    """Contribution of grid cell (i, j) at local offset (u, v)."""
    gx, gy = grid.vector(i, j)
    return cubic(u) * cubic(v) * (gx * u + gy * v)


class NoiseField:
    """Continuous noise function over the plane.

    Args:
        grid: The run's VectorGrid.
        dx: Horizontal grid spacing in pixels.
        dy: Vertical grid spacing in pixels (defaults to dx).
    """

    def __init__(self, grid: VectorGrid, dx: float, dy: float | None = None):
        if dx <= 0 or (dy is not None and dy <= 0):
            raise ValueError(f"Grid spacing must be positive. Got dx={dx}, dy={dy}")
        self.grid = grid
        self.dx = float(dx)
        self.dy = float(dy) if dy is not None else float(dx)

    def __call__(self, x, y):
        """Sum the four surrounding cell contributions at (x, y)."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        sti = np.floor(x / self.dx).astype(np.int64)
        stj = np.floor(y / self.dy).astype(np.int64)

        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
        for i in (sti, sti + 1):
            for j in (stj, stj + 1):
                total = total + omega(self.grid,
                                      (x - i * self.dx) / self.dx,
                                      (y - j * self.dy) / self.dy,
                                      i, j)
        return total
