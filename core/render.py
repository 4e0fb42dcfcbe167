"""
Van Gogh — Render Pipeline
Drives the per-pixel LIC over a region of interest.

Two-phase run:
  1. Build the run context once (random vector grid in noise mode, scalar
     field from the effect image). All random draws happen here.
  2. Filter the region in bands of rows. Bands only read shared state and
     write disjoint rows, so they can be spread over worker threads.

The returned destination array is the new content for the region; callers
merge it back into the full frame (see core/region.py).
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from core.buffers import PixelBuffer
from core.gradient import gradient_grid
from core.integrate import lic_image, lic_noise
from core.noise import NoiseField, VectorGrid
from core.params import LICParams
from core.safety import preflight
from core.scalar import extract_scalar_field

logger = logging.getLogger(__name__)

DEFAULT_BAND_ROWS = 16


class RenderCancelled(Exception):
    """Raised when the cancel flag is set while a render is in progress."""
    pass


def _as_pixels(buf):
    return buf.pixels if isinstance(buf, PixelBuffer) else buf


class LICRun:
    """Everything one filter run shares across pixels. Built once, then read-only.

    Args:
        source: Source pixels for the region of interest (array or PixelBuffer).
        effect: Effect image pixels, any size (array or PixelBuffer).
        params: LICParams (defaults if None).
        has_alpha: Alpha flag for the source; inferred from channels if None.
    """

    def __init__(self, source, effect, params: LICParams | None = None,
                 has_alpha: bool | None = None):
        preflight(_as_pixels(source), _as_pixels(effect))
        self.params = params if params is not None else LICParams()

        if isinstance(source, PixelBuffer):
            self.source = source
        else:
            self.source = PixelBuffer(source, has_alpha=has_alpha)
        self.effect = effect if isinstance(effect, PixelBuffer) else PixelBuffer(effect)

        self.rng = np.random.RandomState(self.params.seed)
        self.grid = None
        self.noise = None
        if self.params.synthetic:
            self.grid = VectorGrid.generate(self.rng)
            self.noise = NoiseField(self.grid, self.params.noise_magnitude)
        self.field = extract_scalar_field(self.effect, self.params.channel, self.rng)

    @property
    def height(self) -> int:
        return self.source.height

    @property
    def width(self) -> int:
        return self.source.width

    def render_band(self, y0: int, y1: int) -> np.ndarray:
        """Filter rows y0 .. y1-1. Returns (y1 - y0, W, C) destination rows."""
        p = self.params
        w = self.width
        vx, vy = gradient_grid(self.field, w, y1 - y0, rotate=p.rotate, y0=y0)
        ys, xs = np.mgrid[y0:y1, 0:w]

        out = self.source.pixels[y0:y1].copy()
        cc = self.source.color_channels
        if p.synthetic:
            value = lic_noise(self.noise, xs, ys, vx, vy,
                              p.filter_length, p.integration_steps, p.minv, p.maxv)
            out[:, :, :cc] *= value[:, :, np.newaxis]
        else:
            out[:, :, :cc] = lic_image(self.source, xs, ys, vx, vy,
                                       p.filter_length, p.integration_steps)
        return out


def _bands(height: int, band_rows: int) -> list[tuple[int, int]]:
    return [(y0, min(y0 + band_rows, height)) for y0 in range(0, height, band_rows)]


def _render_band(run: LICRun, y0: int, y1: int, cancel_event=None) -> np.ndarray:
    if cancel_event is not None and cancel_event.is_set():
        raise RenderCancelled(f"Render cancelled before rows {y0}-{y1}")
    try:
        return run.render_band(y0, y1)
    except Exception:
        logger.exception("LIC band failed at rows %d-%d", y0, y1)
        raise


def render_lic(
    source,
    effect,
    params: LICParams | None = None,
    has_alpha: bool | None = None,
    progress_callback=None,
    cancel_event=None,
    workers: int = 1,
    band_rows: int = DEFAULT_BAND_ROWS,
) -> np.ndarray:
    """Run the filter over a whole region of interest.

    Args:
        source: (H, W, 3|4) float pixels in [0, 1] (or a PixelBuffer).
        effect: Effect image steering the flow; any size. Required.
        params: LICParams. Defaults if None.
        has_alpha: Source alpha flag; inferred from channel count if None.
        progress_callback: Optional fn(fraction) with fraction in [0, 1],
            non-decreasing, last call 1.0.
        cancel_event: Optional threading.Event polled between row bands.
        workers: Threads to spread bands over (1 = run inline).
        band_rows: Rows per band.

    Returns:
        Destination float array, same shape as the source.

    Raises:
        MissingEffectImageError, InvalidExtentError: Before any pixel is touched.
        RenderCancelled: If cancel_event is set mid-run.
    """
    if band_rows < 1:
        raise ValueError(f"band_rows must be >= 1, got {band_rows}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    start_time = time.time()
    run = LICRun(source, effect, params, has_alpha=has_alpha)
    p = run.params
    logger.info(
        "LIC: %dx%d, %s mode, channel=%s, operator=%s, l=%.2f, steps=%g, workers=%d",
        run.width, run.height, p.convolve.value, p.channel.value, p.operator.value,
        p.filter_length, p.integration_steps, workers,
    )

    dest = np.empty_like(run.source.pixels)
    bands = _bands(run.height, band_rows)
    rows_done = 0
    last_reported = -1.0

    def _report(fraction):
        nonlocal last_reported
        if progress_callback is not None and fraction > last_reported:
            last_reported = fraction
            progress_callback(fraction)

    if workers == 1:
        for y0, y1 in bands:
            dest[y0:y1] = _render_band(run, y0, y1, cancel_event)
            rows_done += y1 - y0
            _report(rows_done / run.height)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(_render_band, run, y0, y1, cancel_event): (y0, y1)
                for y0, y1 in bands
            }
            try:
                for fut in as_completed(futures):
                    y0, y1 = futures[fut]
                    dest[y0:y1] = fut.result()
                    rows_done += y1 - y0
                    _report(rows_done / run.height)
            finally:
                for fut in futures:
                    fut.cancel()

    _report(1.0)
    logger.debug("LIC complete: %d rows in %.2fs", run.height, time.time() - start_time)
    return dest
