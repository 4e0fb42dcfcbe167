"""
Van Gogh — Region of Interest
The filter runs on a rectangular selection of the frame; the destination
it produces is merged back over that selection afterwards.

Region spec formats:
    - Pixels: "100,50,400,300"  (x, y, width, height)
    - Percent: "0.25,0.1,0.5,0.8" (values 0.0-1.0 interpreted as fractions)
    - Preset: "center", "top-half", "left-half", ...
    - Dict: {"x": 100, "y": 50, "w": 400, "h": 300}
    - Tuple/list: (x, y, w, h)

Merge: optional feathered edge for a soft transition (0 = hard edge).
"""

from typing import NamedTuple

import numpy as np


# Named region presets (as fraction of frame)
REGION_PRESETS = {
    "center":       (0.25, 0.25, 0.50, 0.50),
    "top-half":     (0.00, 0.00, 1.00, 0.50),
    "bottom-half":  (0.00, 0.50, 1.00, 0.50),
    "left-half":    (0.00, 0.00, 0.50, 1.00),
    "right-half":   (0.50, 0.00, 0.50, 1.00),
    "top-left":     (0.00, 0.00, 0.50, 0.50),
    "top-right":    (0.50, 0.00, 0.50, 0.50),
    "bottom-left":  (0.00, 0.50, 0.50, 0.50),
    "bottom-right": (0.50, 0.50, 0.50, 0.50),
}

MAX_FEATHER = 100
MAX_SPEC_LEN = 200


class RegionError(Exception):
    """Invalid region specification."""
    pass


class Region(NamedTuple):
    """Absolute pixel rectangle inside a frame."""
    x: int
    y: int
    w: int
    h: int

    @property
    def slices(self) -> tuple[slice, slice]:
        """(rows, cols) slices for numpy indexing."""
        return slice(self.y, self.y + self.h), slice(self.x, self.x + self.w)

    def covers(self, frame_width: int, frame_height: int) -> bool:
        return (self.x, self.y, self.w, self.h) == (0, 0, frame_width, frame_height)


def parse_region(spec, frame_height: int, frame_width: int) -> Region:
    """Parse a region spec into an absolute pixel Region.

    Args:
        spec: Region specification — string, dict, tuple, list, or None.
        frame_height: Frame height in pixels.
        frame_width: Frame width in pixels.

    Returns:
        Region clamped to frame bounds. None selects the whole frame.

    Raises:
        RegionError: If the spec is invalid.
    """
    if spec is None:
        return Region(0, 0, frame_width, frame_height)

    if isinstance(spec, str):
        if len(spec) > MAX_SPEC_LEN:
            raise RegionError(f"Region string too long ({len(spec)} chars, max {MAX_SPEC_LEN})")
        if spec in REGION_PRESETS:
            return _fraction_to_pixels(*REGION_PRESETS[spec], frame_width, frame_height)
        parts = spec.replace(" ", "").split(",")
        if len(parts) != 4:
            raise RegionError(
                f"Region must be 'x,y,w,h' or a preset name. Got: '{spec}'. "
                f"Presets: {', '.join(sorted(REGION_PRESETS.keys()))}"
            )
        values = _to_floats(parts, spec)

    elif isinstance(spec, dict):
        values = _to_floats(
            [spec.get("x", 0), spec.get("y", 0),
             spec.get("w", frame_width), spec.get("h", frame_height)],
            spec,
        )

    elif isinstance(spec, (tuple, list)):
        if len(spec) != 4:
            raise RegionError(f"Region tuple must have 4 values (x,y,w,h). Got {len(spec)}.")
        values = _to_floats(spec, spec)

    else:
        raise RegionError(f"Unknown region spec type: {type(spec).__name__}")

    # All values in [0, 1] reads as fractions of the frame
    if all(0.0 <= v <= 1.0 for v in values):
        return _fraction_to_pixels(*values, frame_width, frame_height)
    return _validate_pixels(*(int(v) for v in values), frame_width, frame_height)


def _to_floats(items, spec) -> list[float]:
    try:
        values = [float(v) for v in items]
    except (TypeError, ValueError):
        raise RegionError(f"Region values must be numbers. Got: {spec!r}")
    if any(v != v or v in (float("inf"), float("-inf")) for v in values):
        raise RegionError(f"NaN/Inf not allowed in region: {spec!r}")
    return values


def _fraction_to_pixels(fx, fy, fw, fh, frame_w, frame_h) -> Region:
    return _validate_pixels(int(fx * frame_w), int(fy * frame_h),
                            int(fw * frame_w), int(fh * frame_h),
                            frame_w, frame_h)


def _validate_pixels(x, y, w, h, frame_w, frame_h) -> Region:
    """Validate and clamp pixel coordinates to frame bounds."""
    if w <= 0 or h <= 0:
        raise RegionError(f"Region size must be positive. Got w={w}, h={h}")
    if x < 0 or y < 0:
        raise RegionError(f"Region position must be non-negative. Got x={x}, y={y}")

    x = min(x, frame_w - 1)
    y = min(y, frame_h - 1)
    w = min(w, frame_w - x)
    h = min(h, frame_h - y)
    return Region(x, y, w, h)


def create_feather_mask(w: int, h: int, feather: int = 0) -> np.ndarray:
    """Float32 (h, w) mask rising linearly from the edges over `feather` pixels."""
    feather = max(0, min(feather, MAX_FEATHER, w // 2, h // 2))
    mask = np.ones((h, w), dtype=np.float32)
    for i in range(feather):
        alpha = (i + 1) / (feather + 1)
        mask[i, :] = np.minimum(mask[i, :], alpha)
        mask[h - 1 - i, :] = np.minimum(mask[h - 1 - i, :], alpha)
        mask[:, i] = np.minimum(mask[:, i], alpha)
        mask[:, w - 1 - i] = np.minimum(mask[:, w - 1 - i], alpha)
    return mask


def merge_region(frame: np.ndarray, dest: np.ndarray, region: Region,
                 feather: int = 0) -> np.ndarray:
    """Write a filtered region back over a copy of the frame.

    Args:
        frame: Full frame, (H, W, C).
        dest: Filtered region, (region.h, region.w, C).
        region: Where dest belongs.
        feather: Edge feather radius (0 = hard edge).

    Returns:
        New frame with the same dtype as the input.
    """
    rows, cols = region.slices
    if dest.shape[:2] != (region.h, region.w):
        raise RegionError(
            f"Filtered region is {dest.shape[1]}x{dest.shape[0]}, "
            f"expected {region.w}x{region.h}"
        )
    result = frame.copy()
    if feather > 0:
        mask = create_feather_mask(region.w, region.h, feather)[:, :, np.newaxis]
        original = frame[rows, cols].astype(np.float32)
        blended = dest.astype(np.float32) * mask + original * (1.0 - mask)
        result[rows, cols] = _cast_like(blended, frame)
    else:
        result[rows, cols] = _cast_like(dest, frame)
    return result


def _cast_like(values: np.ndarray, frame: np.ndarray) -> np.ndarray:
    if frame.dtype == np.uint8:
        return np.clip(np.rint(values), 0, 255).astype(np.uint8)
    return values.astype(frame.dtype)


def apply_to_region(frame: np.ndarray, effect_fn, region_spec,
                    feather: int = 0, **effect_params) -> np.ndarray:
    """Apply an effect function only to a region of the frame.

    Args:
        frame: Input frame (H, W, C).
        effect_fn: Callable (frame, **params) -> frame.
        region_spec: Region specification (string, dict, tuple, or None).
        feather: Feather radius for edge blending (0 = hard edge).
        **effect_params: Parameters passed to the effect function.
    """
    h, w = frame.shape[:2]
    region = parse_region(region_spec, h, w)

    if region.covers(w, h) and feather == 0:
        return effect_fn(frame, **effect_params)

    rows, cols = region.slices
    dest = effect_fn(frame[rows, cols].copy(), **effect_params)
    return merge_region(frame, dest, region, feather=feather)


def list_presets() -> dict:
    """Return all available region presets."""
    return REGION_PRESETS.copy()
