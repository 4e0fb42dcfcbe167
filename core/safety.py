"""
Van Gogh — Safety & Input Guards
Centralized preflight checks run before any pixel is processed.
Rejects buffers the filter cannot sample and runs without an effect image.
"""

import numpy as np

# --- Configurable Limits ---
MAX_PIXELS = 64 * 1024 * 1024     # Largest buffer accepted (64 megapixels)
ALLOWED_CHANNELS = (3, 4)         # RGB or RGBA


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


class InvalidExtentError(SafetyError):
    """Buffer is zero-sized, malformed, or too large to process."""
    pass


class MissingEffectImageError(SafetyError):
    """Run started without an effect (direction source) image."""
    pass


def validate_pixels(pixels, label: str = "buffer") -> np.ndarray:
    """Check that an array is a usable RGB(A) pixel buffer.

    Args:
        pixels: Array-like of shape (H, W, 3) or (H, W, 4).
        label: Name used in error messages ("source", "effect", ...).

    Returns:
        The input as a numpy array.

    Raises:
        InvalidExtentError: If the extent or channel layout is unusable.
    """
    if pixels is None:
        raise InvalidExtentError(f"Invalid input extent: {label} is None")
    arr = np.asarray(pixels)
    if arr.ndim != 3:
        raise InvalidExtentError(
            f"Invalid input extent: {label} must be (H, W, C), got shape {arr.shape}"
        )
    h, w, c = arr.shape
    if h <= 0 or w <= 0:
        raise InvalidExtentError(f"Invalid input extent: {label} is {w}x{h}")
    if c not in ALLOWED_CHANNELS:
        raise InvalidExtentError(
            f"Invalid input extent: {label} has {c} channels, expected RGB or RGBA"
        )
    if h * w > MAX_PIXELS:
        raise InvalidExtentError(
            f"Invalid input extent: {label} is {w}x{h} ({h * w} px), "
            f"exceeds {MAX_PIXELS} px limit. Process a smaller region."
        )
    return arr


def preflight(source, effect) -> dict:
    """Run all checks before a filter run.

    Args:
        source: Source pixel array (the region of interest).
        effect: Effect / direction-source pixel array.

    Returns:
        dict with source and effect extents.

    Raises:
        MissingEffectImageError: If no effect image was supplied.
        InvalidExtentError: If either buffer cannot be sampled.
    """
    if effect is None:
        raise MissingEffectImageError(
            "No effect image set. Pass the image whose structure should "
            "steer the streamlines (the source itself is a common choice)."
        )
    src = validate_pixels(source, "source")
    eff = validate_pixels(effect, "effect")
    return {
        "source_size": (src.shape[1], src.shape[0]),
        "effect_size": (eff.shape[1], eff.shape[0]),
        "source_channels": src.shape[2],
    }
