"""
Van Gogh — Effects Registry
Uniform interface over the filters in this package.
Every effect is a function: (frame: np.ndarray, **params) -> np.ndarray
"""

import inspect

import numpy as np

from effects.lic import van_gogh_lic

# Controls shared by both LIC entries, on the interactive slider scale
_LIC_RANGES = {
    "filter_length": {"min": 0.1, "max": 64.0},
    "noise_magnitude": {"min": 1.0, "max": 5.0},
    "integration_steps": {"min": 1, "max": 40},
    "min_value": {"min": -100.0, "max": 0.0},
    "max_value": {"min": 0.0, "max": 100.0},
}
_LIC_CHOICES = {
    "channel": ["hue", "saturation", "brightness"],
    "operator": ["derivative", "gradient"],
    "convolve": ["noise", "image"],
}

# Master registry: name -> entry (fn, category, default params, UI hints)
EFFECTS = {
    "lic": {
        "fn": van_gogh_lic,
        "category": "artistic",
        "params": {
            "filter_length": 5.0, "noise_magnitude": 2.0, "integration_steps": 25,
            "min_value": -25.0, "max_value": 25.0, "channel": "brightness",
            "operator": "gradient", "convolve": "image", "seed": None,
        },
        "param_ranges": _LIC_RANGES,
        "param_choices": _LIC_CHOICES,
        "description": "Van Gogh (LIC) — smear the image along the contours of an effect image",
    },
    "licnoise": {
        "fn": van_gogh_lic,
        "category": "artistic",
        "params": {
            "filter_length": 5.0, "noise_magnitude": 2.0, "integration_steps": 25,
            "min_value": -25.0, "max_value": 25.0, "channel": "brightness",
            "operator": "gradient", "convolve": "noise", "seed": None,
        },
        "param_ranges": _LIC_RANGES,
        "param_choices": _LIC_CHOICES,
        "description": "Van Gogh (LIC) brush strokes — flow-aligned noise texture over the original colours",
    },
}

# Category display order and labels
CATEGORIES = {
    "artistic": "ARTISTIC",
}


def get_effect(name: str):
    """Get an effect by name. Returns (fn, default_params).

    Raises ValueError if the effect doesn't exist.
    """
    if name not in EFFECTS:
        available = ", ".join(sorted(EFFECTS.keys()))
        raise ValueError(f"Unknown effect: {name}. Available: {available}")
    entry = EFFECTS[name]
    return entry["fn"], entry["params"].copy()


def _describe(name: str, entry: dict) -> dict:
    return {
        "name": name,
        "description": entry["description"],
        "params": entry["params"],
        "category": entry.get("category", "other"),
    }


def list_effects(category: str = None) -> list[dict]:
    """List all available effects with descriptions.

    Args:
        category: Optional filter — only return effects in this category.
    """
    return [
        _describe(name, entry)
        for name, entry in EFFECTS.items()
        if not category or entry.get("category") == category
    ]


def list_categories() -> list[str]:
    """Return ordered list of category keys."""
    return list(CATEGORIES.keys())


def search_effects(query: str, max_query_len: int = 200) -> list[dict]:
    """Search effects by name or description substring."""
    if len(query) > max_query_len:
        raise ValueError(f"Search query too long (max {max_query_len} chars)")
    query_lower = query.lower()
    return [
        _describe(name, entry)
        for name, entry in EFFECTS.items()
        if query_lower in name or query_lower in entry["description"].lower()
    ]


def apply_effect(frame, effect_name: str, **params):
    """Apply a named effect to a frame with given params.

    Special params:
        mix (0.0-1.0): Dry/wet blend. 1.0 = fully processed (default).
        blend_mode: How the wet signal combines with the dry one.
        region: Region spec — "x,y,w,h", preset name, or dict. None = full frame.
        feather (int): Edge feather radius for region blending (0 = hard edge).
    """
    mix = float(params.pop("mix", 1.0))
    mix = max(0.0, min(1.0, mix))
    blend_mode = params.pop("blend_mode", "normal")
    region = params.pop("region", None)
    feather = int(params.pop("feather", 0))

    fn, defaults = get_effect(effect_name)
    merged = {**defaults, **params}

    unknown = set(merged) - set(inspect.signature(fn).parameters)
    if unknown:
        raise ValueError(f"Unknown parameter(s) for '{effect_name}': {', '.join(sorted(unknown))}")

    if region is not None or feather > 0:
        from core.region import apply_to_region
        wet = apply_to_region(frame, fn, region, feather=feather, **merged)
    else:
        wet = fn(frame, **merged)

    if mix <= 0.0:
        wet = frame.copy()
    elif mix < 1.0 or blend_mode != "normal":
        wet = _blend_mix(frame, wet, mix, blend_mode)

    return wet


# Blend modes on [0, 1] colour values
_BLEND_FNS = {
    "multiply": lambda b, t: b * t,
    "screen": lambda b, t: 1.0 - (1.0 - b) * (1.0 - t),
    "overlay": lambda b, t: np.where(b < 0.5, 2.0 * b * t, 1.0 - 2.0 * (1.0 - b) * (1.0 - t)),
    "add": lambda b, t: np.minimum(1.0, b + t),
    "difference": lambda b, t: np.abs(b - t),
    "soft_light": lambda b, t: (1.0 - 2.0 * t) * b ** 2 + 2.0 * t * b,
}


def _blend_mix(original, wet, mix, blend_mode="normal"):
    """Apply blend mode + mix between original and wet frames.

    Colour channels go through the blend mode; an alpha channel is mixed
    linearly. Returns the dtype of the original.
    """
    scale = 255.0 if original.dtype == np.uint8 else 1.0
    b = original.astype(np.float32) / scale
    t = wet.astype(np.float32) / scale

    blend_fn = _BLEND_FNS.get(blend_mode)
    if blend_fn is not None:
        blended = t.copy()
        blended[:, :, :3] = blend_fn(b[:, :, :3], t[:, :, :3])
    else:
        blended = t
    result = b * (1.0 - mix) + blended * mix

    if original.dtype == np.uint8:
        return np.clip(np.rint(result * 255.0), 0, 255).astype(np.uint8)
    return result.astype(original.dtype)
