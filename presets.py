"""
Van Gogh -- Built-in Presets
Tuned parameter sets for the LIC effects.

Each preset names an effect from the registry and the params to run it
with. Anything not listed falls back to the effect's defaults.

Categories:
    Painterly   -- Brush-stroke looks that keep the original colours
    Smear       -- The image itself dragged along its own contours
    Texture     -- Material-like surfaces (metal, wood, fibre)
"""

BUILT_IN_PRESETS = [
    # =========================================================================
    # PAINTERLY
    # =========================================================================
    {
        "name": "Starry Night",
        "description": "Long swirling strokes that wrap around every edge. "
                       "Noise convolved along the brightness contours, laid over the original colours.",
        "category": "Painterly",
        "effect": "licnoise",
        "params": {"filter_length": 12.0, "noise_magnitude": 2.0, "integration_steps": 30,
                   "min_value": -25.0, "max_value": 25.0, "channel": "brightness",
                   "operator": "gradient"},
        "tags": ["swirl", "strokes", "classic", "contour"],
    },
    {
        "name": "Impasto",
        "description": "Short, thick dabs that cut across edges instead of following them.",
        "category": "Painterly",
        "effect": "licnoise",
        "params": {"filter_length": 4.0, "noise_magnitude": 3.0, "integration_steps": 12,
                   "min_value": -15.0, "max_value": 15.0, "operator": "derivative"},
        "tags": ["strokes", "thick", "short", "edges"],
    },
    {
        "name": "Pastel Hatch",
        "description": "Fine hatching driven by colour changes rather than brightness. "
                       "Best on images with flat, saturated regions.",
        "category": "Painterly",
        "effect": "licnoise",
        "params": {"filter_length": 6.0, "noise_magnitude": 1.0, "integration_steps": 20,
                   "channel": "hue"},
        "tags": ["hatch", "fine", "colour"],
    },
    # =========================================================================
    # SMEAR
    # =========================================================================
    {
        "name": "Gentle Flow",
        "description": "The default look: the picture softly dragged along its own contours.",
        "category": "Smear",
        "effect": "lic",
        "params": {},
        "tags": ["default", "soft", "flow"],
    },
    {
        "name": "Liquid Edges",
        "description": "Long smear along the contours. Detail dissolves into streams; "
                       "strong edges survive.",
        "category": "Smear",
        "effect": "lic",
        "params": {"filter_length": 20.0, "integration_steps": 40},
        "tags": ["long", "liquid", "flow", "dreamy"],
    },
    {
        "name": "Shockwave",
        "description": "Smear across the edges, so outlines bleed outward like a blast ring.",
        "category": "Smear",
        "effect": "lic",
        "params": {"filter_length": 10.0, "integration_steps": 25, "operator": "derivative"},
        "tags": ["burst", "edges", "motion"],
    },
    # =========================================================================
    # TEXTURE
    # =========================================================================
    {
        "name": "Brushed Metal",
        "description": "Tight, fine-grained noise with a long window. Reads as a brushed surface.",
        "category": "Texture",
        "effect": "licnoise",
        "params": {"filter_length": 24.0, "noise_magnitude": 1.0, "integration_steps": 40,
                   "min_value": -10.0, "max_value": 10.0},
        "tags": ["metal", "fine", "surface"],
    },
    {
        "name": "Wood Grain",
        "description": "Coarse noise on a saturation-driven field. Rings follow the colour bands.",
        "category": "Texture",
        "effect": "licnoise",
        "params": {"filter_length": 16.0, "noise_magnitude": 5.0, "integration_steps": 32,
                   "channel": "saturation", "min_value": -40.0, "max_value": 40.0},
        "tags": ["wood", "coarse", "rings", "surface"],
    },
]


def get_preset(name: str) -> dict | None:
    """Look up a preset by name (case-insensitive)."""
    name_lower = name.lower()
    for preset in BUILT_IN_PRESETS:
        if preset["name"].lower() == name_lower:
            return preset
    return None


def get_presets_by_category(category: str) -> list[dict]:
    """Get all presets in a category."""
    return [p for p in BUILT_IN_PRESETS if p["category"].lower() == category.lower()]


def get_presets_by_tag(tag: str) -> list[dict]:
    """Get all presets that have a given tag."""
    tag_lower = tag.lower()
    return [p for p in BUILT_IN_PRESETS if tag_lower in [t.lower() for t in p["tags"]]]


def list_preset_names() -> list[str]:
    """Return all preset names."""
    return [p["name"] for p in BUILT_IN_PRESETS]


def list_categories() -> list[str]:
    """Return unique categories."""
    return sorted(set(p["category"] for p in BUILT_IN_PRESETS))


def apply_preset(frame, name: str, **overrides):
    """Run a preset on a frame. Keyword overrides win over preset params.

    Raises:
        ValueError: If the preset doesn't exist.
    """
    from effects import apply_effect

    preset = get_preset(name)
    if preset is None:
        raise ValueError(
            f"Unknown preset: {name}. Available: {', '.join(list_preset_names())}"
        )
    return apply_effect(frame, preset["effect"], **{**preset["params"], **overrides})
