"""
Van Gogh -- Filter Parameter Model

Pydantic model for one LIC run. Immutable once built.
Mirrors the interactive controls of the classic "Van Gogh (LIC)" filter:
three selectors (channel, operator, convolve) and five sliders.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

MIN_FILTER_LENGTH = 0.1
# Slider min/max values are stored x10 relative to the normalization bounds
NORMALIZE_SCALE = 10.0
# Hard limits; the interactive ranges in the registry are narrower
MAX_FILTER_LENGTH = 1024.0
MAX_NOISE_MAGNITUDE = 1024.0
MAX_INTEGRATION_STEPS = 1000.0


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EffectChannel(str, Enum):
    """HSL channel of the effect image that drives the vector field."""
    HUE = "hue"
    SATURATION = "saturation"
    BRIGHTNESS = "brightness"   # HSL lightness


class EffectOperator(str, Enum):
    """How the scalar-field gradient becomes a flow direction."""
    DERIVATIVE = "derivative"   # Follow the gradient (crosses edges)
    GRADIENT = "gradient"       # Gradient rotated 90 degrees (follows edges)


class ConvolveSource(str, Enum):
    """Signal integrated along each streamline."""
    NOISE = "noise"             # Synthetic Perlin-style noise, modulates the source
    IMAGE = "image"             # Resampled source image, replaces the source


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

class LICParams(BaseModel):
    """Parameters for a single filter run.

    min_value / max_value are on the slider scale; the integrator
    normalizes over [minv, maxv] = [min_value / 10, max_value / 10].
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    filter_length: float = Field(
        5.0,
        le=MAX_FILTER_LENGTH,
        allow_inf_nan=False,
        description="Half-width l of the streamline window",
    )
    noise_magnitude: float = Field(
        2.0,
        gt=0,
        le=MAX_NOISE_MAGNITUDE,
        allow_inf_nan=False,
        description="Noise grid spacing dx = dy",
    )
    integration_steps: float = Field(
        25.0,
        gt=0,
        le=MAX_INTEGRATION_STEPS,
        allow_inf_nan=False,
        description="Trapezoid steps across [-l, l]",
    )
    min_value: float = Field(-25.0, allow_inf_nan=False)
    max_value: float = Field(25.0, allow_inf_nan=False)
    channel: EffectChannel = EffectChannel.BRIGHTNESS
    operator: EffectOperator = EffectOperator.GRADIENT
    convolve: ConvolveSource = ConvolveSource.IMAGE
    seed: int | None = None

    @field_validator("filter_length")
    @classmethod
    def _clamp_filter_length(cls, v: float) -> float:
        if v < MIN_FILTER_LENGTH:
            logger.debug("filter_length %s clamped to %s", v, MIN_FILTER_LENGTH)
            return MIN_FILTER_LENGTH
        return v

    @model_validator(mode="after")
    def _check_bounds(self) -> LICParams:
        if not self.min_value < self.max_value:
            raise ValueError(
                f"min_value ({self.min_value}) must be less than max_value ({self.max_value})"
            )
        return self

    @property
    def minv(self) -> float:
        return self.min_value / NORMALIZE_SCALE

    @property
    def maxv(self) -> float:
        return self.max_value / NORMALIZE_SCALE

    @property
    def rotate(self) -> bool:
        """True when the gradient is turned 90 degrees (edge-following)."""
        return self.operator == EffectOperator.GRADIENT

    @property
    def synthetic(self) -> bool:
        """True when integrating synthetic noise instead of the source image."""
        return self.convolve == ConvolveSource.NOISE
