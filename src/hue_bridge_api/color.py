"""RGB color values and conversion to the Hue CIE xy color space."""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

MAX_BRIGHTNESS = 254


class RGBA(BaseModel):
    """8-bit RGBA color. Alpha defaults to fully opaque."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    def premultiplied(self) -> Tuple[float, float, float]:
        """Return the color channels scaled by alpha, in [0, 1]."""
        alpha = self.a / 255.0
        return (
            self.r / 255.0 * alpha,
            self.g / 255.0 * alpha,
            self.b / 255.0 * alpha,
        )


def _gamma_correct(channel: float) -> float:
    if channel > 0.04045:
        return pow((channel + 0.055) / (1.0 + 0.055), 2.4)
    return channel / 12.92


def rgb_to_xy(color: RGBA) -> Tuple[List[float], int]:
    """Convert an RGBA color to a Hue ``xy`` coordinate and brightness.

    Uses the wide gamut D65 conversion recommended for Hue lights. The
    brightness is the luminance (Y) scaled to the Hue range [0, 254].
    Black maps to the D65 white point at zero brightness.
    """
    r, g, b = (_gamma_correct(c) for c in color.premultiplied())

    x = r * 0.664511 + g * 0.154324 + b * 0.162028
    y = r * 0.283881 + g * 0.668433 + b * 0.047685
    z = r * 0.000088 + g * 0.072310 + b * 0.986039

    total = x + y + z
    if total == 0:
        return [0.3127, 0.329], 0

    xy = [round(x / total, 4), round(y / total, 4)]
    brightness = min(MAX_BRIGHTNESS, int(round(y * MAX_BRIGHTNESS)))
    return xy, brightness
