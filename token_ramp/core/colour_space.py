"""Colour-space conversions, ΔE distance and lerp-based colour adjustments.

All channel values are floats in [0, 1]. rgb_to_lab decodes sRGB gamma,
converts through CIE XYZ (0-100 scale) and maps to CIE LAB under the D65
white point. delta_e is plain CIE76 Euclidean distance in LAB: adequate for
ranking candidates and for the coarse Auto/Suggest tiers, but not calibrated
to just-noticeable-difference thresholds the way CIEDE2000 is.

lerp_color, lighten_color and darken_color do not clamp `t`/`amount`:
values outside [0, 1] extrapolate.
"""

import colorsys

import numpy as np
from PIL import ImageColor

from token_ramp.core.types import BLACK, RGB, WHITE

# D65 reference white, XYZ on the 0-100 scale
XN, YN, ZN = 95.047, 100.0, 108.883

_RGB_TO_XYZ = np.array(
    [
        [0.4124, 0.3576, 0.1805],
        [0.2126, 0.7152, 0.0722],
        [0.0193, 0.1192, 0.9505],
    ]
)

_EPSILON = 0.008856


def _linearise(c: float) -> float:
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def _compand(t: float) -> float:
    return t ** (1 / 3) if t > _EPSILON else 7.787 * t + 16 / 116


def rgb_to_xyz(rgb: RGB) -> tuple[float, float, float]:
    r, g, b = (_linearise(c) * 100 for c in rgb)
    x = r * 0.4124 + g * 0.3576 + b * 0.1805
    y = r * 0.2126 + g * 0.7152 + b * 0.0722
    z = r * 0.0193 + g * 0.1192 + b * 0.9505
    return x, y, z


def rgb_to_lab(rgb: RGB) -> tuple[float, float, float]:
    x, y, z = rgb_to_xyz(rgb)
    fx, fy, fz = _compand(x / XN), _compand(y / YN), _compand(z / ZN)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def rgb_array_to_lab(colors: np.ndarray) -> np.ndarray:
    """Vectorised rgb_to_lab over an (n, 3) array of colours."""
    arr = np.asarray(colors, dtype=float).reshape(-1, 3)
    linear = np.where(arr > 0.04045, ((arr + 0.055) / 1.055) ** 2.4, arr / 12.92) * 100
    xyz = linear @ _RGB_TO_XYZ.T / np.array([XN, YN, ZN])
    f = np.where(xyz > _EPSILON, np.cbrt(xyz), 7.787 * xyz + 16 / 116)
    return np.stack(
        [116 * f[:, 1] - 16, 500 * (f[:, 0] - f[:, 1]), 200 * (f[:, 1] - f[:, 2])],
        axis=1,
    )


def delta_e(rgb1: RGB, rgb2: RGB) -> float:
    """CIE76 ΔE between two RGB colours."""
    l1, a1, b1 = rgb_to_lab(rgb1)
    l2, a2, b2 = rgb_to_lab(rgb2)
    return ((l1 - l2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2) ** 0.5


def rgb_to_hsl(rgb: RGB) -> tuple[float, float, float]:
    """Return (h, s, l), hue in [0, 1). Achromatic input gives h = s = 0."""
    h, light, s = colorsys.rgb_to_hls(*rgb)
    return h % 1.0, s, light


def hsl_to_rgb(h: float, s: float, light: float) -> RGB:
    return colorsys.hls_to_rgb(h % 1.0, light, s)


def lerp_color(c1: RGB, c2: RGB, t: float) -> RGB:
    return (
        c1[0] + (c2[0] - c1[0]) * t,
        c1[1] + (c2[1] - c1[1]) * t,
        c1[2] + (c2[2] - c1[2]) * t,
    )


def lighten_color(color: RGB, amount: float) -> RGB:
    return lerp_color(color, WHITE, amount)


def darken_color(color: RGB, amount: float) -> RGB:
    return lerp_color(color, BLACK, amount)


def boost_color(color: RGB, sat_boost_pct: float, light_boost_pct: float) -> RGB:
    """Raise HSL saturation and lightness by percentage points, clamped to [0, 1]."""
    h, s, light = rgb_to_hsl(color)
    s = min(1.0, max(0.0, s + sat_boost_pct / 100))
    light = min(1.0, max(0.0, light + light_boost_pct / 100))
    return hsl_to_rgb(h, s, light)


def parse_colour(value: str) -> tuple[RGB, float]:
    """Parse '#rgb', '#rrggbb', '#rrggbbaa', 'rgb(...)' or a CSS name.

    Returns (rgb, alpha). Raises ValueError for anything PIL cannot read.
    """
    parsed = ImageColor.getrgb(value.strip())
    rgb = (parsed[0] / 255, parsed[1] / 255, parsed[2] / 255)
    alpha = parsed[3] / 255 if len(parsed) == 4 else 1.0
    return rgb, alpha


def to_hex(rgb: RGB, alpha: float | None = None) -> str:
    """Format as '#rrggbb', or '#rrggbbaa' when alpha is given and below 1."""
    r, g, b = (round(min(1.0, max(0.0, c)) * 255) for c in rgb)
    out = f'#{r:02x}{g:02x}{b:02x}'
    if alpha is not None and alpha < 1.0:
        out += f'{round(min(1.0, max(0.0, alpha)) * 255):02x}'
    return out
