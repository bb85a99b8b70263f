# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chains:
    sRGB → Linear RGB → XYZ (D65) → CIE LAB
                      → XYZ → LMS (Hunt-Pointer-Estevez)
                      → OKLab → OKLCH
    sRGB ↔ HSL

References:
- sRGB: IEC 61966-2-1
- CIE LAB: CIE 15:2004
- OKLab: https://bottosson.github.io/posts/oklab/

Float-space conversions take arrays of shape (..., 3) so a single color and
a whole palette go through the same code. The ``rgb_*`` helpers wrap them
for 8-bit RGB values and plain tuples.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from teul.schema import HSL, RGB

logger = logging.getLogger(__name__)

ColorLike = Union[RGB, str, Sequence[float]]
Vector3 = tuple[float, float, float]


# =============================================================================
# Hex / RGB Marshaling
# =============================================================================

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _to_channel(value: float) -> int:
    """Round and clamp a 0-255 float to an 8-bit channel."""
    return max(0, min(255, round_half_up(value)))


def parse_hex(hex_str: str, *, strict: bool = False) -> RGB:
    """
    Parse a 6-digit hex color, with or without ``#``, any case.

    Malformed input (wrong length, non-hex characters) resolves to black
    unless ``strict`` is set, in which case ValueError is raised.
    """
    match = _HEX_RE.fullmatch(hex_str) if isinstance(hex_str, str) else None
    if match is None:
        if strict:
            raise ValueError(f"Invalid hex color: {hex_str!r}")
        logger.warning("Malformed hex color %r, falling back to black", hex_str)
        return RGB(0, 0, 0)
    return RGB(*(int(group, 16) for group in match.groups()))


def hex_to_rgb(hex_str: str) -> RGB:
    """Convert a hex string to RGB. Malformed input gives black."""
    return parse_hex(hex_str)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert channels to a lowercase ``#rrggbb`` string (rounded, clamped)."""
    return f"#{_to_channel(r):02x}{_to_channel(g):02x}{_to_channel(b):02x}"


def as_rgb(color: ColorLike) -> RGB:
    """
    Coerce a color argument to RGB.

    Accepts an RGB, a hex string, or any 3-sequence of 0-255 numbers
    (rounded and clamped).
    """
    if isinstance(color, RGB):
        return color
    if isinstance(color, str):
        return hex_to_rgb(color)
    try:
        values = [float(v) for v in color]
    except TypeError as e:
        raise TypeError(f"Expected RGB, hex string or 3-sequence, got {type(color)}") from e
    if len(values) != 3:
        raise TypeError(f"Expected 3 channels, got {len(values)}")
    return RGB(*(_to_channel(v) for v in values))


def rgb_to_array(colors: Sequence[ColorLike]) -> NDArray[np.uint8]:
    """Stack colors into a (N, 3) uint8 array."""
    if len(colors) == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    return np.array([as_rgb(c).to_tuple() for c in colors], dtype=np.uint8)


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    linear = np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.0) + 0.055) / 1.055, 2.4)
    )
    return linear


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to sRGB values [0,1].

    Inverse of srgb_to_linear. Out-of-range input is clipped.
    """
    linear = np.asarray(linear, dtype=np.float64)
    # Clip negative values to avoid NaN in power function
    linear_safe = np.maximum(linear, 0.0)
    srgb = np.where(
        linear_safe <= 0.0031308,
        linear_safe * 12.92,
        1.055 * np.power(linear_safe, 1.0 / 2.4) - 0.055
    )
    return np.clip(srgb, 0.0, 1.0)


def uint8_to_linear(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """Convert (..., 3) 8-bit sRGB to linear RGB."""
    return srgb_to_linear(np.asarray(pixels, dtype=np.float64) / 255.0)


def linear_to_uint8(linear: NDArray[np.float64]) -> NDArray[np.int64]:
    """Convert (..., 3) linear RGB to rounded, clamped 8-bit channels."""
    scaled = linear_to_srgb(linear) * 255.0
    return np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.int64)


def rgb_to_linear(color: ColorLike) -> NDArray[np.float64]:
    """Gamma-decode one color to a linear RGB vector of shape (3,)."""
    return uint8_to_linear(np.array(as_rgb(color).to_tuple()))


def linear_to_rgb(linear: NDArray[np.float64]) -> RGB:
    """Gamma-encode one linear RGB vector back to 8-bit RGB."""
    r, g, b = linear_to_uint8(np.asarray(linear, dtype=np.float64))
    return RGB(int(r), int(g), int(b))


# =============================================================================
# Linear RGB ↔ XYZ ↔ LAB
# =============================================================================

# sRGB primaries, D65 white
_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
], dtype=np.float64)

_XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
], dtype=np.float64)

# D65 reference white on the 0-100 scale
D65_WHITE = np.array([95.047, 100.0, 108.883], dtype=np.float64)

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787
_LAB_OFFSET = 16.0 / 116.0


def linear_rgb_to_xyz(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert linear RGB to CIE XYZ (Y of white = 1)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return np.einsum('...j,ij->...i', rgb, _RGB_TO_XYZ)


def xyz_to_linear_rgb(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert CIE XYZ (Y of white = 1) to linear RGB."""
    xyz = np.asarray(xyz, dtype=np.float64)
    return np.einsum('...j,ij->...i', xyz, _XYZ_TO_RGB)


def xyz_to_lab(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert CIE XYZ on the 0-100 scale to CIE LAB.

    Uses the 0.008856 threshold with the 7.787 linear segment below it.
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    t = xyz / D65_WHITE
    f = np.where(t > _LAB_EPSILON, np.cbrt(t), _LAB_KAPPA * t + _LAB_OFFSET)

    L = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])

    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert CIE LAB to XYZ on the 0-100 scale."""
    lab = np.asarray(lab, dtype=np.float64)

    fy = (lab[..., 0] + 16.0) / 116.0
    fx = lab[..., 1] / 500.0 + fy
    fz = fy - lab[..., 2] / 200.0

    f = np.stack([fx, fy, fz], axis=-1)
    cubed = f ** 3
    t = np.where(cubed > _LAB_EPSILON, cubed, (f - _LAB_OFFSET) / _LAB_KAPPA)

    return t * D65_WHITE


# =============================================================================
# XYZ ↔ LMS
# =============================================================================

# Hunt-Pointer-Estevez cone response matrix
_XYZ_TO_LMS = np.array([
    [0.4002, 0.7076, -0.0808],
    [-0.2263, 1.1653, 0.0457],
    [0.0, 0.0, 0.9182],
], dtype=np.float64)

_LMS_TO_XYZ = np.linalg.inv(_XYZ_TO_LMS)


def xyz_to_lms(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert CIE XYZ to LMS cone responses."""
    xyz = np.asarray(xyz, dtype=np.float64)
    return np.einsum('...j,ij->...i', xyz, _XYZ_TO_LMS)


def lms_to_xyz(lms: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert LMS cone responses to CIE XYZ."""
    lms = np.asarray(lms, dtype=np.float64)
    return np.einsum('...j,ij->...i', lms, _LMS_TO_XYZ)


# =============================================================================
# Linear RGB ↔ OKLab
# =============================================================================

# Matrices from https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverse matrices
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_rgb_to_oklab(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    lms = np.einsum('...j,ij->...i', rgb, _M1)
    # Signed cube root keeps out-of-gamut input finite
    lms_cbrt = np.cbrt(lms)
    return np.einsum('...j,ij->...i', lms_cbrt, _M2)


def oklab_to_linear_rgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to linear RGB (unclipped; may leave [0, 1] when out of gamut).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with linear RGB values
    """
    lab = np.asarray(lab, dtype=np.float64)
    lms_cbrt = np.einsum('...j,ij->...i', lab, _M2_INV)
    lms = lms_cbrt ** 3
    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH (cylindrical coordinates).

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H), H in [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    # Tiny negative angles wrap to exactly 360.0 in float arithmetic
    H = np.where(H >= 360.0, 0.0, H)

    return np.stack([L, C, H], axis=-1)


def oklch_to_oklab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert OKLCH (H in degrees) to OKLab."""
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2])

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


def srgb_to_oklch(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to OKLCH.

    Full chain: sRGB → Linear RGB → OKLab → OKLCH
    """
    return oklab_to_oklch(linear_rgb_to_oklab(srgb_to_linear(srgb)))


def oklch_to_srgb(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to sRGB [0,1].

    Full chain: OKLCH → OKLab → Linear RGB → sRGB. Values are clipped to
    [0, 1]; use ``teul.core.scale.clamp_to_gamut`` to map chroma instead.
    """
    return linear_to_srgb(oklab_to_linear_rgb(oklch_to_oklab(lch)))


# =============================================================================
# Convenience: 8-bit RGB / hex endpoints
# =============================================================================


def rgb_to_xyz(color: ColorLike) -> Vector3:
    """Convert RGB to XYZ on the 0-100 scale."""
    x, y, z = linear_rgb_to_xyz(rgb_to_linear(color)) * 100.0
    return float(x), float(y), float(z)


def rgb_to_lab(color: ColorLike) -> Vector3:
    """
    Convert RGB to CIE LAB (L in [0, 100]).

    Uses the 7-digit sRGB to XYZ matrix, so CIEDE2000 values can differ in
    the last decimals from tools built on the 4-digit (0.4124, 0.3576, ...) one.
    """
    L, a, b = xyz_to_lab(linear_rgb_to_xyz(rgb_to_linear(color)) * 100.0)
    return float(L), float(a), float(b)


def lab_to_rgb(L: float, a: float, b: float) -> RGB:
    """Convert CIE LAB to RGB (clamped to the sRGB cube)."""
    xyz = lab_to_xyz(np.array([L, a, b], dtype=np.float64)) / 100.0
    return linear_to_rgb(xyz_to_linear_rgb(xyz))


def rgb_to_lms(color: ColorLike) -> Vector3:
    """Convert RGB to LMS cone responses."""
    l, m, s = xyz_to_lms(linear_rgb_to_xyz(rgb_to_linear(color)))
    return float(l), float(m), float(s)


def lms_to_rgb(l: float, m: float, s: float) -> RGB:
    """Convert LMS cone responses to RGB."""
    xyz = lms_to_xyz(np.array([l, m, s], dtype=np.float64))
    return linear_to_rgb(xyz_to_linear_rgb(xyz))


def rgb_to_oklab(color: ColorLike) -> Vector3:
    """Convert RGB to OKLab (L in [0, 1])."""
    L, a, b = linear_rgb_to_oklab(rgb_to_linear(color))
    return float(L), float(a), float(b)


def oklab_to_rgb(L: float, a: float, b: float) -> RGB:
    """Convert OKLab to RGB (clamped to the sRGB cube)."""
    return linear_to_rgb(oklab_to_linear_rgb(np.array([L, a, b], dtype=np.float64)))


def rgb_to_oklch(color: ColorLike) -> Vector3:
    """Convert RGB to OKLCH."""
    L, C, H = oklab_to_oklch(np.array(rgb_to_oklab(color)))
    return float(L), float(C), float(H)


def hex_to_oklch(hex_color: str) -> Vector3:
    """
    Convert hex color string to OKLCH values.

    Returns:
        Tuple of (L, C, H) with H in [0, 360). Achromatic colors report a
        near-zero chroma and an arbitrary hue.
    """
    return rgb_to_oklch(hex_to_rgb(hex_color))


def oklch_to_hex(L: float, C: float, H: float) -> str:
    """
    Convert OKLCH values to a lowercase hex color string.

    Channels outside sRGB are clipped, not gamut mapped.
    """
    lab = oklch_to_oklab(np.array([L, C, H], dtype=np.float64))
    return linear_to_rgb(oklab_to_linear_rgb(lab)).hex


# =============================================================================
# RGB ↔ HSL
# =============================================================================


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """Convert RGB to HSL with hue in degrees and s/l as rounded percentages."""
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    light = (mx + mn) / 2.0

    if mx == mn:
        hue = sat = 0.0
    else:
        d = mx - mn
        sat = d / (2.0 - mx - mn) if light > 0.5 else d / (mx + mn)
        if mx == rf:
            hue = (gf - bf) / d + (6.0 if gf < bf else 0.0)
        elif mx == gf:
            hue = (bf - rf) / d + 2.0
        else:
            hue = (rf - gf) / d + 4.0
        hue /= 6.0

    return HSL(
        h=round_half_up(hue * 360.0) % 360,
        s=round_half_up(sat * 100.0),
        l=round_half_up(light * 100.0),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL (degrees, percent, percent) to RGB."""
    hue = (h % 360.0) / 360.0
    sat = s / 100.0
    light = l / 100.0

    if sat == 0:
        channels = (light, light, light)
    else:
        q = light * (1 + sat) if light < 0.5 else light + sat - light * sat
        p = 2 * light - q
        channels = (
            _hue_to_channel(p, q, hue + 1 / 3),
            _hue_to_channel(p, q, hue),
            _hue_to_channel(p, q, hue - 1 / 3),
        )

    return RGB(*(_to_channel(c * 255.0) for c in channels))


def hex_to_hsl(hex_color: str) -> HSL:
    rgb = hex_to_rgb(hex_color)
    return rgb_to_hsl(rgb.r, rgb.g, rgb.b)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return hsl_to_rgb(h, s, l).hex


# =============================================================================
# CIE76 Distance
# =============================================================================


def color_distance_lab(lab1: Sequence[float], lab2: Sequence[float]) -> float:
    """
    Euclidean (CIE76) distance between two LAB colors.

    Cheap but not perceptually uniform; prefer
    ``teul.core.difference.delta_e_2000`` for judgements.
    """
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(lab1, lab2)))
