# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Color vision deficiency (CVD) simulation.

Algorithms:
- Viénot 1999: dichromacy (protanopia, deuteranopia, tritanopia), one
  fixed matrix per type applied in linear RGB. Preserves neutrals.
- Machado 2009: anomalous trichromacy, interpolated between identity and
  the full-severity matrix: M(t) = I·(1 - t) + M_full·t, t in [0, 1].
- Achromatopsia: ITU-R BT.709 luma of the 8-bit channels.

References:
- Brettel, Viénot & Mollon 1997, "Computerized simulation of color
  appearance for dichromats"
- Viénot, Brettel & Mollon 1999, "Digital video colourmaps for checking the
  legibility of displays by dichromats"
- Machado, Oliveira & Fernandes 2009, "A physiologically-based model for
  simulation of color vision deficiency"

All matrix simulations decode gamma, multiply, re-encode and clamp to
[0, 255]. Palette operations run as one vectorized pass.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from teul.schema import RGB, AffectedCone, CVDInfo, CVDType
from teul.core.colorspace import (
    ColorLike,
    as_rgb,
    hex_to_rgb,
    linear_to_uint8,
    rgb_to_array,
    uint8_to_linear,
)

logger = logging.getLogger(__name__)

CVDTypeLike = Union[CVDType, str]

# Default RGB-space distance below which two colors count as confused
DEFAULT_CONFUSION_THRESHOLD = 30.0


# =============================================================================
# Condition Metadata
# =============================================================================

CVD_INFO: dict[CVDType, CVDInfo] = {
    CVDType.NORMAL: CVDInfo(
        type=CVDType.NORMAL,
        name="Normal Vision",
        description="Full color vision with all three cone types functioning normally.",
        prevalence="~92% of population",
        affected_cone=AffectedCone.NONE,
    ),
    CVDType.PROTANOPIA: CVDInfo(
        type=CVDType.PROTANOPIA,
        name="Protanopia",
        description="Complete absence of L-cones (red receptors). Cannot perceive red light.",
        prevalence="~1% of males",
        affected_cone=AffectedCone.L,
    ),
    CVDType.PROTANOMALY: CVDInfo(
        type=CVDType.PROTANOMALY,
        name="Protanomaly",
        description="Reduced sensitivity of L-cones. Red appears weaker and shifted.",
        prevalence="~1% of males",
        affected_cone=AffectedCone.L,
    ),
    CVDType.DEUTERANOPIA: CVDInfo(
        type=CVDType.DEUTERANOPIA,
        name="Deuteranopia",
        description=(
            "Complete absence of M-cones (green receptors). "
            "Cannot distinguish red from green."
        ),
        prevalence="~1% of males",
        affected_cone=AffectedCone.M,
    ),
    CVDType.DEUTERANOMALY: CVDInfo(
        type=CVDType.DEUTERANOMALY,
        name="Deuteranomaly",
        description="Reduced sensitivity of M-cones. Most common form of color blindness.",
        prevalence="~5% of males",
        affected_cone=AffectedCone.M,
    ),
    CVDType.TRITANOPIA: CVDInfo(
        type=CVDType.TRITANOPIA,
        name="Tritanopia",
        description="Complete absence of S-cones (blue receptors). Very rare.",
        prevalence="~0.01% of population",
        affected_cone=AffectedCone.S,
    ),
    CVDType.TRITANOMALY: CVDInfo(
        type=CVDType.TRITANOMALY,
        name="Tritanomaly",
        description="Reduced sensitivity of S-cones. Blue appears weaker.",
        prevalence="~0.01% of population",
        affected_cone=AffectedCone.S,
    ),
    CVDType.ACHROMATOPSIA: CVDInfo(
        type=CVDType.ACHROMATOPSIA,
        name="Achromatopsia",
        description="Complete color blindness. Only perceives luminance (grayscale).",
        prevalence="~0.003% of population",
        affected_cone=AffectedCone.ALL,
    ),
}


# =============================================================================
# Simulation Matrices (linear RGB)
# =============================================================================

_IDENTITY = np.eye(3, dtype=np.float64)

# Viénot 1999, full dichromacy
_VIENOT_MATRICES: dict[CVDType, NDArray[np.float64]] = {
    CVDType.PROTANOPIA: np.array([
        [0.56667, 0.43333, 0.0],
        [0.55833, 0.44167, 0.0],
        [0.0, 0.24167, 0.75833],
    ], dtype=np.float64),
    CVDType.DEUTERANOPIA: np.array([
        [0.625, 0.375, 0.0],
        [0.7, 0.3, 0.0],
        [0.0, 0.3, 0.7],
    ], dtype=np.float64),
    CVDType.TRITANOPIA: np.array([
        [0.95, 0.05, 0.0],
        [0.0, 0.43333, 0.56667],
        [0.0, 0.475, 0.525],
    ], dtype=np.float64),
}

# Machado 2009 at severity 1.0
_MACHADO_MATRICES: dict[CVDType, NDArray[np.float64]] = {
    CVDType.PROTANOMALY: np.array([
        [0.152286, 1.052583, -0.204868],
        [0.114503, 0.786281, 0.099216],
        [-0.003882, -0.048116, 1.051998],
    ], dtype=np.float64),
    CVDType.DEUTERANOMALY: np.array([
        [0.367322, 0.860646, -0.227968],
        [0.280085, 0.672501, 0.047413],
        [-0.01182, 0.04294, 0.968881],
    ], dtype=np.float64),
    CVDType.TRITANOMALY: np.array([
        [1.255528, -0.076749, -0.178779],
        [-0.078411, 0.930809, 0.147602],
        [0.004733, 0.691367, 0.3039],
    ], dtype=np.float64),
}

# ITU-R BT.709 luma
_LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def clamp_severity(severity: float) -> float:
    """Clamp a severity to [0, 1]. NaN is treated as 0."""
    if math.isnan(severity):
        return 0.0
    return max(0.0, min(1.0, float(severity)))


def get_simulation_matrix(cvd_type: CVDTypeLike, severity: float = 1.0) -> NDArray[np.float64]:
    """
    Get the linear-RGB simulation matrix for a condition.

    Dichromacy types always return their full matrix regardless of
    severity. Anomaly types interpolate from identity with the clamped
    severity. Normal vision and achromatopsia (which is not a linear
    transform of linear RGB) return identity.

    Returns:
        A fresh (3, 3) array; callers may modify it.
    """
    cvd_type = CVDType(cvd_type)

    if cvd_type.is_dichromacy:
        return _VIENOT_MATRICES[cvd_type].copy()

    if cvd_type.is_anomaly:
        t = clamp_severity(severity)
        return _IDENTITY * (1.0 - t) + _MACHADO_MATRICES[cvd_type] * t

    return _IDENTITY.copy()


# =============================================================================
# Core Simulation (vectorized)
# =============================================================================


def _apply_matrix(pixels: NDArray[np.uint8], matrix: NDArray[np.float64]) -> NDArray[np.int64]:
    """Apply a linear-RGB matrix to (..., 3) 8-bit pixels."""
    linear = uint8_to_linear(pixels)
    simulated = np.einsum('...j,ij->...i', linear, matrix)
    return linear_to_uint8(simulated)


def _achromatopsia(pixels: NDArray[np.uint8]) -> NDArray[np.int64]:
    """Replace every channel with the rounded BT.709 luma of the 8-bit values."""
    pixels = np.asarray(pixels, dtype=np.float64)
    r, g, b = _LUMA_WEIGHTS
    luma = r * pixels[..., 0] + g * pixels[..., 1] + b * pixels[..., 2]
    gray = np.clip(np.floor(luma + 0.5), 0, 255).astype(np.int64)
    return np.repeat(gray[..., np.newaxis], 3, axis=-1)


def simulate_array(
    pixels: NDArray[np.uint8],
    cvd_type: CVDTypeLike,
    severity: float = 1.0,
) -> NDArray[np.int64]:
    """
    Simulate a condition over an array of 8-bit colors.

    Args:
        pixels: Array of shape (..., 3) with sRGB values [0, 255]
        cvd_type: Condition to simulate
        severity: 0-1, only used by anomaly types

    Returns:
        Array of the same shape with simulated 8-bit values
    """
    cvd_type = CVDType(cvd_type)
    pixels = np.asarray(pixels)

    if cvd_type is CVDType.NORMAL:
        return pixels.astype(np.int64, copy=True)
    if cvd_type is CVDType.ACHROMATOPSIA:
        return _achromatopsia(pixels)

    return _apply_matrix(pixels, get_simulation_matrix(cvd_type, severity))


def _to_rgb(values: NDArray[np.int64]) -> RGB:
    r, g, b = values
    return RGB(int(r), int(g), int(b))


def simulate_dichromacy(color: ColorLike, cvd_type: CVDTypeLike) -> RGB:
    """Simulate protanopia, deuteranopia or tritanopia (Viénot)."""
    cvd_type = CVDType(cvd_type)
    if not cvd_type.is_dichromacy:
        raise ValueError(f"{cvd_type.value} is not a dichromacy")
    pixels = np.array(as_rgb(color).to_tuple())
    return _to_rgb(_apply_matrix(pixels, _VIENOT_MATRICES[cvd_type]))


def simulate_protanopia(color: ColorLike) -> RGB:
    return simulate_dichromacy(color, CVDType.PROTANOPIA)


def simulate_deuteranopia(color: ColorLike) -> RGB:
    return simulate_dichromacy(color, CVDType.DEUTERANOPIA)


def simulate_tritanopia(color: ColorLike) -> RGB:
    return simulate_dichromacy(color, CVDType.TRITANOPIA)


def simulate_anomaly(color: ColorLike, cvd_type: CVDTypeLike, severity: float = 1.0) -> RGB:
    """
    Simulate anomalous trichromacy (Machado) at a severity.

    At severity 0 the color is returned unchanged (within rounding); at 1
    the full-severity matrix applies. Out-of-range severities are clamped.
    Passing a dichromacy type uses the matching anomaly matrix at full
    severity; ``severity`` is ignored for it.
    """
    cvd_type = CVDType(cvd_type)
    if cvd_type.is_dichromacy:
        severity = 1.0
    anomaly = {
        CVDType.PROTANOPIA: CVDType.PROTANOMALY,
        CVDType.DEUTERANOPIA: CVDType.DEUTERANOMALY,
        CVDType.TRITANOPIA: CVDType.TRITANOMALY,
    }.get(cvd_type, cvd_type)
    if not anomaly.is_anomaly:
        return as_rgb(color)
    pixels = np.array(as_rgb(color).to_tuple())
    return _to_rgb(_apply_matrix(pixels, get_simulation_matrix(anomaly, severity)))


def simulate_achromatopsia(color: ColorLike) -> RGB:
    """Simulate achromatopsia. The result always has R == G == B."""
    return _to_rgb(_achromatopsia(np.array(as_rgb(color).to_tuple())))


def simulate_cvd(color: ColorLike, cvd_type: CVDTypeLike, severity: float = 1.0) -> RGB:
    """
    Simulate how a color appears under a vision condition.

    Args:
        color: RGB, hex string or 3-sequence
        cvd_type: Condition (enum member or its string tag)
        severity: 0-1, default 1.0. Only affects anomaly types.

    Returns:
        The simulated color. Normal vision returns an equal copy.
    """
    cvd_type = CVDType(cvd_type)
    rgb = as_rgb(color)

    if cvd_type is CVDType.NORMAL:
        return RGB(rgb.r, rgb.g, rgb.b)
    if cvd_type is CVDType.ACHROMATOPSIA:
        return simulate_achromatopsia(rgb)
    if cvd_type.is_dichromacy:
        return simulate_dichromacy(rgb, cvd_type)
    return simulate_anomaly(rgb, cvd_type, severity)


def simulate_cvd_hex(hex_color: str, cvd_type: CVDTypeLike, severity: float = 1.0) -> str:
    """Simulate a condition on a hex color, returning hex."""
    return simulate_cvd(hex_to_rgb(hex_color), cvd_type, severity).hex


def simulate_palette(
    palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
    severity: float = 1.0,
) -> list[RGB]:
    """Simulate a condition on every color of a palette, preserving order."""
    if len(palette) == 0:
        return []
    simulated = simulate_array(rgb_to_array(palette), cvd_type, severity)
    logger.debug("Simulated %d colors for %s", len(palette), CVDType(cvd_type).value)
    return [_to_rgb(row) for row in simulated]


def get_all_simulations(color: ColorLike) -> dict[CVDType, RGB]:
    """Simulate a color under every condition at full severity."""
    rgb = as_rgb(color)
    return {cvd_type: simulate_cvd(rgb, cvd_type) for cvd_type in CVDType}


def get_all_simulations_hex(hex_color: str) -> dict[CVDType, str]:
    """Hex form of ``get_all_simulations``."""
    return {
        cvd_type: simulated.hex
        for cvd_type, simulated in get_all_simulations(hex_to_rgb(hex_color)).items()
    }


# =============================================================================
# Confusion Detection (RGB distance)
# =============================================================================


def color_distance(c1: ColorLike, c2: ColorLike) -> float:
    """Euclidean distance between two colors in 8-bit RGB space."""
    a = as_rgb(c1)
    b = as_rgb(c2)
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def would_confuse(
    c1: ColorLike,
    c2: ColorLike,
    cvd_type: CVDTypeLike,
    threshold: float = DEFAULT_CONFUSION_THRESHOLD,
) -> bool:
    """True if the simulated colors are closer than ``threshold`` in RGB."""
    return color_distance(simulate_cvd(c1, cvd_type), simulate_cvd(c2, cvd_type)) < threshold


# Checked by would_confuse_any
_COMMON_CONDITIONS = (
    CVDType.PROTANOPIA,
    CVDType.DEUTERANOPIA,
    CVDType.TRITANOPIA,
    CVDType.ACHROMATOPSIA,
)


def would_confuse_any(
    c1: ColorLike,
    c2: ColorLike,
    threshold: float = DEFAULT_CONFUSION_THRESHOLD,
) -> list[CVDType]:
    """List the dichromacy/achromatopsia conditions under which two colors are confused."""
    return [t for t in _COMMON_CONDITIONS if would_confuse(c1, c2, t, threshold)]


def find_confusing_pairs(
    palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
    threshold: float = DEFAULT_CONFUSION_THRESHOLD,
) -> list[tuple[int, int]]:
    """
    Find every unordered pair (i, j), i < j, confused under a condition.

    Simulates the palette once, then compares all pairs.
    """
    simulated = simulate_palette(palette, cvd_type)
    pairs = []
    for i in range(len(simulated)):
        for j in range(i + 1, len(simulated)):
            if color_distance(simulated[i], simulated[j]) < threshold:
                pairs.append((i, j))
    return pairs


# =============================================================================
# Safe Color Suggestions
# =============================================================================

# Colors that hold up under most conditions
SAFE_COLORS: dict[str, RGB] = {
    "blue": RGB(59, 130, 246),  # Preserved in red-green CVD
    "orange": RGB(249, 115, 22),  # Pairs well with blue
    "yellow": RGB(234, 179, 8),  # Distinct from blue
    "purple": RGB(168, 85, 247),  # Works but test carefully
    "black": RGB(0, 0, 0),
    "white": RGB(255, 255, 255),
}


def is_color_safe(
    color: ColorLike,
    reference_colors: Sequence[ColorLike],
    threshold: float = DEFAULT_CONFUSION_THRESHOLD,
) -> bool:
    """True if the color is not confused with any reference under any dichromacy."""
    for reference in reference_colors:
        for cvd_type in (CVDType.PROTANOPIA, CVDType.DEUTERANOPIA, CVDType.TRITANOPIA):
            if would_confuse(color, reference, cvd_type, threshold):
                return False
    return True


def suggest_safe_color(
    original: ColorLike,
    palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
) -> Optional[RGB]:
    """
    Pick the palette color most distinguishable from ``original`` under a condition.

    Candidates within RGB distance 10 of the original are skipped. Returns
    None if no candidate is left.
    """
    original_sim = simulate_cvd(original, cvd_type)
    best: Optional[RGB] = None
    max_distance = 0.0

    for candidate in palette:
        rgb = as_rgb(candidate)
        if color_distance(rgb, original) < 10:
            continue
        distance = color_distance(original_sim, simulate_cvd(rgb, cvd_type))
        if distance > max_distance:
            max_distance = distance
            best = rgb

    return best
