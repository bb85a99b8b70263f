# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
CIEDE2000 color difference.

Reference: Sharma, Wu & Dalal (2005), "The CIEDE2000 Color-Difference
Formula: Implementation Notes, Supplementary Test Data, and Mathematical
Observations". Parametric weights kL = kC = kH = 1.

Interpretation of Delta E:
- 0-1: imperceptible
- 1-2.3: perceptible through close observation
- 2.3-10: perceptible at a glance
- 10+: clearly different colors
"""

from __future__ import annotations

import math
from typing import Sequence

from teul.core.colorspace import ColorLike, hex_to_rgb, rgb_to_lab


DELTA_E_THRESHOLDS: dict[str, float] = {
    "imperceptible": 1.0,
    "just_noticeable": 2.3,  # JND
    "noticeable": 5.0,
    "distinct": 10.0,
    "very_distinct": 25.0,
}

_POW25_7 = 25.0 ** 7


def _hue_degrees(b: float, a_prime: float) -> float:
    h = math.degrees(math.atan2(b, a_prime))
    return h + 360.0 if h < 0 else h


def delta_e_2000(lab1: Sequence[float], lab2: Sequence[float]) -> float:
    """
    CIEDE2000 difference between two CIE LAB colors.

    Symmetric, non-negative, and exactly 0 for identical inputs.
    """
    L1, a1, b1 = lab1
    L2, a2, b2 = lab2

    k_l = k_c = k_h = 1.0

    # Chroma-dependent a* rescaling
    c1 = math.hypot(a1, b1)
    c2 = math.hypot(a2, b2)
    c_bar7 = ((c1 + c2) / 2.0) ** 7
    g = 0.5 * (1.0 - math.sqrt(c_bar7 / (c_bar7 + _POW25_7)))

    a1_p = a1 * (1.0 + g)
    a2_p = a2 * (1.0 + g)
    c1_p = math.hypot(a1_p, b1)
    c2_p = math.hypot(a2_p, b2)
    h1_p = _hue_degrees(b1, a1_p)
    h2_p = _hue_degrees(b2, a2_p)

    # Differences
    dL_p = L2 - L1
    dC_p = c2_p - c1_p

    chroma_product = c1_p * c2_p
    dh = h2_p - h1_p
    if chroma_product == 0:
        dh_p = 0.0
    elif abs(dh) <= 180.0:
        dh_p = dh
    elif dh > 180.0:
        dh_p = dh - 360.0
    else:
        dh_p = dh + 360.0
    dH_p = 2.0 * math.sqrt(chroma_product) * math.sin(math.radians(dh_p) / 2.0)

    # Means
    L_bar = (L1 + L2) / 2.0
    C_bar_p = (c1_p + c2_p) / 2.0

    if chroma_product == 0:
        h_bar_p = h1_p + h2_p
    elif abs(h1_p - h2_p) <= 180.0:
        h_bar_p = (h1_p + h2_p) / 2.0
    elif h1_p + h2_p < 360.0:
        h_bar_p = (h1_p + h2_p + 360.0) / 2.0
    else:
        h_bar_p = (h1_p + h2_p - 360.0) / 2.0

    t = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    # Weighting functions
    l_offset = (L_bar - 50.0) ** 2
    s_l = 1.0 + (0.015 * l_offset) / math.sqrt(20.0 + l_offset)
    s_c = 1.0 + 0.045 * C_bar_p
    s_h = 1.0 + 0.015 * C_bar_p * t

    # Rotation term
    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2))
    c_bar_p7 = C_bar_p ** 7
    r_c = 2.0 * math.sqrt(c_bar_p7 / (c_bar_p7 + _POW25_7))
    r_t = -r_c * math.sin(math.radians(2.0 * d_theta))

    l_term = dL_p / (k_l * s_l)
    c_term = dC_p / (k_c * s_c)
    h_term = dH_p / (k_h * s_h)

    return math.sqrt(max(0.0, l_term ** 2 + c_term ** 2 + h_term ** 2 + r_t * c_term * h_term))


def delta_e_2000_rgb(c1: ColorLike, c2: ColorLike) -> float:
    """CIEDE2000 between two 8-bit sRGB colors."""
    return delta_e_2000(rgb_to_lab(c1), rgb_to_lab(c2))


def delta_e_2000_hex(hex1: str, hex2: str) -> float:
    return delta_e_2000_rgb(hex_to_rgb(hex1), hex_to_rgb(hex2))


def get_delta_e_description(delta_e: float) -> str:
    """Plain-language band for a Delta E value."""
    if delta_e < DELTA_E_THRESHOLDS["imperceptible"]:
        return "Imperceptible difference"
    if delta_e < DELTA_E_THRESHOLDS["just_noticeable"]:
        return "Just noticeable difference"
    if delta_e < DELTA_E_THRESHOLDS["noticeable"]:
        return "Noticeable difference"
    if delta_e < DELTA_E_THRESHOLDS["distinct"]:
        return "Clearly different"
    if delta_e < DELTA_E_THRESHOLDS["very_distinct"]:
        return "Very distinct colors"
    return "Completely different colors"
