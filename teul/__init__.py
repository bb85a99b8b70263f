# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Teul -- Color-science core for accessible palette design.

Converts colors between sRGB, CIE LAB, LMS and OKLCH, simulates color
vision deficiencies, measures WCAG 2.1 / APCA contrast and CIEDE2000
difference, scores palettes for accessibility and generates 12-step
perceptual color scales.

Quick start::

    from teul import analyze_contrast, analyze_palette, generate_color_scales

    analyze_contrast("#1e293b", "#ffffff").wcag.level   # WCAGLevel.AAA
    analyze_palette(["#ff0000", "#00ff00"], "deuteranopia").score
    generate_color_scales("#3b82f6", name="Blue").light.hexes
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from teul.core import (  # noqa: E402
    AnalysisConfig,
    ContrastCache,
    ScaleConfig,
    analyze_contrast,
    analyze_palette,
    analyze_palette_for_all_cvd,
    find_accessible_color,
    generate_color_scale,
    generate_color_scales,
    hex_to_rgb,
    is_palette_accessible,
    simulate_cvd,
    suggest_safe_alternatives,
    suggest_text_color,
)
from teul.schema import (  # noqa: E402
    RGB,
    OKLCH,
    ColorScale,
    ContrastResult,
    CVDType,
    PaletteAccessibilityReport,
)

__all__ = [
    # Core API
    "hex_to_rgb",
    "simulate_cvd",
    "analyze_contrast",
    "suggest_text_color",
    "find_accessible_color",
    "ContrastCache",
    "analyze_palette",
    "analyze_palette_for_all_cvd",
    "is_palette_accessible",
    "suggest_safe_alternatives",
    "generate_color_scale",
    "generate_color_scales",
    # Config
    "AnalysisConfig",
    "ScaleConfig",
    # Types (commonly needed)
    "RGB",
    "OKLCH",
    "CVDType",
    "ContrastResult",
    "PaletteAccessibilityReport",
    "ColorScale",
    # Version
    "__version__",
]
