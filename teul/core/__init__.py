# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Color-science core for Teul.

Deterministic numeric operations on caller-supplied colors: space
conversion, vision-deficiency simulation, contrast and difference
metrics, palette scoring and scale generation. Nothing here holds state
except an optional, caller-owned ContrastCache.
"""

from teul.core.colorspace import hex_to_rgb, rgb_to_hex, hex_to_oklch, oklch_to_hex
from teul.core.contrast import ContrastCache, analyze_contrast, find_accessible_color, suggest_text_color
from teul.core.cvd import simulate_cvd, simulate_palette
from teul.core.difference import DELTA_E_THRESHOLDS, delta_e_2000_rgb
from teul.core.palette import (
    AnalysisConfig,
    analyze_palette,
    analyze_palette_for_all_cvd,
    is_palette_accessible,
    suggest_safe_alternatives,
)
from teul.core.scale import ScaleConfig, generate_color_scale, generate_color_scales

__all__ = [
    # Conversion
    "hex_to_rgb",
    "rgb_to_hex",
    "hex_to_oklch",
    "oklch_to_hex",
    # Simulation
    "simulate_cvd",
    "simulate_palette",
    # Metrics
    "analyze_contrast",
    "suggest_text_color",
    "find_accessible_color",
    "ContrastCache",
    "delta_e_2000_rgb",
    "DELTA_E_THRESHOLDS",
    # Palettes
    "AnalysisConfig",
    "analyze_palette",
    "analyze_palette_for_all_cvd",
    "is_palette_accessible",
    "suggest_safe_alternatives",
    # Scales
    "ScaleConfig",
    "generate_color_scale",
    "generate_color_scales",
]
