# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Schema definitions for the color-science core.

All types in this module are immutable (frozen dataclasses).
Every record is a transient value: built from a caller-supplied color,
handed to the next stage, and discarded.
"""

from teul.schema.color_types import (
    SCALE_LENGTH,
    AffectedCone,
    APCARating,
    APCAResult,
    ColorPairAnalysis,
    ColorScale,
    ColorScalePair,
    ContrastResult,
    CVDInfo,
    CVDType,
    FontSizeRecommendation,
    FontWeight,
    HSL,
    OKLCH,
    PaletteAccessibility,
    PaletteAccessibilityReport,
    RGB,
    SafeAlternative,
    ScaleMode,
    ScaleStep,
    TextColorSuggestion,
    WCAGLevel,
    WCAGRating,
    WCAGResult,
)

__all__ = [
    # Color values
    "RGB",
    "HSL",
    "OKLCH",
    # Vision conditions
    "CVDType",
    "CVDInfo",
    "AffectedCone",
    # Contrast
    "WCAGLevel",
    "WCAGRating",
    "WCAGResult",
    "APCARating",
    "APCAResult",
    "ContrastResult",
    "FontWeight",
    "FontSizeRecommendation",
    "TextColorSuggestion",
    # Palette analysis
    "ColorPairAnalysis",
    "PaletteAccessibilityReport",
    "PaletteAccessibility",
    "SafeAlternative",
    # Scales
    "SCALE_LENGTH",
    "ScaleMode",
    "ScaleStep",
    "ColorScale",
    "ColorScalePair",
]
