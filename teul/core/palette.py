# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Palette accessibility analysis.

Scores how well the colors of a palette stay apart for viewers with each
vision condition. Two colors are distinguishable when the CIEDE2000
difference of their simulated versions reaches a threshold (10 by
default, "clearly different").

This layer composes the simulation engine and the difference metric:
it never reimplements either. Pairs are unordered and enumerated with
i < j, so a palette of n colors has n(n-1)/2 pairs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from teul.schema import (
    RGB,
    ColorPairAnalysis,
    CVDType,
    PaletteAccessibility,
    PaletteAccessibilityReport,
    SafeAlternative,
)
from teul.core.colorspace import ColorLike, as_rgb, rgb_to_lab, round_half_up
from teul.core.cvd import CVDTypeLike, color_distance, simulate_cvd, simulate_palette
from teul.core.difference import DELTA_E_THRESHOLDS, delta_e_2000, delta_e_2000_rgb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for palette analysis."""

    # Simulated CIEDE2000 at or above this counts as distinguishable
    # 2.3 = just noticeable
    # 10  = clearly different (default)
    # 25  = very distinct
    threshold: float = DELTA_E_THRESHOLDS["distinct"]

    # Severity used for anomaly conditions (dichromacy ignores it)
    severity: float = 1.0

    # RGB distance standing in for the WCAG 3:1 non-text contrast rule
    wcag_rgb_distance: float = 125.0

    # Candidates closer than this to the color they replace are skipped
    alternative_min_delta_e: float = DELTA_E_THRESHOLDS["just_noticeable"]

    # Worst non-normal score a palette needs to count as accessible
    minimum_score: int = 70


# Prevalence-based weights for the overall score (sum to 1.0)
CVD_PREVALENCE_WEIGHTS: dict[CVDType, float] = {
    CVDType.NORMAL: 0.30,
    CVDType.DEUTERANOPIA: 0.15,
    CVDType.DEUTERANOMALY: 0.25,
    CVDType.PROTANOPIA: 0.10,
    CVDType.PROTANOMALY: 0.10,
    CVDType.TRITANOPIA: 0.02,
    CVDType.TRITANOMALY: 0.02,
    CVDType.ACHROMATOPSIA: 0.06,
}

# Reference pairs that survive most conditions
SAFE_COLOR_COMBINATIONS: tuple[tuple[RGB, RGB], ...] = (
    (RGB(59, 130, 246), RGB(249, 115, 22)),  # Blue-Orange
    (RGB(168, 85, 247), RGB(234, 179, 8)),  # Purple-Yellow
    (RGB(0, 0, 0), RGB(255, 255, 255)),  # Black-White
    (RGB(59, 130, 246), RGB(234, 179, 8)),  # Blue-Yellow
)


# =============================================================================
# Distinguishability
# =============================================================================


def are_distinguishable(
    c1: ColorLike,
    c2: ColorLike,
    threshold: float = DELTA_E_THRESHOLDS["distinct"],
) -> bool:
    """True if CIEDE2000 between the colors reaches ``threshold``."""
    return delta_e_2000_rgb(c1, c2) >= threshold


def are_distinguishable_under_cvd(
    c1: ColorLike,
    c2: ColorLike,
    cvd_type: CVDTypeLike,
    threshold: float = DELTA_E_THRESHOLDS["distinct"],
) -> bool:
    """True if the simulated colors stay ``threshold`` apart."""
    cvd_type = CVDType(cvd_type)
    if cvd_type is CVDType.NORMAL:
        return are_distinguishable(c1, c2, threshold)
    return delta_e_2000_rgb(simulate_cvd(c1, cvd_type), simulate_cvd(c2, cvd_type)) >= threshold


def analyze_color_pair(
    c1: ColorLike,
    c2: ColorLike,
    cvd_type: CVDTypeLike,
    index1: int = 0,
    index2: int = 1,
    config: Optional[AnalysisConfig] = None,
) -> ColorPairAnalysis:
    """
    Analyze one pair of colors under a vision condition.

    Args:
        c1, c2: Colors to compare
        cvd_type: Condition to simulate
        index1, index2: Palette indices recorded in the result
        config: Analysis settings (uses defaults if None)
    """
    cfg = config or AnalysisConfig()
    cvd_type = CVDType(cvd_type)
    a = as_rgb(c1)
    b = as_rgb(c2)

    original = delta_e_2000_rgb(a, b)
    if cvd_type is CVDType.NORMAL:
        simulated = original
    else:
        simulated = delta_e_2000_rgb(
            simulate_cvd(a, cvd_type, cfg.severity),
            simulate_cvd(b, cvd_type, cfg.severity),
        )

    return ColorPairAnalysis(
        color1_index=index1,
        color2_index=index2,
        original_delta_e=original,
        simulated_delta_e=simulated,
        distinguishable=simulated >= cfg.threshold,
        wcag_compliant=color_distance(a, b) >= cfg.wcag_rgb_distance,
    )


# =============================================================================
# Palette Reports
# =============================================================================


def _recommendations(
    cvd_type: CVDType,
    confusing: Sequence[ColorPairAnalysis],
    score: int,
) -> tuple[str, ...]:
    notes = []
    if confusing:
        notes.append(
            f"{len(confusing)} color pair(s) may be confused by people with {cvd_type.value}"
        )
    if score < 70:
        notes.append("Consider using blue-orange or yellow-purple color combinations")
    if any(not p.wcag_compliant for p in confusing):
        notes.append("Some pairs do not meet WCAG non-text contrast requirements")
    if score == 100:
        notes.append("Excellent! All colors are distinguishable.")
    return tuple(notes)


def analyze_palette(
    palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
    config: Optional[AnalysisConfig] = None,
) -> PaletteAccessibilityReport:
    """
    Score every unordered pair of a palette under one condition.

    The palette is simulated once; each color's LAB is computed once.
    Score is the rounded percentage of distinguishable pairs, 100 for a
    palette with fewer than two colors.

    Args:
        palette: Colors in display order
        cvd_type: Condition to simulate
        config: Analysis settings (uses defaults if None)

    Returns:
        PaletteAccessibilityReport with confusing pairs in (i, j) order
    """
    cfg = config or AnalysisConfig()
    cvd_type = CVDType(cvd_type)
    colors = [as_rgb(c) for c in palette]

    original_labs = [rgb_to_lab(c) for c in colors]
    if cvd_type is CVDType.NORMAL:
        simulated_labs = original_labs
    else:
        simulated_labs = [rgb_to_lab(c) for c in simulate_palette(colors, cvd_type, cfg.severity)]

    total = 0
    confusing: list[ColorPairAnalysis] = []

    for i in range(len(colors)):
        for j in range(i + 1, len(colors)):
            total += 1
            original = delta_e_2000(original_labs[i], original_labs[j])
            simulated = (
                original
                if cvd_type is CVDType.NORMAL
                else delta_e_2000(simulated_labs[i], simulated_labs[j])
            )
            if simulated >= cfg.threshold:
                continue
            confusing.append(ColorPairAnalysis(
                color1_index=i,
                color2_index=j,
                original_delta_e=original,
                simulated_delta_e=simulated,
                distinguishable=False,
                wcag_compliant=color_distance(colors[i], colors[j]) >= cfg.wcag_rgb_distance,
            ))

    distinguishable = total - len(confusing)
    score = round_half_up(100.0 * distinguishable / total) if total > 0 else 100

    logger.debug(
        "Palette of %d colors under %s: %d/%d pairs distinguishable",
        len(colors), cvd_type.value, distinguishable, total,
    )

    return PaletteAccessibilityReport(
        cvd_type=cvd_type,
        total_pairs=total,
        distinguishable_pairs=distinguishable,
        confusing_pairs=tuple(confusing),
        score=score,
        recommendations=_recommendations(cvd_type, confusing, score),
    )


def analyze_palette_for_all_cvd(
    palette: Sequence[ColorLike],
    config: Optional[AnalysisConfig] = None,
) -> dict[CVDType, PaletteAccessibilityReport]:
    """Run ``analyze_palette`` for all eight conditions."""
    return {cvd_type: analyze_palette(palette, cvd_type, config) for cvd_type in CVDType}


def _overall_score(reports: dict[CVDType, PaletteAccessibilityReport]) -> int:
    weighted = 0.0
    total_weight = 0.0
    for cvd_type, weight in CVD_PREVALENCE_WEIGHTS.items():
        report = reports.get(cvd_type)
        if report is not None:
            weighted += report.score * weight
            total_weight += weight
    return round_half_up(weighted / total_weight)


def get_overall_accessibility_score(
    palette: Sequence[ColorLike],
    config: Optional[AnalysisConfig] = None,
) -> int:
    """Prevalence-weighted score (0-100) across all conditions."""
    return _overall_score(analyze_palette_for_all_cvd(palette, config))


def is_palette_accessible(
    palette: Sequence[ColorLike],
    config: Optional[AnalysisConfig] = None,
) -> PaletteAccessibility:
    """
    Check a palette against a minimum score.

    The verdict uses the lowest score among the non-normal conditions;
    the reported score is the weighted overall score. ``worst_type`` is
    None when every condition scores 100.
    """
    cfg = config or AnalysisConfig()
    reports = analyze_palette_for_all_cvd(palette, cfg)

    lowest = 100
    worst_type: Optional[CVDType] = None
    for cvd_type, report in reports.items():
        if cvd_type is not CVDType.NORMAL and report.score < lowest:
            lowest = report.score
            worst_type = cvd_type

    return PaletteAccessibility(
        accessible=lowest >= cfg.minimum_score,
        score=_overall_score(reports),
        worst_type=worst_type,
    )


# =============================================================================
# Safe Alternatives
# =============================================================================


def find_safe_alternative(
    problematic: ColorLike,
    existing: Sequence[ColorLike],
    reference_palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
    config: Optional[AnalysisConfig] = None,
) -> Optional[SafeAlternative]:
    """
    Find a replacement for a color that gets confused under a condition.

    Greedy max-min search: each reference candidate that differs visibly
    from ``problematic`` is scored by its smallest simulated CIEDE2000
    against the existing colors, and the highest-scoring candidate wins
    (first one on ties).

    Args:
        problematic: Color to replace
        existing: The other colors of the palette
        reference_palette: Candidate pool
        cvd_type: Condition to optimize for
        config: Analysis settings (uses defaults if None)

    Returns:
        SafeAlternative, or None if no candidate qualifies
    """
    cfg = config or AnalysisConfig()
    cvd_type = CVDType(cvd_type)
    original = as_rgb(problematic)

    existing_labs = [
        rgb_to_lab(c) for c in simulate_palette(existing, cvd_type, cfg.severity)
    ]

    best: Optional[RGB] = None
    best_score = 0.0

    for candidate in reference_palette:
        rgb = as_rgb(candidate)
        if delta_e_2000_rgb(rgb, original) < cfg.alternative_min_delta_e:
            continue

        candidate_lab = rgb_to_lab(simulate_cvd(rgb, cvd_type, cfg.severity))
        min_delta = min(
            (delta_e_2000(candidate_lab, lab) for lab in existing_labs),
            default=math.inf,
        )
        if min_delta > best_score:
            best_score = min_delta
            best = rgb

    if best is None:
        logger.debug("No safe alternative for %s under %s", original.hex, cvd_type.value)
        return None

    if math.isinf(best_score):
        reason = "No other colors to conflict with"
    else:
        reason = f"Delta E of {best_score:.1f} under {cvd_type.value} simulation"

    return SafeAlternative(
        original_color=original,
        suggested_color=best,
        improvement_score=best_score,
        reason=reason,
    )


def suggest_safe_alternatives(
    palette: Sequence[ColorLike],
    reference_palette: Sequence[ColorLike],
    cvd_type: CVDTypeLike,
    config: Optional[AnalysisConfig] = None,
) -> list[SafeAlternative]:
    """
    Suggest a replacement for every color involved in a confusing pair.

    Colors are visited in order of first appearance among the confusing
    pairs; colors with no qualifying candidate are left out.
    """
    colors = [as_rgb(c) for c in palette]
    report = analyze_palette(colors, cvd_type, config)

    indices: list[int] = []
    for pair in report.confusing_pairs:
        for index in (pair.color1_index, pair.color2_index):
            if index not in indices:
                indices.append(index)

    alternatives = []
    for index in indices:
        others = [c for i, c in enumerate(colors) if i != index]
        alternative = find_safe_alternative(
            colors[index], others, reference_palette, cvd_type, config
        )
        if alternative is not None:
            alternatives.append(alternative)
    return alternatives
