# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Perceptual 12-step color scales.

Scales are built in OKLCH from a single seed color, following the
Radix-style step convention:

    1-2   app backgrounds
    3-5   component backgrounds (normal / hover / active)
    6-8   borders
    9-10  solid fills (step 9 is the seed itself)
    11-12 text

Lightness moves from the seed toward a per-mode target table, chroma is
the seed chroma times a per-step multiplier, hue is held constant. Every
step is gamut-clamped by reducing chroma, so every hex is displayable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from teul.schema import OKLCH, SCALE_LENGTH, ColorScale, ColorScalePair, ScaleMode, ScaleStep
from teul.core.colorspace import (
    hex_to_oklch,
    hex_to_rgb,
    oklab_to_linear_rgb,
    oklch_to_hex,
    oklch_to_oklab,
)

logger = logging.getLogger(__name__)


STEP_USAGE: tuple[str, ...] = (
    "app background",
    "subtle background",
    "UI element background",
    "hovered UI element background",
    "active / selected UI element background",
    "subtle borders and separators",
    "UI element border and focus rings",
    "hovered UI element border",
    "solid background",
    "hovered solid background",
    "low-contrast text",
    "high-contrast text",
)

_SEED_STEP = 9
_HOVER_STEP = 10

# Linear RGB slack accepted as in gamut (float noise at the cube faces)
_GAMUT_EPSILON = 1e-6


@dataclass(frozen=True)
class ScaleConfig:
    """Configuration for scale generation."""

    # OKLCH lightness targets for steps 1-8 (backgrounds and borders)
    light_background_targets: tuple[float, ...] = (
        0.993, 0.982, 0.955, 0.925, 0.895, 0.860, 0.810, 0.735,
    )
    dark_background_targets: tuple[float, ...] = (
        0.160, 0.190, 0.240, 0.280, 0.320, 0.370, 0.430, 0.520,
    )

    # OKLCH lightness targets for steps 11-12 (text)
    light_text_targets: tuple[float, float] = (0.50, 0.25)
    dark_text_targets: tuple[float, float] = (0.78, 0.94)

    # Seed chroma multiplier per step 1-12
    # Backgrounds and text are desaturated for legibility
    chroma_multipliers: tuple[float, ...] = (
        0.03, 0.08, 0.15, 0.25, 0.35, 0.45, 0.60, 0.80, 1.00, 1.05, 0.90, 0.70,
    )

    # Step 10 lightness offset from the seed
    # Darker in light mode, lighter in dark mode
    hover_offset: float = 0.04

    # Bounds on any generated lightness
    lightness_floor: float = 0.08
    lightness_ceiling: float = 0.995

    # Chroma convergence tolerance for gamut clamping
    gamut_tolerance: float = 0.001

    def __post_init__(self) -> None:
        if len(self.chroma_multipliers) != SCALE_LENGTH:
            raise ValueError(f"Need {SCALE_LENGTH} chroma multipliers, got {len(self.chroma_multipliers)}")
        for name in ("light_background_targets", "dark_background_targets"):
            if len(getattr(self, name)) != 8:
                raise ValueError(f"{name} must have 8 entries")


# =============================================================================
# Gamut
# =============================================================================


def is_in_gamut(l: float, c: float, h: float) -> bool:
    """True if the OKLCH color maps inside the sRGB cube."""
    linear = oklab_to_linear_rgb(oklch_to_oklab(np.array([l, c, h], dtype=np.float64)))
    return bool(np.all(linear >= -_GAMUT_EPSILON) and np.all(linear <= 1.0 + _GAMUT_EPSILON))


def clamp_to_gamut(l: float, c: float, h: float, tolerance: float = 0.001) -> OKLCH:
    """
    Bring an OKLCH color into sRGB by reducing chroma only.

    Lightness and hue are kept. In-gamut input is returned unchanged;
    otherwise the largest in-gamut chroma is found by binary search to
    within ``tolerance``.
    """
    h = float(h) % 360.0
    c = max(0.0, float(c))
    if is_in_gamut(l, c, h):
        return OKLCH(L=l, C=c, H=h)

    lo, hi = 0.0, c
    while hi - lo > tolerance:
        mid = (lo + hi) / 2.0
        if is_in_gamut(l, mid, h):
            lo = mid
        else:
            hi = mid

    logger.debug("Clamped chroma %.4f -> %.4f at L=%.3f H=%.1f", c, lo, l, h)
    return OKLCH(L=l, C=lo, H=h)


# =============================================================================
# Scale Generation
# =============================================================================


def _interpolation_fraction(step: int) -> float:
    """How far a step moves from the seed toward its target (0.5 near 9, 1.0 at the ends)."""
    return min(1.0, 0.5 + 0.125 * abs(step - _SEED_STEP))


def _target_lightness(step: int, seed_l: float, mode: ScaleMode, cfg: ScaleConfig) -> float:
    light = mode is ScaleMode.LIGHT

    if step == _HOVER_STEP:
        lightness = seed_l - cfg.hover_offset if light else seed_l + cfg.hover_offset
    else:
        if step <= 8:
            targets = cfg.light_background_targets if light else cfg.dark_background_targets
            target = targets[step - 1]
        else:
            targets = cfg.light_text_targets if light else cfg.dark_text_targets
            target = targets[step - 11]
        lightness = seed_l + (target - seed_l) * _interpolation_fraction(step)

    return min(cfg.lightness_ceiling, max(cfg.lightness_floor, lightness))


def generate_color_scale(
    base_hex: str,
    mode: Union[ScaleMode, str] = ScaleMode.LIGHT,
    name: str = "Color",
    config: Optional[ScaleConfig] = None,
) -> ColorScale:
    """
    Generate a 12-step scale from a seed color.

    Step 9 is the seed exactly. Other steps take their lightness from
    the mode's target tables and their chroma from the seed.

    Args:
        base_hex: Seed color
        mode: ScaleMode.LIGHT or ScaleMode.DARK
        name: Scale name, e.g. "Blue"
        config: Scale settings (uses defaults if None)

    Returns:
        ColorScale with 12 ordered steps
    """
    cfg = config or ScaleConfig()
    mode = ScaleMode(mode)

    seed_hex = hex_to_rgb(base_hex).hex
    seed_l, seed_c, seed_h = hex_to_oklch(seed_hex)

    steps = []
    for step in range(1, SCALE_LENGTH + 1):
        if step == _SEED_STEP:
            oklch = OKLCH(L=min(1.0, max(0.0, seed_l)), C=seed_c, H=seed_h)
            hex_value = seed_hex
        else:
            lightness = _target_lightness(step, seed_l, mode, cfg)
            chroma = seed_c * cfg.chroma_multipliers[step - 1]
            oklch = clamp_to_gamut(lightness, chroma, seed_h, cfg.gamut_tolerance)
            hex_value = oklch_to_hex(oklch.L, oklch.C, oklch.H)

        steps.append(ScaleStep(step=step, hex=hex_value, oklch=oklch, usage=STEP_USAGE[step - 1]))

    logger.debug("Generated %s scale %r from %s", mode.value, name, seed_hex)
    return ColorScale(name=name, base_hex=base_hex, mode=mode, steps=tuple(steps))


def generate_color_scales(base_hex: str, name: str = "Color") -> ColorScalePair:
    """Generate matching light and dark scales from one seed."""
    return ColorScalePair(
        light=generate_color_scale(base_hex, ScaleMode.LIGHT, name),
        dark=generate_color_scale(base_hex, ScaleMode.DARK, name),
    )
