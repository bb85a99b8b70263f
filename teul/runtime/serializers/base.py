# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from teul.schema import ColorScale


class SerializerFormat(Enum):
    """Output format for serializers."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"


# Export order of scale roles
SCALE_ORDER: tuple[str, ...] = ("primary", "secondary", "tertiary", "accent", "neutral")

# Tailwind-style numbering for steps 1-12
_STEP_SUFFIXES: dict[int, str] = {
    1: "50",
    2: "100",
    3: "200",
    4: "300",
    5: "400",
    6: "500",
    7: "600",
    8: "700",
    9: "800",
    10: "900",
    11: "950",
    12: "1000",
}


def step_to_var_suffix(step: int) -> str:
    """Map a scale step to its variable suffix (1 -> "50", 12 -> "1000")."""
    return _STEP_SUFFIXES.get(step, str(step))


def ordered_scales(scales: Mapping[str, ColorScale]) -> list[tuple[str, ColorScale]]:
    """Scales in export order. Raises ValueError on an unknown role."""
    unknown = set(scales) - set(SCALE_ORDER)
    if unknown:
        raise ValueError(f"Unknown scale roles: {sorted(unknown)}; expected {SCALE_ORDER}")
    return [(role, scales[role]) for role in SCALE_ORDER if role in scales]


def scale_colors(scale: ColorScale) -> dict[str, str]:
    """Step suffix -> hex for one scale."""
    return {step_to_var_suffix(s.step): s.hex for s in scale.steps}
