# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Color system export.

Formats a set of generated scales, keyed by role (primary, secondary,
tertiary, accent, neutral), as CSS custom properties, a Tailwind config
or JSON. Exports carry the scale hexes exactly; nothing is recomputed.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Mapping, Optional

from teul.runtime.serializers.base import (
    SerializerFormat,
    ordered_scales,
    scale_colors,
    step_to_var_suffix,
)
from teul.schema import ColorScale

ScaleSet = Mapping[str, ColorScale]


def _css_prefix(system_name: str) -> str:
    return re.sub(r"\s+", "-", system_name.lower())


def _css_block(scales: ScaleSet, prefix: str) -> list[str]:
    lines = []
    for role, scale in ordered_scales(scales):
        lines.append(f"  /* {role.capitalize()} ({scale.name}) */")
        for step in scale.steps:
            lines.append(f"  --{prefix}-{role}-{step_to_var_suffix(step.step)}: {step.hex};")
        lines.append("")
    return lines


def to_css(
    scales: ScaleSet,
    dark_scales: Optional[ScaleSet] = None,
    system_name: str = "Teul",
) -> str:
    """Serialize scales as CSS custom properties.

    Light scales go in ``:root``; dark scales, if given, in a block that
    applies under ``[data-theme="dark"]`` or ``.dark``.

    Example::

        /* Brand Color System */
        /* Generated with Teul */

        :root {
          /* Primary (Blue) */
          --brand-primary-50: #fbfdff;
          ...
        }
    """
    prefix = _css_prefix(system_name)
    lines = [
        f"/* {system_name} Color System */",
        "/* Generated with Teul */",
        "",
        ":root {",
        *_css_block(scales, prefix),
        "}",
    ]

    if dark_scales is not None:
        lines += [
            "",
            "/* Dark Mode */",
            '[data-theme="dark"],',
            ".dark {",
            *_css_block(dark_scales, prefix),
            "}",
        ]

    return "\n".join(lines) + "\n"


def _color_objects(scales: ScaleSet) -> dict[str, dict[str, str]]:
    return {role: scale_colors(scale) for role, scale in ordered_scales(scales)}


def to_tailwind(
    scales: ScaleSet,
    dark_scales: Optional[ScaleSet] = None,
    system_name: str = "Teul",
) -> str:
    """Serialize scales as a Tailwind ``module.exports`` config.

    Dark colors are appended as a commented JSON object for use with
    ``darkMode: 'class'``.
    """
    colors = json.dumps(_color_objects(scales), indent=8).replace('"', "'")
    colors = "\n".join(
        line if i == 0 else "      " + line
        for i, line in enumerate(colors.split("\n"))
    )

    lines = [
        f"// {system_name} - Tailwind CSS Config",
        "// Generated with Teul",
        "",
        "module.exports = {",
        "  theme: {",
        "    extend: {",
        f"      colors: {colors},",
        "    },",
        "  },",
        "};",
    ]

    if dark_scales is not None:
        lines += [
            "",
            "// Dark mode colors (use with darkMode: 'class')",
            "// Add to your CSS or use CSS variables approach:",
            "/*",
            json.dumps(_color_objects(dark_scales), indent=2),
            "*/",
        ]

    return "\n".join(lines) + "\n"


def _scale_objects(scales: ScaleSet) -> dict[str, dict]:
    return {
        role: {"name": scale.name, "role": role, "colors": scale_colors(scale)}
        for role, scale in ordered_scales(scales)
    }


def to_json(
    scales: ScaleSet,
    dark_scales: Optional[ScaleSet] = None,
    system_name: str = "Teul",
    *,
    format: SerializerFormat = SerializerFormat.JSON_PRETTY,
    generated_at: Optional[datetime] = None,
) -> str:
    """Serialize scales as a JSON document.

    Args:
        scales: Light scales by role.
        dark_scales: Dark scales by role, omitted from output if None.
        system_name: Name of the color system.
        format: JSON (compact) or JSON_PRETTY.
        generated_at: Timestamp to record (defaults to now, UTC).

    Returns:
        JSON string with ``name``, ``generatedAt``, ``generator``,
        ``light`` and optionally ``dark``.
    """
    timestamp = generated_at or datetime.now(timezone.utc)
    data = {
        "name": system_name,
        "generatedAt": timestamp.isoformat(),
        "generator": "Teul",
        "light": _scale_objects(scales),
    }
    if dark_scales is not None:
        data["dark"] = _scale_objects(dark_scales)

    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))
