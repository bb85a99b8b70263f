# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Serializers for generated scales and palette reports.

Each serializer formats a result for a specific consumer (stylesheets,
Tailwind configs, JSON design tokens, review blocks).
All serializers carry values exactly -- no recomputation or rounding of hexes.
"""

from teul.runtime.serializers.base import SCALE_ORDER, SerializerFormat, step_to_var_suffix
from teul.runtime.serializers.report import BlockFormat, to_report_block
from teul.runtime.serializers.scales import to_css, to_json, to_tailwind

__all__ = [
    "SerializerFormat",
    "BlockFormat",
    "SCALE_ORDER",
    "step_to_var_suffix",
    "to_css",
    "to_tailwind",
    "to_json",
    "to_report_block",
]
