# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Export runtime for Teul.

Turns computed results into artifacts a host can hand to users:

1. Color systems -- CSS custom properties, Tailwind config, JSON tokens
2. Palette reports -- XML, JSON or Markdown blocks

The export layer never modifies computed values.
"""

from teul.runtime.serializers import (
    BlockFormat,
    SerializerFormat,
    step_to_var_suffix,
    to_css,
    to_json,
    to_report_block,
    to_tailwind,
)

__all__ = [
    "to_css",
    "to_tailwind",
    "to_json",
    "to_report_block",
    "step_to_var_suffix",
    "SerializerFormat",
    "BlockFormat",
]
