# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Palette report serializer.

Formats a PaletteAccessibilityReport as a block (XML, JSON, or Markdown)
for display in a host UI or inclusion in a design review.
"""

from __future__ import annotations

import json
from enum import Enum
from xml.sax.saxutils import escape, quoteattr

from teul.core.difference import get_delta_e_description
from teul.schema import PaletteAccessibilityReport


class BlockFormat(Enum):
    """Block format options."""

    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"


def to_report_block(
    report: PaletteAccessibilityReport,
    *,
    format: BlockFormat = BlockFormat.MARKDOWN,
    tag_name: str = "palette_accessibility",
) -> str:
    """Serialize a palette report as a block.

    Args:
        report: The report to serialize.
        format: Block format (XML, JSON, or MARKDOWN).
        tag_name: XML tag / JSON wrapper key.

    Returns:
        Formatted block string.

    Example (MARKDOWN)::

        ### Palette accessibility: protanopia

        **Score:** 67/100 (2 of 3 pairs distinguishable)

        | Pair | ΔE original | ΔE simulated | WCAG non-text |
        |------|-------------|--------------|---------------|
        | 1-2  | 86.6        | 5.2          | yes           |

        - 1 color pair(s) may be confused by people with protanopia
        - Consider using blue-orange or yellow-purple color combinations
    """
    if format == BlockFormat.XML:
        return _to_xml(report, tag_name)
    elif format == BlockFormat.JSON:
        return json.dumps({tag_name: report.to_dict()}, indent=2)
    else:
        return _to_markdown(report)


def _to_xml(report: PaletteAccessibilityReport, tag_name: str) -> str:
    """Generate XML block."""
    lines = [
        f'<{tag_name} cvd_type="{report.cvd_type.value}" score="{report.score}" '
        f'total_pairs="{report.total_pairs}" '
        f'distinguishable_pairs="{report.distinguishable_pairs}">'
    ]

    for pair in report.confusing_pairs:
        lines.append(
            f'  <confusing_pair i="{pair.color1_index}" j="{pair.color2_index}" '
            f'original_delta_e="{pair.original_delta_e:.2f}" '
            f'simulated_delta_e="{pair.simulated_delta_e:.2f}" '
            f'wcag_compliant="{str(pair.wcag_compliant).lower()}" '
            f'description={quoteattr(get_delta_e_description(pair.simulated_delta_e))}/>'
        )

    for note in report.recommendations:
        lines.append(f"  <recommendation>{escape(note)}</recommendation>")

    lines.append(f"</{tag_name}>")
    return "\n".join(lines)


def _to_markdown(report: PaletteAccessibilityReport) -> str:
    """Generate a readable markdown summary. Pair numbers are 1-based."""
    lines = [
        f"### Palette accessibility: {report.cvd_type.value}",
        "",
        f"**Score:** {report.score}/100 "
        f"({report.distinguishable_pairs} of {report.total_pairs} pairs distinguishable)",
    ]

    if report.confusing_pairs:
        lines += [
            "",
            "| Pair | ΔE original | ΔE simulated | WCAG non-text |",
            "|------|-------------|--------------|---------------|",
        ]
        for pair in report.confusing_pairs:
            lines.append(
                f"| {pair.color1_index + 1}-{pair.color2_index + 1} "
                f"| {pair.original_delta_e:.1f} "
                f"| {pair.simulated_delta_e:.1f} "
                f"| {'yes' if pair.wcag_compliant else 'no'} |"
            )

    if report.recommendations:
        lines.append("")
        lines += [f"- {note}" for note in report.recommendations]

    return "\n".join(lines)
