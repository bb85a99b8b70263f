# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""Tests for the runtime serializers (scale exports and report blocks)."""

import json
from datetime import datetime, timezone

import pytest

from teul.schema import RGB, CVDType
from teul.core.palette import analyze_palette
from teul.core.scale import generate_color_scale
from teul.runtime import (
    BlockFormat,
    SerializerFormat,
    step_to_var_suffix,
    to_css,
    to_json,
    to_report_block,
    to_tailwind,
)


FIXED_TIME = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def light_scales():
    return {
        "neutral": generate_color_scale("#808080", "light", "Gray"),
        "primary": generate_color_scale("#3b82f6", "light", "Blue"),
    }


@pytest.fixture
def dark_scales():
    return {
        "neutral": generate_color_scale("#808080", "dark", "Gray"),
        "primary": generate_color_scale("#3b82f6", "dark", "Blue"),
    }


@pytest.fixture
def clash_report():
    # Pure red and its BT.709 gray are identical without color vision
    return analyze_palette([RGB(255, 0, 0), RGB(54, 54, 54), RGB(0, 0, 0)], CVDType.ACHROMATOPSIA)


class TestStepSuffix:

    def test_mapping(self):
        assert step_to_var_suffix(1) == "50"
        assert step_to_var_suffix(6) == "500"
        assert step_to_var_suffix(9) == "800"
        assert step_to_var_suffix(12) == "1000"

    def test_unknown_step(self):
        assert step_to_var_suffix(13) == "13"


# ---------------------------------------------------------------------------
# to_css
# ---------------------------------------------------------------------------

class TestToCSS:

    def test_root_block(self, light_scales):
        css = to_css(light_scales)
        assert css.startswith("/* Teul Color System */\n/* Generated with Teul */\n")
        assert ":root {" in css
        assert "--teul-primary-800: #3b82f6;" in css
        assert css.endswith("}\n")

    def test_every_step_emitted(self, light_scales):
        css = to_css(light_scales)
        for role, scale in light_scales.items():
            for step in scale.steps:
                assert f"--teul-{role}-{step_to_var_suffix(step.step)}: {step.hex};" in css

    def test_role_order(self, light_scales):
        css = to_css(light_scales)
        assert css.index("/* Primary (Blue) */") < css.index("/* Neutral (Gray) */")

    def test_prefix_from_system_name(self, light_scales):
        css = to_css(light_scales, system_name="My Brand")
        assert css.startswith("/* My Brand Color System */")
        assert "--my-brand-primary-50:" in css

    def test_no_dark_block_by_default(self, light_scales):
        assert "Dark Mode" not in to_css(light_scales)

    def test_dark_block(self, light_scales, dark_scales):
        css = to_css(light_scales, dark_scales)
        assert '[data-theme="dark"],\n.dark {' in css
        dark_part = css.split("/* Dark Mode */")[1]
        assert f"--teul-primary-50: {dark_scales['primary'].step(1).hex};" in dark_part

    def test_unknown_role(self, light_scales):
        with pytest.raises(ValueError, match="Unknown scale roles"):
            to_css({**light_scales, "brand": light_scales["primary"]})


# ---------------------------------------------------------------------------
# to_tailwind
# ---------------------------------------------------------------------------

class TestToTailwind:

    def test_module_exports(self, light_scales):
        config = to_tailwind(light_scales)
        assert "module.exports = {" in config
        assert "'primary': {" in config
        assert "'800': '#3b82f6'" in config
        assert '"' not in config.split("module.exports")[1]

    def test_dark_colors_commented(self, light_scales, dark_scales):
        config = to_tailwind(light_scales, dark_scales)
        comment = config.split("/*")[1].split("*/")[0]
        dark = json.loads(comment)
        assert dark["primary"]["50"] == dark_scales["primary"].step(1).hex


# ---------------------------------------------------------------------------
# to_json
# ---------------------------------------------------------------------------

class TestToJSON:

    def test_structure(self, light_scales, dark_scales):
        data = json.loads(to_json(light_scales, dark_scales, "Brand", generated_at=FIXED_TIME))
        assert data["name"] == "Brand"
        assert data["generator"] == "Teul"
        assert data["generatedAt"] == "2026-01-15T12:00:00+00:00"
        assert list(data["light"]) == ["primary", "neutral"]
        assert data["light"]["primary"] == {
            "name": "Blue",
            "role": "primary",
            "colors": {step_to_var_suffix(s.step): s.hex for s in light_scales["primary"].steps},
        }
        assert data["dark"]["neutral"]["name"] == "Gray"

    def test_dark_omitted(self, light_scales):
        data = json.loads(to_json(light_scales, generated_at=FIXED_TIME))
        assert "dark" not in data

    def test_compact(self, light_scales):
        compact = to_json(light_scales, format=SerializerFormat.JSON, generated_at=FIXED_TIME)
        pretty = to_json(light_scales, generated_at=FIXED_TIME)
        assert "\n" not in compact
        assert json.loads(compact) == json.loads(pretty)

    def test_default_timestamp(self, light_scales):
        data = json.loads(to_json(light_scales))
        assert datetime.fromisoformat(data["generatedAt"]).tzinfo is not None


# ---------------------------------------------------------------------------
# to_report_block
# ---------------------------------------------------------------------------

class TestReportBlock:

    def test_markdown_default(self, clash_report):
        block = to_report_block(clash_report)
        assert block.startswith("### Palette accessibility: achromatopsia")
        assert "**Score:** 67/100 (2 of 3 pairs distinguishable)" in block
        assert "| 1-2 |" in block
        assert "- 1 color pair(s) may be confused by people with achromatopsia" in block

    def test_markdown_no_pairs(self):
        block = to_report_block(analyze_palette(["#000000", "#ffffff"], "protanopia"))
        assert "| Pair |" not in block
        assert "- Excellent! All colors are distinguishable." in block

    def test_json(self, clash_report):
        data = json.loads(to_report_block(clash_report, format=BlockFormat.JSON))
        assert data["palette_accessibility"] == clash_report.to_dict()

    def test_json_custom_tag(self, clash_report):
        data = json.loads(to_report_block(clash_report, format=BlockFormat.JSON, tag_name="review"))
        assert set(data) == {"review"}

    def test_xml(self, clash_report):
        block = to_report_block(clash_report, format=BlockFormat.XML)
        lines = block.split("\n")
        assert lines[0].startswith('<palette_accessibility cvd_type="achromatopsia" score="67"')
        assert lines[-1] == "</palette_accessibility>"
        assert '<confusing_pair i="0" j="1"' in block
        assert 'simulated_delta_e="0.00"' in block
        assert 'description="Imperceptible difference"' in block
        assert block.count("<recommendation>") == len(clash_report.recommendations)
