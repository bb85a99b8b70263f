# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""Tests for schema types and serialization roundtrips."""

import pytest

from teul.schema import (
    OKLCH,
    RGB,
    SCALE_LENGTH,
    AffectedCone,
    ColorPairAnalysis,
    ColorScale,
    CVDType,
    PaletteAccessibility,
    PaletteAccessibilityReport,
    SafeAlternative,
    ScaleMode,
    ScaleStep,
    WCAGLevel,
    WCAGResult,
)


def _step(i, hex_value="#808080"):
    return ScaleStep(step=i, hex=hex_value, oklch=OKLCH(L=0.6, C=0.0, H=0.0), usage=f"step {i}")


def _pair(i=0, j=1, distinguishable=False):
    return ColorPairAnalysis(
        color1_index=i,
        color2_index=j,
        original_delta_e=40.0,
        simulated_delta_e=3.5,
        distinguishable=distinguishable,
        wcag_compliant=True,
    )


class TestRGB:

    def test_valid(self):
        c = RGB(59, 130, 246)
        assert c.to_tuple() == (59, 130, 246)
        assert c.hex == "#3b82f6"

    def test_unpacks_like_tuple(self):
        r, g, b = RGB(1, 2, 3)
        assert (r, g, b) == (1, 2, 3)

    def test_channel_out_of_range(self):
        with pytest.raises(ValueError, match="0-255"):
            RGB(256, 0, 0)
        with pytest.raises(ValueError, match="0-255"):
            RGB(0, -1, 0)

    def test_non_integer_channel(self):
        with pytest.raises(ValueError, match="must be an int"):
            RGB(1.5, 0, 0)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            RGB(True, 0, 0)

    def test_to_dict_roundtrip(self):
        c = RGB(10, 20, 30)
        assert RGB.from_dict(c.to_dict()) == c

    def test_hashable(self):
        assert len({RGB(1, 2, 3), RGB(1, 2, 3)}) == 1

    def test_frozen(self):
        c = RGB(0, 0, 0)
        with pytest.raises(AttributeError):
            c.r = 10


class TestOKLCH:

    def test_valid(self):
        c = OKLCH(L=0.5, C=0.1, H=200.0)
        assert c.L == 0.5
        assert c.C == 0.1
        assert c.H == 200.0

    def test_invalid_lightness(self):
        with pytest.raises(ValueError, match="Lightness"):
            OKLCH(L=1.5, C=0.1, H=200.0)

    def test_invalid_chroma(self):
        with pytest.raises(ValueError, match="Chroma"):
            OKLCH(L=0.5, C=-0.1, H=0.0)

    def test_invalid_hue(self):
        with pytest.raises(ValueError, match="Hue"):
            OKLCH(L=0.5, C=0.1, H=360.0)

    def test_hex(self):
        assert OKLCH(L=0.0, C=0.0, H=0.0).hex == "#000000"

    def test_to_dict_roundtrip(self):
        c = OKLCH(L=0.5, C=0.1, H=200.0)
        assert OKLCH.from_dict(c.to_dict()) == c


class TestEnums:

    def test_cvd_from_tag(self):
        assert CVDType("deuteranomaly") is CVDType.DEUTERANOMALY

    def test_cvd_categories(self):
        assert CVDType.PROTANOPIA.is_dichromacy
        assert not CVDType.PROTANOPIA.is_anomaly
        assert CVDType.TRITANOMALY.is_anomaly
        assert not CVDType.ACHROMATOPSIA.is_dichromacy
        assert not CVDType.NORMAL.is_anomaly

    def test_wcag_level_values(self):
        assert [level.value for level in WCAGLevel] == ["AAA", "AA", "AA Large", "Fail"]

    def test_affected_cone_values(self):
        assert AffectedCone("all") is AffectedCone.ALL


class TestWCAGResult:

    def _result(self, ratio):
        return WCAGResult(
            ratio=ratio, aa=False, aa_large=False, aaa=False, aaa_large=False,
            level=WCAGLevel.FAIL,
        )

    def test_bounds(self):
        assert self._result(1.0).ratio == 1.0
        assert self._result(21.0).ratio == 21.0

    def test_ratio_below_one(self):
        with pytest.raises(ValueError, match="1-21"):
            self._result(0.5)

    def test_ratio_above_21(self):
        with pytest.raises(ValueError, match="1-21"):
            self._result(22.0)

    def test_to_dict(self):
        assert self._result(2.0).to_dict()["level"] == "Fail"


class TestPaletteReport:

    def test_valid(self):
        report = PaletteAccessibilityReport(
            cvd_type=CVDType.PROTANOPIA,
            total_pairs=3,
            distinguishable_pairs=2,
            confusing_pairs=(_pair(),),
            score=67,
            recommendations=("note",),
        )
        assert report.score == 67

    def test_count_mismatch(self):
        with pytest.raises(ValueError, match="Pair counts"):
            PaletteAccessibilityReport(
                cvd_type=CVDType.PROTANOPIA,
                total_pairs=3,
                distinguishable_pairs=1,
                confusing_pairs=(_pair(),),
                score=33,
                recommendations=(),
            )

    def test_score_range(self):
        with pytest.raises(ValueError, match="Score"):
            PaletteAccessibilityReport(
                cvd_type=CVDType.NORMAL,
                total_pairs=0,
                distinguishable_pairs=0,
                confusing_pairs=(),
                score=101,
                recommendations=(),
            )

    def test_to_dict_roundtrip(self):
        report = PaletteAccessibilityReport(
            cvd_type=CVDType.TRITANOPIA,
            total_pairs=1,
            distinguishable_pairs=0,
            confusing_pairs=(_pair(),),
            score=0,
            recommendations=("a", "b"),
        )
        d = report.to_dict()
        assert d["cvd_type"] == "tritanopia"
        assert PaletteAccessibilityReport.from_dict(d) == report


class TestSummaries:

    def test_accessibility_to_dict(self):
        assert PaletteAccessibility(True, 100, None).to_dict()["worst_type"] is None
        summary = PaletteAccessibility(False, 50, CVDType.DEUTERANOPIA)
        assert summary.to_dict()["worst_type"] == "deuteranopia"

    def test_safe_alternative_hexes(self):
        alt = SafeAlternative(RGB(255, 0, 0), RGB(0, 0, 255), 42.0, "reason")
        assert alt.original_hex == "#ff0000"
        assert alt.suggested_hex == "#0000ff"
        assert alt.to_dict()["suggested_color"] == {"r": 0, "g": 0, "b": 255}


class TestColorScale:

    def _scale(self, steps):
        return ColorScale(name="Gray", base_hex="#808080", mode=ScaleMode.LIGHT, steps=steps)

    def test_valid(self):
        scale = self._scale(tuple(_step(i) for i in range(1, SCALE_LENGTH + 1)))
        assert scale.step(1).step == 1
        assert scale.step(12).step == 12
        assert len(scale.hexes) == 12

    def test_wrong_step_count(self):
        with pytest.raises(ValueError, match="exactly 12"):
            self._scale(tuple(_step(i) for i in range(1, 12)))

    def test_unordered_steps(self):
        steps = [_step(i) for i in range(1, SCALE_LENGTH + 1)]
        steps[0], steps[1] = steps[1], steps[0]
        with pytest.raises(ValueError, match="ordered"):
            self._scale(tuple(steps))

    def test_step_out_of_range(self):
        scale = self._scale(tuple(_step(i) for i in range(1, SCALE_LENGTH + 1)))
        with pytest.raises(KeyError):
            scale.step(13)
        with pytest.raises(KeyError):
            scale.step(0)

    def test_invalid_step_index(self):
        with pytest.raises(ValueError, match="Step"):
            _step(13)

    def test_to_dict_roundtrip(self):
        scale = self._scale(tuple(_step(i) for i in range(1, SCALE_LENGTH + 1)))
        d = scale.to_dict()
        assert d["mode"] == "light"
        assert ColorScale.from_dict(d) == scale
