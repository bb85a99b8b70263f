# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""Tests for WCAG 2.1 and APCA contrast metrics."""

import math
from concurrent.futures import ThreadPoolExecutor, wait

import pytest

from teul.schema import RGB, APCARating, FontWeight, WCAGLevel
from teul.core.colorspace import hex_to_rgb
from teul.core.contrast import (
    ContrastCache,
    analyze_contrast,
    find_accessible_color,
    get_apca_contrast,
    get_apca_contrast_hex,
    get_apca_min_font_size,
    get_apca_rating,
    get_contrasting_text_color,
    get_font_recommendations,
    get_relative_luminance,
    get_text_color_for_background,
    get_wcag_contrast,
    get_wcag_contrast_hex,
    get_wcag_level,
    get_wcag_rating,
    meets_apca_rating,
    meets_wcag_level,
    suggest_text_color,
)


class TestRelativeLuminance:

    def test_black(self):
        assert get_relative_luminance(0, 0, 0) == 0.0

    def test_white(self):
        assert get_relative_luminance(255, 255, 255) == pytest.approx(1.0, abs=1e-12)

    def test_green_dominates(self):
        assert get_relative_luminance(0, 255, 0) > get_relative_luminance(255, 0, 0)
        assert get_relative_luminance(255, 0, 0) > get_relative_luminance(0, 0, 255)


class TestWCAGContrast:

    def test_black_on_white(self):
        assert get_wcag_contrast_hex("#000000", "#ffffff") == pytest.approx(21.0)

    def test_identical_is_one(self):
        assert get_wcag_contrast_hex("#3b82f6", "#3b82f6") == 1.0

    def test_symmetric(self):
        assert get_wcag_contrast("#3b82f6", "#fef3c7") == get_wcag_contrast("#fef3c7", "#3b82f6")

    def test_range(self):
        for fg, bg in [("#123456", "#abcdef"), ("#ff0000", "#00ff00"), ("#777777", "#ffffff")]:
            assert 1.0 <= get_wcag_contrast_hex(fg, bg) <= 21.0

    def test_gray_reference(self):
        assert get_wcag_contrast_hex("#777777", "#ffffff") == pytest.approx(4.48, abs=0.01)

    def test_accepts_rgb_and_tuples(self):
        assert get_wcag_contrast(RGB(0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)


class TestWCAGRating:

    def test_aaa(self):
        rating = get_wcag_rating(7.0)
        assert rating.aaa and rating.aa and rating.aa_large and rating.aaa_large
        assert rating.level is WCAGLevel.AAA

    def test_aa_boundary_inclusive(self):
        rating = get_wcag_rating(4.5)
        assert rating.aa
        assert rating.aaa_large
        assert not rating.aaa
        assert rating.level is WCAGLevel.AA

    def test_aa_large(self):
        rating = get_wcag_rating(3.0)
        assert rating.aa_large
        assert not rating.aa
        assert rating.level is WCAGLevel.AA_LARGE

    def test_fail(self):
        rating = get_wcag_rating(2.99)
        assert not rating.aa_large
        assert rating.level is WCAGLevel.FAIL
        assert rating.level.value == "Fail"

    def test_level_helper(self):
        assert get_wcag_level(21.0) is WCAGLevel.AAA

    def test_meets_level(self):
        assert meets_wcag_level("#767676", "#ffffff", WCAGLevel.AA)
        assert not meets_wcag_level("#777777", "#ffffff", "AA")
        assert not meets_wcag_level("#767676", "#ffffff", "AAA")


class TestAPCA:

    def test_black_on_white(self):
        assert get_apca_contrast_hex("#000000", "#ffffff") == pytest.approx(-106.04, abs=0.05)

    def test_white_on_black(self):
        assert get_apca_contrast_hex("#ffffff", "#000000") == pytest.approx(107.88, abs=0.05)

    def test_identical_is_zero(self):
        assert get_apca_contrast("#808080", "#808080") == 0.0

    def test_polarity(self):
        assert get_apca_contrast_hex("#222222", "#eeeeee") < 0
        assert get_apca_contrast_hex("#eeeeee", "#222222") > 0

    def test_asymmetric(self):
        forward = get_apca_contrast_hex("#222222", "#eeeeee")
        backward = get_apca_contrast_hex("#eeeeee", "#222222")
        assert abs(forward) != pytest.approx(abs(backward), abs=1e-6)

    def test_low_contrast_clips_to_zero(self):
        assert get_apca_contrast_hex("#808080", "#828282") == 0.0

    def test_ratings(self):
        assert get_apca_rating(-80) is APCARating.GOLD
        assert get_apca_rating(75) is APCARating.GOLD
        assert get_apca_rating(60) is APCARating.SILVER
        assert get_apca_rating(-45) is APCARating.BRONZE
        assert get_apca_rating(44.9) is APCARating.FAIL

    def test_min_font_size(self):
        assert get_apca_min_font_size(95) == 12
        assert get_apca_min_font_size(-95, weight=700) == 10
        assert get_apca_min_font_size(50) == 24
        assert get_apca_min_font_size(50, weight=600) == 18
        assert get_apca_min_font_size(599.0 / 10, weight=599) == 24
        assert get_apca_min_font_size(15) == 72

    def test_min_font_size_insufficient(self):
        assert get_apca_min_font_size(14.9) is None
        assert get_apca_min_font_size(0) is None

    def test_font_recommendations(self):
        recs = get_font_recommendations(-80)
        assert [r.min_size for r in recs] == [14, 12]
        assert recs[1].weight is FontWeight.BOLD

    def test_font_recommendations_insufficient(self):
        recs = get_font_recommendations(20)
        assert len(recs) == 1
        assert math.isinf(recs[0].min_size)

    def test_meets_rating(self):
        assert meets_apca_rating("#000000", "#ffffff", APCARating.GOLD)
        assert meets_apca_rating("#000000", "#ffffff", "bronze")
        assert not meets_apca_rating("#777777", "#888888", "bronze")


class TestAnalyzeContrast:

    def test_black_on_white(self):
        result = analyze_contrast("#000000", "#ffffff")
        assert result.wcag.ratio == pytest.approx(21.0)
        assert result.wcag.level is WCAGLevel.AAA
        assert result.apca.rating is APCARating.GOLD
        assert result.apca.minimum_font_size == 12

    def test_identical_colors(self):
        result = analyze_contrast("#3b82f6", "#3b82f6")
        assert result.wcag.ratio == 1.0
        assert result.apca.lc == 0.0
        assert result.apca.minimum_font_size is None
        assert result.wcag.level is WCAGLevel.FAIL

    def test_to_dict(self):
        data = analyze_contrast("#000000", "#ffffff").to_dict()
        assert data["wcag"]["level"] == "AAA"
        assert data["apca"]["rating"] == "gold"


class TestTextColor:

    def test_suggest_on_white(self):
        suggestion = suggest_text_color("#ffffff")
        assert suggestion.hex == "#000000"
        assert suggestion.wcag_ratio == pytest.approx(21.0)

    def test_suggest_on_black(self):
        assert suggest_text_color("#000000").hex == "#ffffff"

    def test_text_color_for_background(self):
        assert get_text_color_for_background("#ffff00") == "dark"
        assert get_text_color_for_background("#0000ff") == "light"
        assert get_text_color_for_background("#333333") == "light"

    def test_contrasting_text_color(self):
        assert get_contrasting_text_color("#ffff00") == "#000000"
        assert get_contrasting_text_color("#0000ff") == "#ffffff"


class TestFindAccessibleColor:

    def test_passing_color_unchanged(self):
        assert find_accessible_color("#000000", "#ffffff") == "#000000"

    def test_darkens_on_light_background(self):
        result = find_accessible_color("#777777", "#ffffff", WCAGLevel.AA)
        assert result is not None
        assert get_wcag_contrast_hex(result, "#ffffff") >= 4.5
        assert get_relative_luminance(*hex_to_rgb(result)) < get_relative_luminance(0x77, 0x77, 0x77)

    def test_lightens_on_dark_background(self):
        result = find_accessible_color("#444444", "#000000", "AAA")
        assert result is not None
        assert get_wcag_contrast_hex(result, "#000000") >= 7.0

    def test_none_when_impossible(self):
        assert find_accessible_color("#ffffff", "#777777", WCAGLevel.AAA) is None


class TestContrastCache:

    def test_miss_then_hit(self):
        cache = ContrastCache()
        first = cache.get_ratio("#000000", "#ffffff")
        second = cache.get_ratio("#ffffff", "#000000")
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(cache) == 1

    def test_contains_unordered(self):
        cache = ContrastCache()
        cache.get_ratio("#123456", "#abcdef")
        assert ("#abcdef", "#123456") in cache

    def test_eviction(self):
        cache = ContrastCache(maxsize=2)
        cache.get_ratio("#000000", "#111111")
        cache.get_ratio("#000000", "#222222")
        cache.get_ratio("#000000", "#333333")
        assert len(cache) == 2
        assert ("#000000", "#111111") not in cache
        assert ("#000000", "#333333") in cache

    def test_recently_used_survives(self):
        cache = ContrastCache(maxsize=2)
        cache.get_ratio("#000000", "#111111")
        cache.get_ratio("#000000", "#222222")
        cache.get_ratio("#000000", "#111111")
        cache.get_ratio("#000000", "#333333")
        assert ("#000000", "#111111") in cache
        assert ("#000000", "#222222") not in cache

    def test_clear(self):
        cache = ContrastCache()
        cache.get_ratio("#000000", "#ffffff")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0

    def test_invalid_maxsize(self):
        with pytest.raises(ValueError, match="maxsize"):
            ContrastCache(maxsize=0)

    def test_does_not_change_results(self):
        cache = ContrastCache()
        for fg, bg in [("#3b82f6", "#ffffff"), ("#f97316", "#1e293b")]:
            assert analyze_contrast(fg, bg, cache=cache) == analyze_contrast(fg, bg)
            assert analyze_contrast(fg, bg, cache=cache) == analyze_contrast(fg, bg)
        assert cache.hits == 2

    def test_shared_between_threads(self):
        cache = ContrastCache(maxsize=8)
        pairs = [("#000000", f"#{v:02x}{v:02x}{v:02x}") for v in range(0, 256, 16)] * 5

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda p: cache.get_ratio(*p), pairs))

        assert results == [get_wcag_contrast_hex(*p) for p in pairs]
        assert cache.hits + cache.misses == len(pairs)
        assert len(cache) <= 8

    def test_len_and_contains_take_lock(self):
        cache = ContrastCache()
        cache.get_ratio("#000000", "#ffffff")

        with ThreadPoolExecutor(max_workers=2) as pool:
            with cache._lock:
                size = pool.submit(len, cache)
                found = pool.submit(cache.__contains__, ("#ffffff", "#000000"))
                done, _ = wait([size, found], timeout=0.1)
                assert not done
            assert size.result(timeout=5) == 1
            assert found.result(timeout=5)
