# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Contrast metrics: WCAG 2.1 and APCA.

WCAG 2.1 contrast is symmetric: (L_lighter + 0.05) / (L_darker + 0.05),
in [1, 21]. APCA (the WCAG 3 candidate) is polarity-aware: text on
background and background on text give Lc values of opposite sign.

References:
- WCAG 2.1: https://www.w3.org/TR/WCAG21/#dfn-contrast-ratio
- APCA: https://git.apcacontrast.com/documentation/APCA_in_a_Nutshell
  (SAPC 0.0.98G-4g-base constants)

Identical colors give ratio 1 and Lc 0 exactly. When contrast is too low
for any text, font-size lookups return None rather than a number.
"""

from __future__ import annotations

import logging
import math
import threading
from collections import OrderedDict
from typing import Optional, Union

from teul.schema import (
    RGB,
    APCARating,
    APCAResult,
    ContrastResult,
    FontSizeRecommendation,
    FontWeight,
    TextColorSuggestion,
    WCAGLevel,
    WCAGRating,
    WCAGResult,
)
from teul.core.colorspace import ColorLike, as_rgb, hex_to_rgb, rgb_to_hex

logger = logging.getLogger(__name__)


# =============================================================================
# WCAG 2.1
# =============================================================================

_WCAG_LINEAR_THRESHOLD = 0.03928
_WCAG_OFFSET = 0.05

WCAG_AAA = 7.0
WCAG_AA = 4.5
WCAG_AA_LARGE = 3.0


def _wcag_channel(value: int) -> float:
    srgb = value / 255.0
    if srgb <= _WCAG_LINEAR_THRESHOLD:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4


def get_relative_luminance(r: int, g: int, b: int) -> float:
    """
    Relative luminance per WCAG 2.1.

    L = 0.2126 * R + 0.7152 * G + 0.0722 * B over linearized channels.
    Black is 0 and white is 1 exactly.
    """
    return 0.2126 * _wcag_channel(r) + 0.7152 * _wcag_channel(g) + 0.0722 * _wcag_channel(b)


def _contrast_from_luminance(l1: float, l2: float) -> float:
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + _WCAG_OFFSET) / (darker + _WCAG_OFFSET)


def get_wcag_contrast(fg: ColorLike, bg: ColorLike) -> float:
    """WCAG 2.1 contrast ratio between two colors, in [1, 21]. Order does not matter."""
    a = as_rgb(fg)
    b = as_rgb(bg)
    return _contrast_from_luminance(
        get_relative_luminance(a.r, a.g, a.b),
        get_relative_luminance(b.r, b.g, b.b),
    )


def get_wcag_contrast_hex(fg_hex: str, bg_hex: str) -> float:
    return get_wcag_contrast(hex_to_rgb(fg_hex), hex_to_rgb(bg_hex))


def get_wcag_level(ratio: float) -> WCAGLevel:
    """Highest level a ratio reaches. Boundaries are inclusive."""
    if ratio >= WCAG_AAA:
        return WCAGLevel.AAA
    if ratio >= WCAG_AA:
        return WCAGLevel.AA
    if ratio >= WCAG_AA_LARGE:
        return WCAGLevel.AA_LARGE
    return WCAGLevel.FAIL


def get_wcag_rating(ratio: float) -> WCAGRating:
    """
    WCAG 2.1 conformance flags for a ratio.

    AAA needs 7, AA and AAA-large need 4.5, AA-large needs 3.
    """
    return WCAGRating(
        aa=ratio >= WCAG_AA,
        aa_large=ratio >= WCAG_AA_LARGE,
        aaa=ratio >= WCAG_AAA,
        aaa_large=ratio >= WCAG_AA,
        level=get_wcag_level(ratio),
    )


def meets_wcag_level(
    fg_hex: str,
    bg_hex: str,
    level: Union[WCAGLevel, str] = WCAGLevel.AA,
) -> bool:
    """Check a pair against AA (4.5) or AAA (7) for normal text."""
    level = WCAGLevel(level)
    target = WCAG_AAA if level is WCAGLevel.AAA else WCAG_AA
    return get_wcag_contrast_hex(fg_hex, bg_hex) >= target


# =============================================================================
# Contrast Cache
# =============================================================================


class ContrastCache:
    """
    Bounded LRU cache of WCAG ratios keyed by unordered RGB pair.

    Pass an instance to ``analyze_contrast`` (or call ``get_ratio``) when the
    same pairs are looked up repeatedly, e.g. a swatch grid re-rendering
    against a selected color. Access is serialized by a lock so one cache
    can be shared between threads. Caching never changes results.

    Args:
        maxsize: Maximum number of pairs kept; oldest entries are evicted.
            None means unbounded.
    """

    def __init__(self, maxsize: Optional[int] = 1024) -> None:
        if maxsize is not None and maxsize < 1:
            raise ValueError(f"maxsize must be >= 1 or None, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple, float] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(a: RGB, b: RGB) -> tuple:
        first, second = a.to_tuple(), b.to_tuple()
        return (first, second) if first <= second else (second, first)

    def get_ratio(self, c1: ColorLike, c2: ColorLike) -> float:
        """WCAG contrast ratio of a pair, computed at most once per pair."""
        a = as_rgb(c1)
        b = as_rgb(c2)
        key = self._key(a, b)

        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]

        ratio = get_wcag_contrast(a, b)

        with self._lock:
            self.misses += 1
            self._entries[key] = ratio
            self._entries.move_to_end(key)
            if self.maxsize is not None and len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Contrast cache full, evicted %s", evicted)
        return ratio

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pair: tuple) -> bool:
        c1, c2 = pair
        key = self._key(as_rgb(c1), as_rgb(c2))
        with self._lock:
            return key in self._entries


# =============================================================================
# APCA
# =============================================================================

_APCA_MAIN_TRC = 2.4
_APCA_SRGB_COEFFICIENTS = (0.2126729, 0.7151522, 0.0721750)

_APCA_BLACK_THRESHOLD = 0.022
_APCA_BLACK_CLIP = 1.414
_APCA_DELTA_Y_MIN = 0.0005

_APCA_BoW_TEXT = 0.57
_APCA_BoW_BACKGROUND = 0.56
_APCA_WoB_TEXT = 0.62
_APCA_WoB_BACKGROUND = 0.65

_APCA_SCALE_BoW = 1.14
_APCA_SCALE_WoB = 1.14
_APCA_OFFSET_BoW = 0.027
_APCA_OFFSET_WoB = 0.027
_APCA_LOW_CLIP = 0.1

# (|Lc| threshold, min px at normal weight, min px at bold weight)
_APCA_FONT_TABLE: tuple[tuple[float, int, int], ...] = (
    (90, 12, 10),
    (75, 14, 12),
    (60, 16, 14),
    (45, 24, 18),
    (30, 36, 24),
    (15, 72, 48),  # Non-text only
)

_BOLD_WEIGHT = 600


def _apca_luminance(rgb: RGB) -> float:
    """APCA screen luminance: simple 2.4 power curve, not the sRGB piecewise one."""
    r_co, g_co, b_co = _APCA_SRGB_COEFFICIENTS
    return (
        r_co * (rgb.r / 255.0) ** _APCA_MAIN_TRC
        + g_co * (rgb.g / 255.0) ** _APCA_MAIN_TRC
        + b_co * (rgb.b / 255.0) ** _APCA_MAIN_TRC
    )


def _soft_clamp(y: float) -> float:
    """Soft clamp near black."""
    if y < 0:
        return 0.0
    if y < _APCA_BLACK_THRESHOLD:
        return y + (_APCA_BLACK_THRESHOLD - y) ** _APCA_BLACK_CLIP
    return y


def get_apca_contrast(text: ColorLike, bg: ColorLike) -> float:
    """
    APCA lightness contrast (Lc) of text on a background.

    Returns a value in roughly [-108, 106]. Negative means dark text on a
    light background, positive means light text on a dark background.
    Swapping the arguments flips the sign and changes the magnitude.

    Guide to ``abs(Lc)``:
    - 15: minimum for non-text elements
    - 30: minimum for any text
    - 45: large text / headings
    - 60: body text
    - 75: preferred for body text
    - 90: fluent reading of small text
    """
    y_text = _soft_clamp(_apca_luminance(as_rgb(text)))
    y_bg = _soft_clamp(_apca_luminance(as_rgb(bg)))

    if abs(y_bg - y_text) < _APCA_DELTA_Y_MIN:
        return 0.0

    if y_bg > y_text:
        # Dark text on light background
        sapc = (y_bg ** _APCA_BoW_BACKGROUND - y_text ** _APCA_BoW_TEXT) * _APCA_SCALE_BoW
        if sapc < _APCA_LOW_CLIP:
            return 0.0
        output = -(sapc - _APCA_OFFSET_BoW)
    else:
        # Light text on dark background
        sapc = (y_text ** _APCA_WoB_TEXT - y_bg ** _APCA_WoB_BACKGROUND) * _APCA_SCALE_WoB
        if sapc < _APCA_LOW_CLIP:
            return 0.0
        output = sapc - _APCA_OFFSET_WoB

    return output * 100.0


def get_apca_contrast_hex(text_hex: str, bg_hex: str) -> float:
    return get_apca_contrast(hex_to_rgb(text_hex), hex_to_rgb(bg_hex))


def get_apca_rating(lc: float) -> APCARating:
    """Bronze/Silver/Gold band on ``abs(lc)``: 45/60/75."""
    abs_lc = abs(lc)
    if abs_lc >= 75:
        return APCARating.GOLD
    if abs_lc >= 60:
        return APCARating.SILVER
    if abs_lc >= 45:
        return APCARating.BRONZE
    return APCARating.FAIL


def get_apca_min_font_size(lc: float, weight: int = 400) -> Optional[int]:
    """
    Minimum font size in px usable at an Lc value.

    Weights of 600 and above use the bold column. Returns None when
    ``abs(lc)`` is below 15, where no size is acceptable.
    """
    abs_lc = abs(lc)
    for threshold, size_normal, size_bold in _APCA_FONT_TABLE:
        if abs_lc >= threshold:
            return size_bold if weight >= _BOLD_WEIGHT else size_normal
    return None


def get_font_recommendations(lc: float) -> list[FontSizeRecommendation]:
    """Human-readable font size guidance for an Lc value."""
    abs_lc = abs(lc)

    if abs_lc >= 90:
        return [FontSizeRecommendation(12, FontWeight.NORMAL, "Excellent: Any text size")]
    if abs_lc >= 75:
        return [
            FontSizeRecommendation(14, FontWeight.NORMAL, "Very good: Body text and larger"),
            FontSizeRecommendation(12, FontWeight.BOLD, "Very good: Bold small text"),
        ]
    if abs_lc >= 60:
        return [
            FontSizeRecommendation(16, FontWeight.NORMAL, "Good: Standard body text"),
            FontSizeRecommendation(14, FontWeight.BOLD, "Good: Bold body text"),
        ]
    if abs_lc >= 45:
        return [
            FontSizeRecommendation(24, FontWeight.NORMAL, "Acceptable: Large headings only"),
            FontSizeRecommendation(18, FontWeight.BOLD, "Acceptable: Bold headings"),
        ]
    if abs_lc >= 30:
        return [FontSizeRecommendation(36, FontWeight.NORMAL, "Minimum: Display text only")]
    return [FontSizeRecommendation(math.inf, FontWeight.NORMAL, "Insufficient contrast for text")]


def meets_apca_rating(
    text_hex: str,
    bg_hex: str,
    rating: Union[APCARating, str] = APCARating.BRONZE,
) -> bool:
    """Check whether a pair reaches at least the given APCA band."""
    rating = APCARating(rating)
    order = [APCARating.FAIL, APCARating.BRONZE, APCARating.SILVER, APCARating.GOLD]
    if rating is APCARating.FAIL:
        return False
    achieved = get_apca_rating(get_apca_contrast_hex(text_hex, bg_hex))
    return order.index(achieved) >= order.index(rating)


# =============================================================================
# Combined Analysis
# =============================================================================


def analyze_contrast(
    fg_hex: str,
    bg_hex: str,
    *,
    cache: Optional[ContrastCache] = None,
) -> ContrastResult:
    """
    Full WCAG 2.1 + APCA analysis of foreground text on a background.

    Args:
        fg_hex: Text color
        bg_hex: Background color
        cache: Optional ContrastCache for the WCAG ratio

    Example::

        result = analyze_contrast("#000000", "#ffffff")
        round(result.wcag.ratio)   # 21
        result.apca.rating         # APCARating.GOLD
    """
    fg = hex_to_rgb(fg_hex)
    bg = hex_to_rgb(bg_hex)

    ratio = cache.get_ratio(fg, bg) if cache is not None else get_wcag_contrast(fg, bg)
    rating = get_wcag_rating(ratio)
    lc = get_apca_contrast(fg, bg)

    return ContrastResult(
        wcag=WCAGResult(
            ratio=ratio,
            aa=rating.aa,
            aa_large=rating.aa_large,
            aaa=rating.aaa,
            aaa_large=rating.aaa_large,
            level=rating.level,
        ),
        apca=APCAResult(
            lc=lc,
            rating=get_apca_rating(lc),
            minimum_font_size=get_apca_min_font_size(lc),
        ),
    )


def suggest_text_color(bg_hex: str) -> TextColorSuggestion:
    """Choose black or white text for a background by higher WCAG ratio (white on ties)."""
    black = analyze_contrast("#000000", bg_hex)
    white = analyze_contrast("#ffffff", bg_hex)

    if black.wcag.ratio > white.wcag.ratio:
        return TextColorSuggestion("#000000", black.wcag.ratio, black.apca.lc)
    return TextColorSuggestion("#ffffff", white.wcag.ratio, white.apca.lc)


def get_contrasting_text_color(bg_hex: str) -> str:
    """``"#000000"`` or ``"#ffffff"``, whichever contrasts more with the background."""
    return suggest_text_color(bg_hex).hex


def get_text_color_for_background(bg_hex: str) -> str:
    """``"dark"`` if dark text reads better on the background, else ``"light"``."""
    return "dark" if get_contrasting_text_color(bg_hex) == "#000000" else "light"


def find_accessible_color(
    text_hex: str,
    bg_hex: str,
    target_level: Union[WCAGLevel, str] = WCAGLevel.AA,
) -> Optional[str]:
    """
    Find the nearest text color that meets a WCAG level on a background.

    Scales the text channels toward lighter or darker (away from the
    background luminance) with a 20-step binary search on the factor.
    Falls back to black or white; returns None if neither passes.
    """
    target_level = WCAGLevel(target_level)
    target = WCAG_AAA if target_level is WCAGLevel.AAA else WCAG_AA

    if get_wcag_contrast_hex(text_hex, bg_hex) >= target:
        return text_hex

    bg = hex_to_rgb(bg_hex)
    text = hex_to_rgb(text_hex)
    should_lighten = get_relative_luminance(*text) > get_relative_luminance(*bg)

    low, high = 0.0, 1.0
    best: Optional[str] = None

    for _ in range(20):
        mid = (low + high) / 2
        factor = 1 + mid if should_lighten else 1 - mid
        candidate = rgb_to_hex(text.r * factor, text.g * factor, text.b * factor)

        if get_wcag_contrast(hex_to_rgb(candidate), bg) >= target:
            best = candidate
            high = mid
        else:
            low = mid

    if best is not None:
        return best

    for fallback in ("#000000", "#ffffff"):
        if get_wcag_contrast_hex(fallback, bg_hex) >= target:
            logger.debug("No scaled variant of %s passes on %s, using %s", text_hex, bg_hex, fallback)
            return fallback
    return None
