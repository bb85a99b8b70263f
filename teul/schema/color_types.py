# Copyright (c) 2026 Teul
# SPDX-License-Identifier: MIT

"""
Value types for the Teul color-science core.

Design principles:
- Immutable: All records are frozen dataclasses
- Transient: Built from a caller-supplied color, consumed, discarded
- Serializable: ``to_dict()`` output is JSON-ready for the host UI

Closed vocabularies (vision conditions, conformance levels, scale modes)
are enums whose values are the legacy string tags, so ``CVDType("protanopia")``
accepts what the host sends.

OKLCH Color Space:
- L (Lightness): 0.0 = black, 1.0 = white
- C (Chroma): 0.0 = gray, ~0.37 = max saturation in sRGB
- H (Hue): 0-360 degrees
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


# =============================================================================
# Enumerations
# =============================================================================


class CVDType(Enum):
    """
    Color vision conditions that can be simulated.

    Dichromacy types (``-opia``) are binary: one cone class is missing.
    Anomaly types (``-omaly``) are gradable by severity in [0, 1].
    """

    NORMAL = "normal"
    PROTANOPIA = "protanopia"  # Red-blind
    PROTANOMALY = "protanomaly"  # Red-weak
    DEUTERANOPIA = "deuteranopia"  # Green-blind
    DEUTERANOMALY = "deuteranomaly"  # Green-weak, most common
    TRITANOPIA = "tritanopia"  # Blue-blind
    TRITANOMALY = "tritanomaly"  # Blue-weak
    ACHROMATOPSIA = "achromatopsia"  # Monochromacy

    @property
    def is_dichromacy(self) -> bool:
        return self in (CVDType.PROTANOPIA, CVDType.DEUTERANOPIA, CVDType.TRITANOPIA)

    @property
    def is_anomaly(self) -> bool:
        return self in (CVDType.PROTANOMALY, CVDType.DEUTERANOMALY, CVDType.TRITANOMALY)


class AffectedCone(Enum):
    """Cone class affected by a vision condition."""

    L = "L"
    M = "M"
    S = "S"
    ALL = "all"
    NONE = "none"


class WCAGLevel(Enum):
    """WCAG 2.1 conformance level for a contrast ratio."""

    AAA = "AAA"
    AA = "AA"
    AA_LARGE = "AA Large"
    FAIL = "Fail"


class APCARating(Enum):
    """APCA Bronze/Silver/Gold conformance band."""

    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    FAIL = "fail"


class FontWeight(Enum):
    NORMAL = "normal"
    BOLD = "bold"


class ScaleMode(Enum):
    """Theme a color scale is generated for."""

    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# Color Values
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGB:
    """
    An 8-bit sRGB color.

    This is the canonical external representation of a color. Channels are
    integers in [0, 255]. Iterating yields ``r, g, b`` so an RGB unpacks
    like a tuple.
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are 8-bit integers."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.g, self.b))

    @property
    def hex(self) -> str:
        """Lowercase hex string like ``"#3366cc"``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict) -> RGB:
        """Deserialize from dictionary."""
        return cls(r=data["r"], g=data["g"], b=data["b"])


@dataclass(frozen=True, slots=True)
class HSL:
    """
    Hue/saturation/lightness form of an sRGB color.

    Author-facing only; nothing in the core computes in HSL.

    Attributes:
        h: Hue in degrees [0, 360)
        s: Saturation percentage [0, 100]
        l: Lightness percentage [0, 100]
    """
    h: float
    s: float
    l: float

    def to_dict(self) -> dict:
        return {"h": self.h, "s": self.s, "l": self.l}


@dataclass(frozen=True, slots=True)
class OKLCH:
    """
    A single color in OKLCH color space.

    OKLCH is perceptually uniform: equal steps in L, C or H read as equal
    perceptual steps, which is why scales are generated here.

    Attributes:
        L: Lightness (0.0 = black, 1.0 = white)
        C: Chroma (0.0 = neutral gray)
        H: Hue in degrees [0, 360)
    """
    L: float
    C: float
    H: float

    def __post_init__(self) -> None:
        """Validate color values are within expected ranges."""
        if not 0.0 <= self.L <= 1.0:
            raise ValueError(f"Lightness must be 0-1, got {self.L}")
        if self.C < 0.0:
            raise ValueError(f"Chroma must be >= 0, got {self.C}")
        if not 0.0 <= self.H < 360.0:
            raise ValueError(f"Hue must be 0-360, got {self.H}")

    @property
    def hex(self) -> str:
        """Hex string of this color (channels clipped to sRGB)."""
        from teul.core.colorspace import oklch_to_hex
        return oklch_to_hex(self.L, self.C, self.H)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"L": self.L, "C": self.C, "H": self.H}

    @classmethod
    def from_dict(cls, data: dict) -> OKLCH:
        """Deserialize from dictionary."""
        return cls(L=data["L"], C=data["C"], H=data["H"])


# =============================================================================
# Vision Condition Metadata
# =============================================================================


@dataclass(frozen=True, slots=True)
class CVDInfo:
    """Descriptive metadata for a vision condition."""
    type: CVDType
    name: str
    description: str
    prevalence: str
    affected_cone: AffectedCone

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "prevalence": self.prevalence,
            "affected_cone": self.affected_cone.value,
        }


# =============================================================================
# Contrast Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class WCAGRating:
    """WCAG 2.1 conformance flags for a contrast ratio."""
    aa: bool
    aa_large: bool
    aaa: bool
    aaa_large: bool
    level: WCAGLevel


@dataclass(frozen=True, slots=True)
class WCAGResult:
    """WCAG 2.1 contrast ratio with its conformance flags."""
    ratio: float
    aa: bool
    aa_large: bool
    aaa: bool
    aaa_large: bool
    level: WCAGLevel

    def __post_init__(self) -> None:
        if not 1.0 <= self.ratio <= 21.0 + 1e-9:
            raise ValueError(f"WCAG ratio must be 1-21, got {self.ratio}")

    def to_dict(self) -> dict:
        return {
            "ratio": self.ratio,
            "aa": self.aa,
            "aa_large": self.aa_large,
            "aaa": self.aaa,
            "aaa_large": self.aaa_large,
            "level": self.level.value,
        }


@dataclass(frozen=True, slots=True)
class APCAResult:
    """
    APCA lightness contrast.

    Attributes:
        lc: Signed Lc value. Negative = dark text on light background.
        rating: Conformance band on ``abs(lc)``
        minimum_font_size: Smallest usable font size in px for normal
            weight, or None when contrast is insufficient for any text
    """
    lc: float
    rating: APCARating
    minimum_font_size: Optional[int]

    def to_dict(self) -> dict:
        return {
            "lc": self.lc,
            "rating": self.rating.value,
            "minimum_font_size": self.minimum_font_size,
        }


@dataclass(frozen=True, slots=True)
class ContrastResult:
    """Combined WCAG 2.1 and APCA analysis of a foreground/background pair."""
    wcag: WCAGResult
    apca: APCAResult

    def to_dict(self) -> dict:
        return {"wcag": self.wcag.to_dict(), "apca": self.apca.to_dict()}


@dataclass(frozen=True, slots=True)
class FontSizeRecommendation:
    """A minimum font size (px) for a weight. ``inf`` means no size works."""
    min_size: float
    weight: FontWeight
    description: str

    def to_dict(self) -> dict:
        return {
            "min_size": self.min_size,
            "weight": self.weight.value,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class TextColorSuggestion:
    """Black or white text choice for a background."""
    hex: str
    wcag_ratio: float
    apca_lc: float

    def to_dict(self) -> dict:
        return {"hex": self.hex, "wcag_ratio": self.wcag_ratio, "apca_lc": self.apca_lc}


# =============================================================================
# Palette Analysis Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorPairAnalysis:
    """
    Distinguishability of one unordered palette pair under a condition.

    Attributes:
        color1_index, color2_index: Palette indices (color1_index < color2_index
            when produced by palette analysis)
        original_delta_e: CIEDE2000 between the unsimulated colors
        simulated_delta_e: CIEDE2000 between the simulated colors
        distinguishable: simulated_delta_e >= threshold
        wcag_compliant: Approximate non-text 3:1 verdict (RGB distance stand-in)
    """
    color1_index: int
    color2_index: int
    original_delta_e: float
    simulated_delta_e: float
    distinguishable: bool
    wcag_compliant: bool

    def to_dict(self) -> dict:
        return {
            "color1_index": self.color1_index,
            "color2_index": self.color2_index,
            "original_delta_e": self.original_delta_e,
            "simulated_delta_e": self.simulated_delta_e,
            "distinguishable": self.distinguishable,
            "wcag_compliant": self.wcag_compliant,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ColorPairAnalysis:
        return cls(**data)


@dataclass(frozen=True, slots=True)
class PaletteAccessibilityReport:
    """
    Whole-palette distinguishability report for one vision condition.

    Score is the rounded percentage of distinguishable pairs; a palette with
    no pairs (0 or 1 colors) scores 100.
    """
    cvd_type: CVDType
    total_pairs: int
    distinguishable_pairs: int
    confusing_pairs: tuple[ColorPairAnalysis, ...]
    score: int
    recommendations: tuple[str, ...]

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score must be 0-100, got {self.score}")
        if self.distinguishable_pairs + len(self.confusing_pairs) != self.total_pairs:
            raise ValueError(
                f"Pair counts do not add up: {self.distinguishable_pairs} + "
                f"{len(self.confusing_pairs)} != {self.total_pairs}"
            )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "cvd_type": self.cvd_type.value,
            "total_pairs": self.total_pairs,
            "distinguishable_pairs": self.distinguishable_pairs,
            "confusing_pairs": [p.to_dict() for p in self.confusing_pairs],
            "score": self.score,
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PaletteAccessibilityReport:
        """Deserialize from dictionary."""
        return cls(
            cvd_type=CVDType(data["cvd_type"]),
            total_pairs=data["total_pairs"],
            distinguishable_pairs=data["distinguishable_pairs"],
            confusing_pairs=tuple(
                ColorPairAnalysis.from_dict(p) for p in data["confusing_pairs"]
            ),
            score=data["score"],
            recommendations=tuple(data["recommendations"]),
        )


@dataclass(frozen=True, slots=True)
class PaletteAccessibility:
    """Pass/fail summary of a palette across all vision conditions."""
    accessible: bool
    score: int
    worst_type: Optional[CVDType]

    def to_dict(self) -> dict:
        return {
            "accessible": self.accessible,
            "score": self.score,
            "worst_type": self.worst_type.value if self.worst_type else None,
        }


@dataclass(frozen=True, slots=True)
class SafeAlternative:
    """A replacement suggestion for a color that causes confusion."""
    original_color: RGB
    suggested_color: RGB
    improvement_score: float
    reason: str

    @property
    def original_hex(self) -> str:
        return self.original_color.hex

    @property
    def suggested_hex(self) -> str:
        return self.suggested_color.hex

    def to_dict(self) -> dict:
        return {
            "original_color": self.original_color.to_dict(),
            "suggested_color": self.suggested_color.to_dict(),
            "original_hex": self.original_hex,
            "suggested_hex": self.suggested_hex,
            "improvement_score": self.improvement_score,
            "reason": self.reason,
        }


# =============================================================================
# Color Scales
# =============================================================================

SCALE_LENGTH = 12


@dataclass(frozen=True, slots=True)
class ScaleStep:
    """
    One step of a 12-step tonal scale.

    Attributes:
        step: Step index 1-12
        hex: Displayable hex of the step
        oklch: Gamut-clamped OKLCH the hex was produced from
        usage: Static UI role of the step
    """
    step: int
    hex: str
    oklch: OKLCH
    usage: str

    def __post_init__(self) -> None:
        if not 1 <= self.step <= SCALE_LENGTH:
            raise ValueError(f"Step must be 1-{SCALE_LENGTH}, got {self.step}")

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "hex": self.hex,
            "oklch": self.oklch.to_dict(),
            "usage": self.usage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScaleStep:
        return cls(
            step=data["step"],
            hex=data["hex"],
            oklch=OKLCH.from_dict(data["oklch"]),
            usage=data["usage"],
        )


@dataclass(frozen=True, slots=True)
class ColorScale:
    """
    A 12-step perceptual scale derived from one seed color.

    Steps 1-2 are backgrounds, 3-5 component backgrounds, 6-8 borders,
    9-10 solid fills (step 9 is the seed), 11-12 text.
    """
    name: str
    base_hex: str
    mode: ScaleMode
    steps: tuple[ScaleStep, ...]

    def __post_init__(self) -> None:
        if len(self.steps) != SCALE_LENGTH:
            raise ValueError(
                f"Scale must have exactly {SCALE_LENGTH} steps, got {len(self.steps)}"
            )
        indices = [s.step for s in self.steps]
        if indices != list(range(1, SCALE_LENGTH + 1)):
            raise ValueError(f"Scale steps must be ordered 1-{SCALE_LENGTH}, got {indices}")

    def step(self, index: int) -> ScaleStep:
        """Get a step by its 1-based index."""
        if not 1 <= index <= SCALE_LENGTH:
            raise KeyError(f"No step {index}")
        return self.steps[index - 1]

    @property
    def hexes(self) -> tuple[str, ...]:
        return tuple(s.hex for s in self.steps)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "base_hex": self.base_hex,
            "mode": self.mode.value,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ColorScale:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            base_hex=data["base_hex"],
            mode=ScaleMode(data["mode"]),
            steps=tuple(ScaleStep.from_dict(s) for s in data["steps"]),
        )


@dataclass(frozen=True, slots=True)
class ColorScalePair:
    """Light and dark scales generated from the same seed."""
    light: ColorScale
    dark: ColorScale

    def to_dict(self) -> dict:
        return {"light": self.light.to_dict(), "dark": self.dark.to_dict()}
