# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Color value types produced by dominant-color extraction.

Design principles:
- Immutable: result types are frozen dataclasses
- Normalized: every channel is a float in [0, 1]
- Derived: hex/HSB/CMYK are computed from RGB, never stored independently

HSB hue is expressed in turns ([0, 1)) and only converted to degrees for
display strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be 0-1, got {value}")


# =============================================================================
# Color Spaces
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    A color as three normalized sRGB channels.

    Attributes:
        r: Red (0.0-1.0)
        g: Green (0.0-1.0)
        b: Blue (0.0-1.0)
    """
    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        """Validate channels are within [0, 1]."""
        _check_unit("Red", self.r)
        _check_unit("Green", self.g)
        _check_unit("Blue", self.b)

    @property
    def hex(self) -> str:
        """Hex string like "#3941C8" (channels truncated to 8 bits)."""
        from clipsense.measure.colorspace import rgb_to_hex
        return rgb_to_hex(self.r, self.g, self.b)

    @property
    def hsb(self) -> HSBColor:
        from clipsense.measure.colorspace import rgb_to_hsb
        h, s, b = rgb_to_hsb(self.as_array())
        return HSBColor(h=float(h), s=float(s), b=float(b))

    @property
    def cmyk(self) -> CMYKColor:
        from clipsense.measure.colorspace import rgb_to_cmyk
        c, m, y, k = rgb_to_cmyk(self.as_array())
        return CMYKColor(c=float(c), m=float(m), y=float(y), k=float(k))

    @property
    def description(self) -> str:
        return f"rgb({int(self.r * 255)}, {int(self.g * 255)}, {int(self.b * 255)})"

    def as_array(self) -> NDArray[np.float64]:
        """Channels as a (3,) float array."""
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, values: NDArray[np.float64]) -> RGBColor:
        """Build from a (3,) array, clipping float noise back into [0, 1]."""
        r, g, b = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
        return cls(r=float(r), g=float(g), b=float(b))

    @classmethod
    def from_hex(cls, hex_color: str) -> RGBColor:
        """
        Parse "#RGB", "#RRGGBB" or "#AARRGGBB" (alpha is ignored).

        Raises:
            ValueError: If the string is not a hex color.
        """
        from clipsense.measure.colorspace import hex_to_rgb
        r, g, b = hex_to_rgb(hex_color)
        return cls(r=r, g=g, b=b)


@dataclass(frozen=True, slots=True)
class HSBColor:
    """
    Hue/saturation/brightness.

    Attributes:
        h: Hue in turns ([0.0, 1.0), where 0≈red, 1/3≈green, 2/3≈blue)
        s: Saturation (0.0-1.0)
        b: Brightness (0.0-1.0)
    """
    h: float
    s: float
    b: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.h < 1.0:
            raise ValueError(f"Hue must be in [0, 1), got {self.h}")
        _check_unit("Saturation", self.s)
        _check_unit("Brightness", self.b)

    @property
    def description(self) -> str:
        return f"hsb({int(self.h * 360)}°, {int(self.s * 100)}%, {int(self.b * 100)}%)"


@dataclass(frozen=True, slots=True)
class CMYKColor:
    """Cyan/magenta/yellow/key, each 0.0-1.0."""
    c: float
    m: float
    y: float
    k: float

    def __post_init__(self) -> None:
        _check_unit("Cyan", self.c)
        _check_unit("Magenta", self.m)
        _check_unit("Yellow", self.y)
        _check_unit("Key", self.k)

    @property
    def description(self) -> str:
        return (
            f"cmyk({int(self.c * 100)}%, {int(self.m * 100)}%, "
            f"{int(self.y * 100)}%, {int(self.k * 100)}%)"
        )


# =============================================================================
# Clustering
# =============================================================================


@dataclass(slots=True)
class ColorCluster:
    """
    One cluster during a single clustering run.

    Mutable on purpose: points are cleared and reassigned every iteration
    and the centroid is recomputed from them. Converted into a ColorInfo
    (or dropped, if empty) once the run completes.

    Attributes:
        centroid: Current representative color
        points: (N, 3) array of the pixels currently assigned
    """
    centroid: RGBColor
    points: NDArray[np.float64] = field(
        default_factory=lambda: np.empty((0, 3), dtype=np.float64)
    )

    @property
    def size(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorInfo:
    """
    A dominant color with all of its representations and its coverage.

    Attributes:
        hex: "#RRGGBB", uppercase
        rgb: Normalized RGB value
        cmyk: CMYK representation
        hsb: HSB representation (hue in turns)
        percentage: Share of the sampled pixels in (0, 1]
        name: Optional human label (e.g. "Average")
    """
    hex: str
    rgb: RGBColor
    cmyk: CMYKColor
    hsb: HSBColor
    percentage: float
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate percentage is in valid range."""
        if not 0.0 <= self.percentage <= 1.0:
            raise ValueError(f"Percentage must be 0-1, got {self.percentage}")

    @classmethod
    def from_rgb(
        cls,
        rgb: RGBColor,
        percentage: float = 0.0,
        name: Optional[str] = None,
    ) -> ColorInfo:
        """Derive every representation from a single RGB value."""
        return cls(
            hex=rgb.hex,
            rgb=rgb,
            cmyk=rgb.cmyk,
            hsb=rgb.hsb,
            percentage=percentage,
            name=name,
        )

    @classmethod
    def from_hex(
        cls,
        hex_color: str,
        percentage: float = 0.0,
        name: Optional[str] = None,
    ) -> ColorInfo:
        """
        Build from a hex string.

        Raises:
            ValueError: If the string is not a hex color.
        """
        return cls.from_rgb(RGBColor.from_hex(hex_color), percentage, name)


@dataclass(frozen=True, slots=True)
class ColorDistribution:
    """
    Whole-image HSB statistics.

    Saturation and brightness are in percent (0-100) and hue in degrees
    (0-360), so the classification thresholds below read on that scale.

    Attributes:
        total_pixels: Opaque pixels analyzed
        dominant_hue: Mean hue in degrees
        average_saturation: Mean saturation, 0-100
        average_brightness: Mean brightness, 0-100
        color_variance: Mean of squared saturation and brightness deviations
    """
    total_pixels: int
    dominant_hue: float
    average_saturation: float
    average_brightness: float
    color_variance: float

    @property
    def richness(self) -> float:
        """Color richness score, 0.0-1.0."""
        score = self.color_variance * self.average_saturation / 10000.0
        return min(max(score, 0.0), 1.0)

    @property
    def is_monochromatic(self) -> bool:
        return self.average_saturation < 20.0 or self.color_variance < 100.0

    @property
    def is_high_contrast(self) -> bool:
        return self.color_variance > 5000.0
