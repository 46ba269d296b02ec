"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Color and palette record definitions.

Records are plain value objects supplied by the caller. A palette owns its
colors through its ``colors`` list; colors carry no pointer back to their
palette. Use ``palette_index`` when that lookup is needed.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from .colorspace import clamp_unit, rgb_to_hsl, to_byte


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ColorRecord:
    """A single sRGB color with display and provenance metadata.

    Channel values are expected in [0.0, 1.0] but are clamped wherever they
    are turned into bytes or strings.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    name: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    created_by_display_name: Optional[str] = None
    created_on_device_name: Optional[str] = None
    updated_on_device_name: Optional[str] = None

    @property
    def channels(self) -> tuple[float, float, float, float]:
        """Clamped (red, green, blue, alpha)."""
        return (
            clamp_unit(self.red),
            clamp_unit(self.green),
            clamp_unit(self.blue),
            clamp_unit(self.alpha),
        )

    @property
    def rgb_bytes(self) -> tuple[int, int, int]:
        return (to_byte(self.red), to_byte(self.green), to_byte(self.blue))

    @property
    def hex_string(self) -> str:
        r, g, b = self.rgb_bytes
        return f"#{r:02X}{g:02X}{b:02X}"

    @property
    def hex_with_alpha_string(self) -> str:
        return f"{self.hex_string}{to_byte(self.alpha):02X}"

    @property
    def rgb_string(self) -> str:
        r, g, b = self.rgb_bytes
        return f"rgb({r}, {g}, {b})"

    @property
    def rgba_string(self) -> str:
        r, g, b = self.rgb_bytes
        return f"rgba({r}, {g}, {b}, {clamp_unit(self.alpha)})"

    @property
    def hsl_string(self) -> str:
        r, g, b, _ = self.channels
        h, s, lightness = rgb_to_hsl(r, g, b)
        return (
            f"hsl({to_int(h * 360)}, {to_int(s * 100)}%, "
            f"{to_int(lightness * 100)}%)"
        )

    @property
    def display_name(self) -> str:
        """The name when it is not blank, otherwise the hex string."""
        if self.name and self.name.strip():
            return self.name
        return self.hex_string


@dataclass
class PaletteRecord:
    """An ordered, named group of colors."""

    name: str
    colors: list[ColorRecord] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    notes: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    created_by_display_name: Optional[str] = None
    is_pinned: bool = False
    # Raw preview background preference, e.g. "white" or "navy"
    preview_background: Optional[str] = None


def to_int(value: float) -> int:
    """Round half away from zero, for non-negative display values."""
    return int(value + 0.5)


def palette_index(palettes: Iterable[PaletteRecord]) -> dict[uuid.UUID, uuid.UUID]:
    """Build a ``{color_id: palette_id}`` map from palette membership.

    When a color id appears in more than one palette the last palette wins.
    """
    index: dict[uuid.UUID, uuid.UUID] = {}
    for palette in palettes:
        for color in palette.colors:
            index[color.id] = palette.id
    return index


def all_colors(
    colors: Iterable[ColorRecord], palettes: Iterable[PaletteRecord]
) -> list[ColorRecord]:
    """Loose colors followed by palette colors, first occurrence per id."""
    seen: set[uuid.UUID] = set()
    result: list[ColorRecord] = []
    for color in list(colors) + [c for p in palettes for c in p.colors]:
        if color.id not in seen:
            seen.add(color.id)
            result.append(color)
    return result
