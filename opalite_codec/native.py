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
Native Opalite interchange documents (.opalitecolor / .opalitepalette).

Documents are UTF-8 JSON objects. JSON is first parsed into typed
``ColorDocument`` / ``PaletteDocument`` structures by validating parse
functions, then converted to records. Parsing fails with ``InvalidFormat``
when the bytes are not a JSON object and with ``MissingRequiredFields`` when
a required field is absent or has the wrong type.
"""

import json
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from .colorspace import clamp_unit
from .constants import NATIVE_JSON_INDENT, UNKNOWN_PROVENANCE, UNTITLED
from .errors import InvalidFormat, MissingRequiredFields
from .models import ColorRecord, PaletteRecord, utc_now


@dataclass
class ColorDocument:
    """Wire representation of a color."""

    id: uuid.UUID
    red: float
    green: float
    blue: float
    alpha: float
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = None
    notes: Optional[str] = None
    hex: Optional[str] = None
    hex_with_alpha: Optional[str] = None
    rgb: Optional[str] = None
    rgba: Optional[str] = None
    hsl: Optional[str] = None
    created_on_device_name: Optional[str] = None
    created_by_display_name: Optional[str] = None
    updated_on_device_name: Optional[str] = None

    @classmethod
    def from_record(cls, color: ColorRecord) -> "ColorDocument":
        r, g, b, a = color.channels
        return cls(
            id=color.id,
            red=r,
            green=g,
            blue=b,
            alpha=a,
            created_at=color.created_at,
            updated_at=color.updated_at,
            name=color.name,
            notes=color.notes,
            hex=color.hex_string,
            hex_with_alpha=color.hex_with_alpha_string,
            rgb=color.rgb_string,
            rgba=color.rgba_string,
            hsl=color.hsl_string,
            created_on_device_name=color.created_on_device_name or UNKNOWN_PROVENANCE,
            created_by_display_name=color.created_by_display_name or UNKNOWN_PROVENANCE,
            updated_on_device_name=color.updated_on_device_name or UNKNOWN_PROVENANCE,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id).upper(),
            "name": self.name,
            "notes": self.notes,
            "hex": self.hex,
            "hexWithAlpha": self.hex_with_alpha,
            "rgb": self.rgb,
            "rgba": self.rgba,
            "hsl": self.hsl,
            "red": self.red,
            "green": self.green,
            "blue": self.blue,
            "alpha": self.alpha,
            "createdAt": self.created_at.timestamp(),
            "updatedAt": self.updated_at.timestamp(),
            "createdOnDeviceName": self.created_on_device_name,
            "createdByDisplayName": self.created_by_display_name,
            "updatedOnDeviceName": self.updated_on_device_name,
        }

    def to_record(self) -> ColorRecord:
        return ColorRecord(
            id=self.id,
            red=clamp_unit(self.red),
            green=clamp_unit(self.green),
            blue=clamp_unit(self.blue),
            alpha=clamp_unit(self.alpha),
            name=self.name,
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
            created_by_display_name=self.created_by_display_name,
            created_on_device_name=self.created_on_device_name,
            updated_on_device_name=self.updated_on_device_name,
        )


@dataclass
class PaletteDocument:
    """Wire representation of a palette with its embedded colors."""

    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
    colors: list[ColorDocument] = field(default_factory=list)
    notes: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    is_pinned: bool = False
    created_by_display_name: Optional[str] = None
    preview_background: Optional[str] = None

    @classmethod
    def from_record(cls, palette: PaletteRecord) -> "PaletteDocument":
        return cls(
            id=palette.id,
            name=palette.name,
            created_at=palette.created_at,
            updated_at=palette.updated_at,
            colors=[ColorDocument.from_record(c) for c in palette.colors],
            notes=palette.notes,
            tags=list(palette.tags),
            is_pinned=palette.is_pinned,
            created_by_display_name=palette.created_by_display_name,
            preview_background=palette.preview_background,
        )

    def to_dict(self) -> dict[str, Any]:
        document = {
            "id": str(self.id).upper(),
            "name": self.name,
            "createdAt": self.created_at.timestamp(),
            "updatedAt": self.updated_at.timestamp(),
            "createdByDisplayName": self.created_by_display_name,
            "notes": self.notes,
            "tags": list(self.tags),
            "isPinned": self.is_pinned,
            "colors": [c.to_dict() for c in self.colors],
        }
        if self.preview_background is not None:
            document["previewBackground"] = self.preview_background
        return document

    def to_record(self) -> PaletteRecord:
        return PaletteRecord(
            id=self.id,
            name=self.name,
            colors=[c.to_record() for c in self.colors],
            notes=self.notes,
            tags=list(self.tags),
            created_at=self.created_at,
            updated_at=self.updated_at,
            created_by_display_name=self.created_by_display_name,
            is_pinned=self.is_pinned,
            preview_background=self.preview_background,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _float(value: Any) -> float:
    """Convert a JSON number, saturating integers too large for a float."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _timestamp(value: Any, now: datetime) -> datetime:
    if not _is_number(value):
        return now
    value = _float(value)
    if not math.isfinite(value):
        return now
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return now


def _uuid(value: Any) -> uuid.UUID:
    if not isinstance(value, str):
        raise MissingRequiredFields()
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise MissingRequiredFields() from e


def load_document(data: Union[bytes, str]) -> dict[str, Any]:
    """Parse raw bytes as a JSON object.

    Raises:
        InvalidFormat: If the bytes are not JSON or the top level is not an
            object.
    """
    try:
        document = json.loads(data)
    except ValueError as e:
        raise InvalidFormat() from e
    if not isinstance(document, dict):
        raise InvalidFormat()
    return document


def parse_color_document(
    obj: dict[str, Any], now: Optional[datetime] = None
) -> ColorDocument:
    """Validate a color object.

    ``id`` must be a UUID string and ``red``/``green``/``blue`` must be
    numbers. ``alpha`` defaults to 1.0 and the timestamps default to ``now``.

    Raises:
        MissingRequiredFields: If a required field is absent or mistyped.
    """
    now = now or utc_now()
    color_id = _uuid(obj.get("id"))
    channels = [obj.get(key) for key in ("red", "green", "blue")]
    if not all(_is_number(value) for value in channels):
        raise MissingRequiredFields()
    red, green, blue = channels

    alpha = obj.get("alpha")
    if not _is_number(alpha):
        alpha = 1.0

    return ColorDocument(
        id=color_id,
        red=_float(red),
        green=_float(green),
        blue=_float(blue),
        alpha=_float(alpha),
        created_at=_timestamp(obj.get("createdAt"), now),
        updated_at=_timestamp(obj.get("updatedAt"), now),
        name=_optional_str(obj.get("name")),
        notes=_optional_str(obj.get("notes")),
        hex=_optional_str(obj.get("hex")),
        hex_with_alpha=_optional_str(obj.get("hexWithAlpha")),
        rgb=_optional_str(obj.get("rgb")),
        rgba=_optional_str(obj.get("rgba")),
        hsl=_optional_str(obj.get("hsl")),
        created_on_device_name=_optional_str(obj.get("createdOnDeviceName")),
        created_by_display_name=_optional_str(obj.get("createdByDisplayName")),
        updated_on_device_name=_optional_str(obj.get("updatedOnDeviceName")),
    )


def parse_palette_document(
    obj: dict[str, Any], now: Optional[datetime] = None
) -> PaletteDocument:
    """Validate a palette object and every embedded color.

    A single invalid embedded color fails the whole palette. When two
    embedded colors share an id the later one wins, keeping the position of
    the first.

    A blank name decodes as "Untitled"; only an absent or non-string name is
    a missing field.

    Raises:
        MissingRequiredFields: If the palette id or name is absent or
            mistyped, or any embedded color is invalid.
    """
    now = now or utc_now()
    palette_id = _uuid(obj.get("id"))
    name = obj.get("name")
    if not isinstance(name, str):
        raise MissingRequiredFields()
    if not name.strip():
        name = UNTITLED

    colors: dict[uuid.UUID, ColorDocument] = {}
    raw_colors = obj.get("colors")
    if isinstance(raw_colors, list):
        for raw in raw_colors:
            if not isinstance(raw, dict):
                raise MissingRequiredFields()
            color = parse_color_document(raw, now)
            colors[color.id] = color

    raw_tags = obj.get("tags")
    tags = [t for t in raw_tags if isinstance(t, str)] if isinstance(raw_tags, list) else []
    is_pinned = obj.get("isPinned")

    return PaletteDocument(
        id=palette_id,
        name=name,
        created_at=_timestamp(obj.get("createdAt"), now),
        updated_at=_timestamp(obj.get("updatedAt"), now),
        colors=list(colors.values()),
        notes=_optional_str(obj.get("notes")),
        tags=tags,
        is_pinned=is_pinned if isinstance(is_pinned, bool) else False,
        created_by_display_name=_optional_str(obj.get("createdByDisplayName")),
        preview_background=_optional_str(obj.get("previewBackground")),
    )


def _dump(document: dict[str, Any]) -> bytes:
    return json.dumps(document, indent=NATIVE_JSON_INDENT, ensure_ascii=False).encode("utf-8")


def encode_color(color: ColorRecord) -> bytes:
    """Encode a color as a native .opalitecolor document."""
    return _dump(ColorDocument.from_record(color).to_dict())


def encode_palette(palette: PaletteRecord) -> bytes:
    """Encode a palette and its colors as a native .opalitepalette document."""
    return _dump(PaletteDocument.from_record(palette).to_dict())


def decode_color(
    data: Union[bytes, str], now: Optional[datetime] = None
) -> ColorRecord:
    """Decode a native color document into a record."""
    return parse_color_document(load_document(data), now).to_record()


def decode_palette(
    data: Union[bytes, str], now: Optional[datetime] = None
) -> PaletteRecord:
    """Decode a native palette document into a record."""
    return parse_palette_document(load_document(data), now).to_record()
