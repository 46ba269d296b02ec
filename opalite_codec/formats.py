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
Export format table and the codec's export/import entry points.

Each supported format is one ``ExportFormatDescriptor`` in ``FORMATS``. The
descriptor carries the extension, labels, the free-format flag and the
encoder functions, so export dispatch is a table lookup.
"""

import os
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from . import ase, native, text_formats
from .constants import (
    EXT_ASE,
    EXT_CSS,
    EXT_GPL,
    EXT_NATIVE_COLOR,
    EXT_NATIVE_PALETTE,
    EXT_PROCREATE,
    EXT_SOURCE_SNIPPET,
    FORMAT_ASE,
    FORMAT_CSS,
    FORMAT_GPL,
    FORMAT_NATIVE_COLOR,
    FORMAT_NATIVE_PALETTE,
    FORMAT_PROCREATE,
    FORMAT_SOURCE_SNIPPET,
    UNTITLED,
)
from .errors import DecodingFailed, ExportFailed, InvalidFormat, SharingError, UnsupportedFormat
from .models import ColorRecord, PaletteRecord
from .reconcile import (
    ColorImportPreview,
    PaletteImportPreview,
    preview_color_import,
    preview_palette_import,
)

ColorEncoder = Callable[[ColorRecord], bytes]
PaletteEncoder = Callable[[PaletteRecord], bytes]


@dataclass(frozen=True)
class ExportFormatDescriptor:
    """Static description of one export format.

    ``is_free`` marks formats available without a subscription. The codec
    exposes the flag but does not enforce it.
    """

    identifier: str
    extension: str
    label: str
    description: str
    is_free: bool
    color_encoder: Optional[ColorEncoder] = None
    palette_encoder: Optional[PaletteEncoder] = None


@dataclass
class ExportResult:
    """Encoded bytes plus the filename callers should save them under."""

    filename: str
    data: bytes
    format: ExportFormatDescriptor


FORMATS: dict[str, ExportFormatDescriptor] = {
    d.identifier: d
    for d in (
        ExportFormatDescriptor(
            identifier=FORMAT_NATIVE_COLOR,
            extension=EXT_NATIVE_COLOR,
            label="Opalite Color",
            description="Native Opalite format. Import back into Opalite on any device.",
            is_free=True,
            color_encoder=native.encode_color,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_NATIVE_PALETTE,
            extension=EXT_NATIVE_PALETTE,
            label="Opalite Palette",
            description="Native Opalite format. Import back into Opalite on any device.",
            is_free=True,
            palette_encoder=native.encode_palette,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_ASE,
            extension=EXT_ASE,
            label="Adobe Swatch Exchange",
            description="Works with Adobe Photoshop, Illustrator, InDesign, and other Adobe apps.",
            is_free=False,
            color_encoder=ase.encode_color_ase,
            palette_encoder=ase.encode_palette_ase,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_PROCREATE,
            extension=EXT_PROCREATE,
            label="Procreate Swatches",
            description="Import directly into Procreate on iPad for digital painting.",
            is_free=False,
            color_encoder=text_formats.encode_color_swatches,
            palette_encoder=text_formats.encode_palette_swatches,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_GPL,
            extension=EXT_GPL,
            label="GIMP Palette",
            description="Works with GIMP, Inkscape, Krita, and other open-source tools.",
            is_free=False,
            color_encoder=text_formats.encode_color_gpl,
            palette_encoder=text_formats.encode_palette_gpl,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_CSS,
            extension=EXT_CSS,
            label="CSS Code",
            description="CSS custom properties ready to paste into your stylesheets.",
            is_free=False,
            color_encoder=text_formats.encode_color_css,
            palette_encoder=text_formats.encode_palette_css,
        ),
        ExportFormatDescriptor(
            identifier=FORMAT_SOURCE_SNIPPET,
            extension=EXT_SOURCE_SNIPPET,
            label="SwiftUI Code",
            description="SwiftUI Color extension ready for your Xcode project.",
            is_free=False,
            color_encoder=text_formats.encode_color_snippet,
            palette_encoder=text_formats.encode_palette_snippet,
        ),
    )
}


def color_formats() -> list[ExportFormatDescriptor]:
    return [d for d in FORMATS.values() if d.color_encoder is not None]


def palette_formats() -> list[ExportFormatDescriptor]:
    return [d for d in FORMATS.values() if d.palette_encoder is not None]


def get_format(format_id: str) -> ExportFormatDescriptor:
    """Look up a descriptor by identifier.

    Raises:
        UnsupportedFormat: If the identifier is unknown.
    """
    try:
        return FORMATS[format_id]
    except KeyError:
        raise UnsupportedFormat(f"Unknown export format: {format_id}") from None


_FILENAME_STRIP = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_filename(name: str) -> str:
    """Turn a display name into a filesystem-safe base name.

    Words are split on whitespace, stripped of characters outside
    ``[A-Za-z0-9_-]``, given an uppercase first letter and joined. An empty
    result becomes ``"Untitled"``.

    >>> sanitize_filename("  ocean   breeze ")
    'OceanBreeze'
    >>> sanitize_filename("???")
    'Untitled'
    """
    words = (_FILENAME_STRIP.sub("", word) for word in name.split())
    sanitized = "".join(word[:1].upper() + word[1:] for word in words)
    return sanitized or UNTITLED


def filename_from_hex(hex_string: str) -> str:
    """Drop the hash from a hex code, e.g. "#FF5733" -> "FF5733"."""
    return hex_string.replace("#", "")


def color_base_name(color: ColorRecord) -> str:
    if color.name and color.name.strip():
        return sanitize_filename(color.name)
    return filename_from_hex(color.hex_string)


def export_color(color: ColorRecord, format_id: str) -> ExportResult:
    """Encode a color in the given format.

    Raises:
        UnsupportedFormat: If the format is unknown or has no color encoder.
        ExportFailed: If the encoder raised.
    """
    descriptor = get_format(format_id)
    if descriptor.color_encoder is None:
        raise UnsupportedFormat(f"Format {format_id} does not export colors")
    try:
        data = descriptor.color_encoder(color)
    except Exception as e:
        raise ExportFailed(e) from e
    filename = f"{color_base_name(color)}.{descriptor.extension}"
    return ExportResult(filename=filename, data=data, format=descriptor)


def export_palette(palette: PaletteRecord, format_id: str) -> ExportResult:
    """Encode a palette in the given format.

    Raises:
        UnsupportedFormat: If the format is unknown or has no palette encoder.
        ExportFailed: If the encoder raised.
    """
    descriptor = get_format(format_id)
    if descriptor.palette_encoder is None:
        raise UnsupportedFormat(f"Format {format_id} does not export palettes")
    try:
        data = descriptor.palette_encoder(palette)
    except Exception as e:
        raise ExportFailed(e) from e
    filename = f"{sanitize_filename(palette.name)}.{descriptor.extension}"
    return ExportResult(filename=filename, data=data, format=descriptor)


def import_color(
    data: Union[bytes, str], existing_colors: Iterable[ColorRecord]
) -> ColorImportPreview:
    """Decode a native color document and check it against existing colors.

    Raises:
        InvalidFormat: If the bytes are not a JSON object.
        MissingRequiredFields: If a required field is absent.
        DecodingFailed: For any other decoding error.
    """
    try:
        color = native.decode_color(data)
    except SharingError:
        raise
    except Exception as e:
        raise DecodingFailed(e) from e
    return preview_color_import(color, existing_colors)


def import_palette(
    data: Union[bytes, str],
    existing_palettes: Iterable[PaletteRecord],
    existing_colors: Iterable[ColorRecord],
) -> PaletteImportPreview:
    """Decode a native palette document and reconcile it with existing
    palettes and colors.

    Raises:
        InvalidFormat: If the bytes are not a JSON object.
        MissingRequiredFields: If a required field is absent.
        DecodingFailed: For any other decoding error.
    """
    try:
        palette = native.decode_palette(data)
    except SharingError:
        raise
    except Exception as e:
        raise DecodingFailed(e) from e
    return preview_palette_import(palette, existing_palettes, existing_colors)


def preview_import(
    filename: str,
    data: Union[bytes, str],
    existing_colors: Iterable[ColorRecord],
    existing_palettes: Iterable[PaletteRecord],
) -> Union[ColorImportPreview, PaletteImportPreview]:
    """Pick the color or palette import path from the file extension.

    Raises:
        InvalidFormat: If the extension is not a native Opalite extension.
    """
    extension = os.path.splitext(filename)[1].lower().lstrip(".")
    if extension == EXT_NATIVE_COLOR:
        return import_color(data, existing_colors)
    if extension == EXT_NATIVE_PALETTE:
        return import_palette(data, existing_palettes, existing_colors)
    raise InvalidFormat()
