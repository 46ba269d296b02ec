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
Text-based export formats.

GIMP palette, CSS custom properties, a SwiftUI-flavored source snippet and
Procreate swatches (JSON wrapped in the swatch archive). Every encoder
returns UTF-8 bytes.
"""

import json
import re
from datetime import datetime
from typing import Optional

from .archive import SwatchArchiveFormat
from .colorspace import rgb_to_hsv
from .constants import (
    CSS_DEFAULT_NAME,
    EXPORT_SOURCE_LABEL,
    GPL_HEADER,
    GPL_MAX_COLUMNS,
    NATIVE_JSON_INDENT,
    PROCREATE_COLOR_SPACE_RGB,
    PROCREATE_MEMBER_NAME,
    SNIPPET_DEFAULT_NAME,
)
from .models import ColorRecord, PaletteRecord

_CSS_STRIP = re.compile(r"[^a-z0-9-]")
_IDENT_STRIP = re.compile(r"[^a-zA-Z0-9]")


def css_slug(name: str) -> str:
    """Lowercase, spaces to hyphens, drop everything outside [a-z0-9-]."""
    return _CSS_STRIP.sub("", name.lower().replace(" ", "-"))


def camel_identifier(name: str) -> str:
    """First word lowercased, later words capitalized, non-alphanumerics removed."""
    words = name.split()
    joined = "".join(
        word.lower() if index == 0 else word.capitalize()
        for index, word in enumerate(words)
    )
    return _IDENT_STRIP.sub("", joined)


def pascal_identifier(name: str) -> str:
    return _IDENT_STRIP.sub("", "".join(word.capitalize() for word in name.split()))


# GIMP palette


def _gpl_line(color: ColorRecord) -> str:
    r, g, b = color.rgb_bytes
    return f"{r:3d} {g:3d} {b:3d}\t{color.display_name}"


def _gpl(name: str, columns: int, colors: list[ColorRecord]) -> bytes:
    lines = [GPL_HEADER, f"Name: {name}", f"Columns: {columns}", "#"]
    lines.extend(_gpl_line(color) for color in colors)
    return "\n".join(lines).encode("utf-8")


def encode_color_gpl(color: ColorRecord) -> bytes:
    return _gpl(color.display_name, 1, [color])


def encode_palette_gpl(palette: PaletteRecord) -> bytes:
    columns = min(len(palette.colors), GPL_MAX_COLUMNS)
    return _gpl(palette.name, columns, palette.colors)


# CSS


def _css_properties(var_name: str, color: ColorRecord) -> list[str]:
    r, g, b = color.rgb_bytes
    alpha = color.channels[3]
    if alpha < 1.0:
        value = f"rgba({r}, {g}, {b}, {alpha:.2f})"
    else:
        value = f"rgb({r}, {g}, {b})"
    return [
        f"  {var_name}: {value};",
        f"  {var_name}-hex: {color.hex_string};",
    ]


def encode_color_css(color: ColorRecord) -> bytes:
    name = color.name if color.name and color.name.strip() else CSS_DEFAULT_NAME
    lines = [f"/* {name} - {EXPORT_SOURCE_LABEL} */", ":root {"]
    lines.extend(_css_properties(f"--{css_slug(name)}", color))
    lines.append("}")
    return "\n".join(lines).encode("utf-8")


def encode_palette_css(palette: PaletteRecord) -> bytes:
    palette_slug = css_slug(palette.name)
    lines = [f"/* {palette.name} - {EXPORT_SOURCE_LABEL} */", ":root {"]
    for color in palette.colors:
        var_name = f"--{palette_slug}-{css_slug(color.display_name)}"
        lines.extend(_css_properties(var_name, color))
    lines.append("}")
    return "\n".join(lines).encode("utf-8")


# Source snippet (SwiftUI flavored, output only)


def _snippet_constant(identifier: str, color: ColorRecord, indent: str) -> list[str]:
    r, g, b, a = color.channels
    return [
        f"{indent}static let {identifier} = Color(",
        f"{indent}    red: {r:.3f},",
        f"{indent}    green: {g:.3f},",
        f"{indent}    blue: {b:.3f},",
        f"{indent}    opacity: {a:.2f}",
        f"{indent})",
    ]


def encode_color_snippet(color: ColorRecord) -> bytes:
    name = color.name if color.name and color.name.strip() else SNIPPET_DEFAULT_NAME
    identifier = camel_identifier(name)
    lines = [
        f"// {name} - {EXPORT_SOURCE_LABEL}",
        "import SwiftUI",
        "",
        "extension Color {",
    ]
    lines.extend(_snippet_constant(identifier, color, "    "))
    lines.extend(
        [
            "}",
            "",
            f"// Usage: Color.{identifier}",
            f"// Hex: {color.hex_string}",
        ]
    )
    return "\n".join(lines).encode("utf-8")


def encode_palette_snippet(palette: PaletteRecord) -> bytes:
    prefix = pascal_identifier(palette.name)
    prefix = prefix[:1].lower() + prefix[1:]
    lines = [
        f"// {palette.name} - {EXPORT_SOURCE_LABEL}",
        "import SwiftUI",
        "",
        "extension Color {",
    ]
    for color in palette.colors:
        suffix = camel_identifier(color.display_name)
        identifier = prefix + suffix[:1].upper() + suffix[1:]
        lines.extend(_snippet_constant(identifier, color, "    "))
        lines.append("")
    lines.append("}")
    return "\n".join(lines).encode("utf-8")


# Procreate swatches


def _swatch(color: ColorRecord) -> dict:
    r, g, b, a = color.channels
    h, s, v = rgb_to_hsv(r, g, b)
    return {
        "hue": h,
        "saturation": s,
        "brightness": v,
        "alpha": a,
        "colorSpace": PROCREATE_COLOR_SPACE_RGB,
    }


def _swatches(
    name: str, colors: list[ColorRecord], date_time: Optional[datetime]
) -> bytes:
    document = {"name": name, "swatches": [_swatch(color) for color in colors]}
    payload = json.dumps(
        document, indent=NATIVE_JSON_INDENT, ensure_ascii=False
    ).encode("utf-8")
    return SwatchArchiveFormat.wrap(PROCREATE_MEMBER_NAME, payload, date_time)


def encode_color_swatches(
    color: ColorRecord, date_time: Optional[datetime] = None
) -> bytes:
    return _swatches(color.display_name, [color], date_time)


def encode_palette_swatches(
    palette: PaletteRecord, date_time: Optional[datetime] = None
) -> bytes:
    return _swatches(palette.name, palette.colors, date_time)
