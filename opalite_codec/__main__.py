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
Command line interface for the Opalite interchange codec.

Usage examples:
    python -m opalite_codec formats
    python -m opalite_codec export Ocean.opalitepalette --format ase -o out/
    python -m opalite_codec preview Ocean.opalitepalette --library library/
    python -m opalite_codec inspect out/Ocean.ase

Notes:
- The codec itself works on bytes; this module does the file reading and
  writing around it.
- Errors are reported on stderr and the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .constants import EXT_NATIVE_COLOR, EXT_NATIVE_PALETTE
from .debug import dump_structure
from .errors import InvalidFormat, SharingError
from .formats import FORMATS, export_color, export_palette, preview_import
from .models import ColorRecord, PaletteRecord, all_colors, palette_index
from .native import decode_color, decode_palette
from .reconcile import (
    ColorImportPreview,
    plan_color_import,
    plan_palette_import,
)


def _print_error(message: str, exit_code: int = 1, suggestion: Optional[str] = None) -> None:
    """Print an error message to stderr and exit with the given code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use.
        suggestion: Optional suggestion to help the user resolve the error.
    """
    sys.stderr.write(f"opalite-codec: {message}\n")
    if suggestion:
        sys.stderr.write(f"opalite-codec: Suggestion: {suggestion}\n")
    sys.exit(exit_code)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        _print_error(f"Cannot read {path}: {e}")


def _extension(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


def _load_library(directory: Optional[Path]) -> tuple[List[ColorRecord], List[PaletteRecord]]:
    """Decode every native file in ``directory`` into existing record sets."""
    colors: List[ColorRecord] = []
    palettes: List[PaletteRecord] = []
    if directory is None:
        return colors, palettes
    if not directory.is_dir():
        _print_error(f"Library directory not found: {directory}")

    for path in sorted(directory.iterdir()):
        extension = _extension(path)
        if extension == EXT_NATIVE_COLOR:
            colors.append(decode_color(_read_bytes(path)))
        elif extension == EXT_NATIVE_PALETTE:
            palettes.append(decode_palette(_read_bytes(path)))
    return all_colors(colors, palettes), palettes


def _cmd_formats() -> None:
    for descriptor in FORMATS.values():
        kinds = []
        if descriptor.color_encoder is not None:
            kinds.append("color")
        if descriptor.palette_encoder is not None:
            kinds.append("palette")
        tier = "free" if descriptor.is_free else "pro"
        print(
            f"{descriptor.identifier:<16} .{descriptor.extension:<16} "
            f"{'/'.join(kinds):<14} {tier:<5} {descriptor.label}"
        )


def _cmd_export(input_path: Path, format_id: str, output_dir: Path) -> None:
    data = _read_bytes(input_path)
    extension = _extension(input_path)
    if extension == EXT_NATIVE_COLOR:
        result = export_color(decode_color(data), format_id)
    elif extension == EXT_NATIVE_PALETTE:
        result = export_palette(decode_palette(data), format_id)
    else:
        raise InvalidFormat(f"Cannot export from .{extension} files")

    target = output_dir / result.filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(result.data)
    except OSError as e:
        _print_error(f"Cannot write {target}: {e}")
    print(f"{target} ({len(result.data)} bytes, {result.format.label})")


def _describe_color(color: ColorRecord) -> dict:
    return {"id": str(color.id), "name": color.name, "hex": color.hex_string}


def _cmd_preview(input_path: Path, library: Optional[Path]) -> None:
    existing_colors, existing_palettes = _load_library(library)
    preview = preview_import(
        input_path.name, _read_bytes(input_path), existing_colors, existing_palettes
    )

    if isinstance(preview, ColorImportPreview):
        planned = plan_color_import(preview)
        report = {
            "kind": "color",
            "color": _describe_color(preview.color),
            "willSkip": preview.will_skip,
            "create": _describe_color(planned) if planned else None,
        }
    else:
        plan = plan_palette_import(preview)
        owners = palette_index(existing_palettes)
        report = {
            "kind": "palette",
            "id": str(preview.palette.id),
            "name": preview.palette.name,
            "willUpdate": preview.will_update,
            "newColors": [_describe_color(c) for c in preview.new_colors],
            "existingColors": [
                dict(_describe_color(c), palette=str(owners[c.id]) if c.id in owners else None)
                for c in preview.existing_colors
            ],
            "createPalette": plan.create_palette is not None,
            "attachTo": str(plan.palette_id),
        }
    print(json.dumps(report, indent=2, ensure_ascii=False))


def _cmd_inspect(input_path: Path) -> None:
    print(dump_structure(input_path.name, _read_bytes(input_path)))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opalite-codec",
        description="Export, preview and inspect Opalite color and palette files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("formats", help="List the supported export formats")

    export = sub.add_parser("export", help="Convert a native file to another format")
    export.add_argument("input", type=Path, help=".opalitecolor or .opalitepalette file")
    export.add_argument("--format", "-f", required=True, choices=sorted(FORMATS), help="Export format id")
    export.add_argument("--output-dir", "-o", type=Path, default=Path("."), help="Directory for the exported file")

    preview = sub.add_parser("preview", help="Show what importing a native file would do")
    preview.add_argument("input", type=Path, help=".opalitecolor or .opalitepalette file")
    preview.add_argument("--library", "-l", type=Path, help="Directory of native files treated as existing records")

    inspect = sub.add_parser("inspect", help="Dump the structure of an exported file")
    inspect.add_argument("input", type=Path, help=".ase, .swatches or native file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "formats":
            _cmd_formats()
        elif args.command == "export":
            _cmd_export(args.input, args.format, args.output_dir)
        elif args.command == "preview":
            _cmd_preview(args.input, args.library)
        elif args.command == "inspect":
            _cmd_inspect(args.input)
    except SharingError as e:
        _print_error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
