"""Tests for the format table and the export/import entry points."""

import json
import uuid

import pytest

from opalite_codec.errors import (
    DecodingFailed,
    ExportFailed,
    InvalidFormat,
    MissingRequiredFields,
    SharingError,
    UnsupportedFormat,
)
from opalite_codec.formats import (
    FORMATS,
    color_formats,
    export_color,
    export_palette,
    filename_from_hex,
    get_format,
    import_color,
    import_palette,
    palette_formats,
    preview_import,
    sanitize_filename,
)
from opalite_codec.models import ColorRecord, PaletteRecord
from opalite_codec.reconcile import ColorImportPreview, PaletteImportPreview


class TestFormatTable:
    def test_identifiers(self):
        assert set(FORMATS) == {
            "native-color",
            "native-palette",
            "ase",
            "procreate",
            "gpl",
            "css",
            "source-snippet",
        }

    def test_only_native_formats_are_free(self):
        free = {d.identifier for d in FORMATS.values() if d.is_free}
        assert free == {"native-color", "native-palette"}

    def test_kinds(self):
        assert "native-palette" not in {d.identifier for d in color_formats()}
        assert "native-color" not in {d.identifier for d in palette_formats()}
        assert len(color_formats()) == len(palette_formats()) == 6

    def test_extensions(self):
        assert get_format("procreate").extension == "swatches"
        assert get_format("source-snippet").extension == "swift"

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormat):
            get_format("pdf")


class TestFilenames:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("ocean breeze", "OceanBreeze"),
            ("  sunset  ", "Sunset"),
            ("a/b\\c:d", "Abcd"),
            ("été", "T"),
            ("", "Untitled"),
            ("***", "Untitled"),
        ],
    )
    def test_sanitize(self, name, expected):
        assert sanitize_filename(name) == expected

    @pytest.mark.parametrize("name", ["ocean breeze", "Crème brûlée", "x-y_z 9", ""])
    def test_sanitize_is_idempotent(self, name):
        once = sanitize_filename(name)
        assert sanitize_filename(once) == once

    def test_filename_from_hex(self):
        assert filename_from_hex("#FF5733") == "FF5733"


class TestExport:
    def test_named_color(self, sky):
        result = export_color(sky, "css")
        assert result.filename == "SkyBlue.css"
        assert result.format is FORMATS["css"]
        assert b"--sky-blue" in result.data

    def test_unnamed_color_uses_hex(self):
        result = export_color(ColorRecord(red=1.0, green=0.0, blue=0.0), "gpl")
        assert result.filename == "FF0000.gpl"

    def test_palette(self, palette):
        result = export_palette(palette, "ase")
        assert result.filename == "OceanBreeze.ase"
        assert result.data[:4] == b"ASEF"

    @pytest.mark.parametrize("format_id", sorted(FORMATS))
    def test_every_format_produces_bytes(self, palette, red, format_id):
        descriptor = FORMATS[format_id]
        if descriptor.color_encoder is not None:
            assert export_color(red, format_id).data
        if descriptor.palette_encoder is not None:
            assert export_palette(palette, format_id).data

    def test_wrong_kind(self, red, palette):
        with pytest.raises(UnsupportedFormat):
            export_color(red, "native-palette")
        with pytest.raises(UnsupportedFormat):
            export_palette(palette, "native-color")

    def test_encoder_failure_is_wrapped(self):
        color = ColorRecord(red=0, green=0, blue=0, name="x" * 70000)
        with pytest.raises(ExportFailed) as excinfo:
            export_color(color, "ase")
        assert isinstance(excinfo.value, SharingError)
        assert excinfo.value.cause is not None
        assert str(excinfo.value).startswith("Failed to export: ")


class TestImport:
    def test_color_round_trip(self, sky):
        data = export_color(sky, "native-color").data
        preview = import_color(data, [])
        assert preview.color.id == sky.id
        assert not preview.will_skip
        assert import_color(data, [sky]).will_skip

    def test_palette_round_trip(self, palette, red):
        data = export_palette(palette, "native-palette").data
        preview = import_palette(data, [], [red])
        assert not preview.will_update
        assert preview.existing_colors == [red]
        assert [c.name for c in preview.new_colors] == ["Sky Blue"]

    def test_garbage(self):
        with pytest.raises(InvalidFormat):
            import_color(b"\x00garbage", [])

    def test_missing_fields_propagate(self):
        with pytest.raises(MissingRequiredFields):
            import_palette(json.dumps({"name": "x"}), [], [])

    def test_oversized_numbers_decode(self):
        data = json.dumps(
            {
                "id": str(uuid.uuid4()),
                "red": 10**400,
                "green": 0,
                "blue": 0,
                "createdAt": 10**400,
            }
        )
        preview = import_color(data, [])
        assert preview.color.hex_string == "#FF0000"

    def test_other_errors_are_wrapped(self):
        with pytest.raises(DecodingFailed) as excinfo:
            import_color(12345, [])
        assert str(excinfo.value).startswith("Failed to read file: ")


class TestPreviewImport:
    def test_dispatch_color(self, red):
        data = export_color(red, "native-color").data
        assert isinstance(preview_import("Red.opalitecolor", data, [], []), ColorImportPreview)

    def test_dispatch_palette_case_insensitive(self, palette):
        data = export_palette(palette, "native-palette").data
        preview = preview_import("Ocean.OpalitePalette", data, [], [palette])
        assert isinstance(preview, PaletteImportPreview)
        assert preview.will_update

    @pytest.mark.parametrize("filename", ["palette.ase", "notes.txt", "noextension"])
    def test_other_extensions(self, filename):
        with pytest.raises(InvalidFormat):
            preview_import(filename, b"{}", [], [])

    def test_empty_palette_exports(self):
        palette = PaletteRecord(name="Nothing", id=uuid.uuid4())
        for descriptor in palette_formats():
            assert export_palette(palette, descriptor.identifier).filename.startswith("Nothing.")
