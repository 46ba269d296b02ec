"""Tests for the GIMP palette, CSS, source snippet and Procreate encoders."""

import io
import json
import zipfile
from datetime import datetime

import pytest

from opalite_codec.archive import SwatchArchiveFormat
from opalite_codec.models import ColorRecord, PaletteRecord
from opalite_codec.text_formats import (
    camel_identifier,
    css_slug,
    encode_color_css,
    encode_color_gpl,
    encode_color_snippet,
    encode_color_swatches,
    encode_palette_css,
    encode_palette_gpl,
    encode_palette_snippet,
    encode_palette_swatches,
    pascal_identifier,
)


class TestNaming:
    @pytest.mark.parametrize(
        "name,expected",
        [("Sky Blue", "sky-blue"), ("Ocean #2!", "ocean-2"), ("Crème", "crme")],
    )
    def test_css_slug(self, name, expected):
        assert css_slug(name) == expected

    def test_camel_identifier(self):
        assert camel_identifier("sunset ORANGE glow") == "sunsetOrangeGlow"
        assert camel_identifier("  Sky  Blue ") == "skyBlue"

    def test_pascal_identifier(self):
        assert pascal_identifier("ocean breeze 2") == "OceanBreeze2"


class TestGpl:
    def test_color(self, red):
        text = encode_color_gpl(red).decode("utf-8")
        assert text == "GIMP Palette\nName: Red\nColumns: 1\n#\n255   0   0\tRed"

    def test_palette(self, palette):
        lines = encode_palette_gpl(palette).decode("utf-8").split("\n")
        assert lines[:4] == ["GIMP Palette", "Name: Ocean Breeze", "Columns: 2", "#"]
        assert lines[4:] == ["255   0   0\tRed", " 51 128 204\tSky Blue"]

    def test_columns_capped(self):
        colors = [ColorRecord(red=i / 20, green=0, blue=0) for i in range(20)]
        text = encode_palette_gpl(PaletteRecord(name="Ramp", colors=colors)).decode()
        assert "Columns: 16" in text
        assert len(text.split("\n")) == 24

    def test_unnamed_color_uses_hex(self):
        color = ColorRecord(red=0.0, green=0.0, blue=1.0)
        text = encode_color_gpl(color).decode()
        assert "Name: #0000FF" in text
        assert text.endswith("  0   0 255\t#0000FF")


class TestCss:
    def test_opaque_color(self, red):
        assert encode_color_css(red).decode() == (
            "/* Red - Exported from Opalite */\n"
            ":root {\n"
            "  --red: rgb(255, 0, 0);\n"
            "  --red-hex: #FF0000;\n"
            "}"
        )

    def test_translucent_color(self, sky):
        text = encode_color_css(sky).decode()
        assert "  --sky-blue: rgba(51, 128, 204, 0.50);" in text
        assert "  --sky-blue-hex: #3380CC;" in text

    def test_unnamed_color(self):
        text = encode_color_css(ColorRecord(red=0, green=0, blue=0)).decode()
        assert text.startswith("/* color - Exported from Opalite */")
        assert "  --color: rgb(0, 0, 0);" in text

    def test_palette(self, palette):
        text = encode_palette_css(palette).decode()
        assert text.startswith("/* Ocean Breeze - Exported from Opalite */\n:root {")
        assert "  --ocean-breeze-red: rgb(255, 0, 0);" in text
        assert "  --ocean-breeze-sky-blue-hex: #3380CC;" in text
        assert text.endswith("}")


class TestSnippet:
    def test_color(self, red):
        lines = encode_color_snippet(red).decode().split("\n")
        assert lines[0] == "// Red - Exported from Opalite"
        assert "import SwiftUI" in lines
        assert "    static let red = Color(" in lines
        assert "        red: 1.000," in lines
        assert "        opacity: 1.00" in lines
        assert lines[-2:] == ["// Usage: Color.red", "// Hex: #FF0000"]

    def test_unnamed_color(self):
        text = encode_color_snippet(ColorRecord(red=0, green=0, blue=0)).decode()
        assert "static let customColor = Color(" in text

    def test_palette_identifiers(self, palette):
        text = encode_palette_snippet(palette).decode()
        assert "static let oceanBreezeRed = Color(" in text
        assert "static let oceanBreezeSkyBlue = Color(" in text
        assert "        opacity: 0.50" in text
        assert text.endswith("}")


class TestProcreate:
    def _document(self, data):
        member = SwatchArchiveFormat.unwrap(data)
        assert member.name == "Swatches.json"
        return json.loads(member.payload)

    def test_color(self, red):
        document = self._document(encode_color_swatches(red))
        assert document["name"] == "Red"
        assert document["swatches"] == [
            {"hue": 0.0, "saturation": 1.0, "brightness": 1.0, "alpha": 1.0, "colorSpace": 0}
        ]

    def test_palette_hsv(self, palette):
        document = self._document(encode_palette_swatches(palette))
        assert document["name"] == "Ocean Breeze"
        sky = document["swatches"][1]
        assert sky["hue"] == pytest.approx(210 / 360)
        assert sky["saturation"] == pytest.approx(0.75)
        assert sky["brightness"] == pytest.approx(0.8)
        assert sky["alpha"] == 0.5

    def test_archive_is_a_valid_zip(self, palette):
        data = encode_palette_swatches(palette, datetime(2024, 1, 2, 3, 4, 6))
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert zf.namelist() == ["Swatches.json"]
            assert zf.testzip() is None
            assert zf.getinfo("Swatches.json").date_time == (2024, 1, 2, 3, 4, 6)
