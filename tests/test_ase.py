"""Tests for the Adobe Swatch Exchange encoder and parser."""

import struct

import pytest

from opalite_codec.ase import encode_color_ase, encode_palette_ase, parse_ase
from opalite_codec.errors import AseFormatError
from opalite_codec.models import ColorRecord, PaletteRecord


def _utf16_name(name):
    return struct.pack(">H", len(name) + 1) + name.encode("utf-16-be") + b"\x00\x00"


class TestColorEncoding:
    def test_exact_bytes(self, red):
        data = encode_color_ase(red)
        body = _utf16_name("Red") + b"RGB " + struct.pack(">fff", 1.0, 0.0, 0.0) + b"\x00\x00"
        expected = (
            b"ASEF\x00\x01\x00\x00\x00\x00\x00\x01"
            + b"\x00\x01"
            + struct.pack(">I", len(body))
            + body
        )
        assert data == expected

    def test_header_prefix(self, red):
        data = encode_color_ase(red)
        assert data[:14] == bytes.fromhex("4153454600010000000000010001")

    def test_unnamed_color_uses_hex(self):
        color = ColorRecord(red=1.0, green=0.5, blue=0.0, name="  ")
        blocks = parse_ase(encode_color_ase(color))
        assert blocks[0].name == "#FF8000"

    def test_channels_are_clamped(self):
        color = ColorRecord(red=1.5, green=-0.2, blue=0.25, name="Out")
        block = parse_ase(encode_color_ase(color))[0]
        assert block.values == [1.0, 0.0, 0.25]

    def test_alpha_is_dropped(self, sky):
        block = parse_ase(encode_color_ase(sky))[0]
        assert block.model == "RGB"
        assert len(block.values) == 3
        assert block.color_type == "Global"

    def test_non_bmp_name(self):
        color = ColorRecord(red=0.0, green=0.0, blue=0.0, name="Ink \U0001F3A8")
        data = encode_color_ase(color)
        # 4 BMP units + 2 surrogate units + terminator
        assert struct.unpack(">H", data[18:20])[0] == 7
        assert parse_ase(data)[0].name == "Ink \U0001F3A8"


class TestPaletteEncoding:
    def test_block_count_and_order(self, palette):
        data = encode_palette_ase(palette)
        assert struct.unpack(">I", data[8:12])[0] == len(palette.colors) + 2
        blocks = parse_ase(data)
        assert [b.block_type for b in blocks] == [0xC001, 0x0001, 0x0001, 0xC002]
        assert blocks[0].name == "Ocean Breeze"
        assert [b.name for b in blocks[1:3]] == ["Red", "Sky Blue"]

    def test_group_end_has_zero_length(self, palette):
        data = encode_palette_ase(palette)
        assert data[-6:] == b"\xc0\x02\x00\x00\x00\x00"

    def test_empty_palette(self):
        data = encode_palette_ase(PaletteRecord(name="Empty"))
        blocks = parse_ase(data)
        assert [b.block_type for b in blocks] == [0xC001, 0xC002]


class TestParse:
    def test_bad_signature(self, red):
        data = b"ASEX" + encode_color_ase(red)[4:]
        with pytest.raises(AseFormatError):
            parse_ase(data)

    def test_truncated(self, red):
        with pytest.raises(AseFormatError):
            parse_ase(encode_color_ase(red)[:-3])

    def test_trailing_data(self, red):
        with pytest.raises(AseFormatError):
            parse_ase(encode_color_ase(red) + b"\x00")
