"""Tests for native .opalitecolor / .opalitepalette documents."""

import json
import uuid
from datetime import datetime, timezone

import pytest

from opalite_codec.errors import InvalidFormat, MissingRequiredFields
from opalite_codec.models import ColorRecord
from opalite_codec.native import (
    decode_color,
    decode_palette,
    encode_color,
    encode_palette,
    parse_color_document,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
COLOR_ID = "6F9619FF-8B86-D011-B42D-00C04FC964FF"


def _color_obj(**overrides):
    obj = {"id": COLOR_ID, "red": 0.0, "green": 0.5, "blue": 1.0}
    obj.update(overrides)
    return obj


def _close(a, b):
    return abs((a - b).total_seconds()) < 1e-3


class TestColorEncoding:
    def test_keys_and_derived_strings(self, sky):
        document = json.loads(encode_color(sky))
        assert document["id"] == "0B1C2D3E-4F50-4617-8899-AABBCCDDEEFF"
        assert document["name"] == "Sky Blue"
        assert document["hex"] == "#3380CC"
        assert document["hexWithAlpha"] == "#3380CC80"
        assert document["rgb"] == "rgb(51, 128, 204)"
        assert document["rgba"] == "rgba(51, 128, 204, 0.5)"
        assert document["hsl"] == "hsl(210, 60%, 50%)"
        assert document["alpha"] == 0.5
        assert document["createdOnDeviceName"] == "iPad"
        assert document["updatedOnDeviceName"] == "iPhone"

    def test_missing_provenance_becomes_unknown(self, red):
        document = json.loads(encode_color(red))
        assert document["createdByDisplayName"] == "Unknown"
        assert document["createdOnDeviceName"] == "Unknown"
        assert document["updatedOnDeviceName"] == "Unknown"

    def test_timestamps_are_epoch_seconds(self, red):
        document = json.loads(encode_color(red))
        assert document["createdAt"] == pytest.approx(red.created_at.timestamp())

    def test_indented_utf8(self):
        data = encode_color(ColorRecord(red=0, green=0, blue=0, name="Crème"))
        assert "Crème".encode("utf-8") in data
        assert b'\n  "id"' in data


class TestColorDecoding:
    def test_round_trip(self, sky):
        decoded = decode_color(encode_color(sky))
        assert decoded.id == sky.id
        assert decoded.name == sky.name
        assert decoded.notes == sky.notes
        assert (decoded.red, decoded.green, decoded.blue, decoded.alpha) == (0.2, 0.5, 0.8, 0.5)
        assert _close(decoded.created_at, sky.created_at)
        assert _close(decoded.updated_at, sky.updated_at)
        assert decoded.created_by_display_name == "Ada"
        assert decoded.created_on_device_name == "iPad"
        assert decoded.updated_on_device_name == "iPhone"

    def test_missing_channel(self):
        obj = _color_obj()
        del obj["red"]
        with pytest.raises(MissingRequiredFields):
            decode_color(json.dumps(obj))

    @pytest.mark.parametrize("bad", ["0.5", None, True])
    def test_non_numeric_channel(self, bad):
        with pytest.raises(MissingRequiredFields):
            decode_color(json.dumps(_color_obj(green=bad)))

    @pytest.mark.parametrize("bad_id", [None, 42, "not-a-uuid"])
    def test_bad_id(self, bad_id):
        with pytest.raises(MissingRequiredFields):
            decode_color(json.dumps(_color_obj(id=bad_id)))

    @pytest.mark.parametrize("data", [b"garbage", b"[1, 2, 3]", b"", b"\xff\xfe\x00"])
    def test_not_a_json_object(self, data):
        with pytest.raises(InvalidFormat):
            decode_color(data)

    def test_defaults(self):
        color = decode_color(json.dumps(_color_obj()), now=NOW)
        assert color.alpha == 1.0
        assert color.name is None
        assert color.created_at == NOW
        assert color.updated_at == NOW

    def test_channels_clamped(self):
        color = decode_color(json.dumps(_color_obj(red=2.0, blue=-1)))
        assert color.red == 1.0
        assert color.blue == 0.0

    @pytest.mark.parametrize("key", ["createdAt", "updatedAt"])
    def test_oversized_timestamp_falls_back_to_now(self, key):
        obj = _color_obj(**{key: 10**400})
        color = decode_color(json.dumps(obj), now=NOW)
        assert getattr(color, "created_at" if key == "createdAt" else "updated_at") == NOW

    def test_oversized_channels_are_clamped(self):
        obj = _color_obj(red=10**400, green=-(10**400), alpha=10**400)
        color = decode_color(json.dumps(obj))
        assert (color.red, color.green, color.alpha) == (1.0, 0.0, 1.0)

    def test_derived_strings_are_ignored(self):
        color = decode_color(json.dumps(_color_obj(hex="#FFFFFF")))
        assert color.hex_string == "#0080FF"

    def test_typed_document(self):
        document = parse_color_document(_color_obj(name=7, notes="n"), now=NOW)
        assert document.id == uuid.UUID(COLOR_ID)
        assert document.name is None
        assert document.notes == "n"


class TestPalette:
    def test_keys(self, palette):
        document = json.loads(encode_palette(palette))
        assert document["id"] == "11111111-2222-4333-8444-555555555555"
        assert document["tags"] == ["summer", "water"]
        assert document["isPinned"] is False
        assert document["previewBackground"] == "navy"
        assert [c["name"] for c in document["colors"]] == ["Red", "Sky Blue"]

    def test_preview_background_omitted_when_unset(self, palette):
        palette.preview_background = None
        assert "previewBackground" not in json.loads(encode_palette(palette))

    def test_round_trip(self, palette):
        decoded = decode_palette(encode_palette(palette))
        assert decoded.id == palette.id
        assert decoded.name == palette.name
        assert decoded.notes == palette.notes
        assert decoded.tags == palette.tags
        assert decoded.preview_background == "navy"
        assert [c.id for c in decoded.colors] == [c.id for c in palette.colors]
        assert _close(decoded.created_at, palette.created_at)

    def test_blank_name_becomes_untitled(self):
        data = json.dumps({"id": str(uuid.uuid4()), "name": "   "})
        palette = decode_palette(data)
        assert palette.name == "Untitled"
        assert palette.colors == []

    def test_missing_name(self):
        with pytest.raises(MissingRequiredFields):
            decode_palette(json.dumps({"id": str(uuid.uuid4())}))

    def test_one_bad_color_fails_palette(self):
        data = json.dumps(
            {
                "id": str(uuid.uuid4()),
                "name": "Broken",
                "colors": [_color_obj(), {"id": str(uuid.uuid4()), "red": 1}],
            }
        )
        with pytest.raises(MissingRequiredFields):
            decode_palette(data)

    def test_duplicate_color_ids_last_wins(self):
        other = str(uuid.uuid4())
        data = json.dumps(
            {
                "id": str(uuid.uuid4()),
                "name": "Dupes",
                "colors": [
                    _color_obj(name="first"),
                    _color_obj(id=other, name="middle"),
                    _color_obj(name="last"),
                ],
            }
        )
        palette = decode_palette(data)
        assert [c.name for c in palette.colors] == ["last", "middle"]

    def test_loose_optional_fields(self):
        data = json.dumps(
            {
                "id": str(uuid.uuid4()),
                "name": "Loose",
                "tags": ["ok", 3, None],
                "isPinned": "yes",
                "colors": "nope",
            }
        )
        palette = decode_palette(data)
        assert palette.tags == ["ok"]
        assert palette.is_pinned is False
        assert palette.colors == []
