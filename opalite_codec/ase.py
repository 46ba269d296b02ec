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
Adobe Swatch Exchange (ASE) encoder and block parser.

File layout (all multi-byte fields big-endian):
    "ASEF" | u16 major | u16 minor | u32 block count | blocks...

Each block is a u16 type, a u32 body length and the body. Color and
group-start bodies begin with a UTF-16BE name prefixed by its length in code
units, including the null terminator. Group-end blocks have an empty body.
"""

import io
import struct
from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    ASE_BLOCK_COLOR,
    ASE_BLOCK_GROUP_END,
    ASE_BLOCK_GROUP_START,
    ASE_COLOR_TYPE_GLOBAL,
    ASE_COLOR_TYPES,
    ASE_MODEL_RGB,
    ASE_MODEL_VALUE_COUNTS,
    ASE_SIGNATURE,
    ASE_VERSION_MAJOR,
    ASE_VERSION_MINOR,
)
from .errors import AseFormatError
from .models import ColorRecord, PaletteRecord
from .utils import ByteWriter, read_exact, utf16_length


@dataclass
class AseBlock:
    """One parsed ASE block."""

    block_type: int
    name: Optional[str] = None
    model: Optional[str] = None
    values: list[float] = field(default_factory=list)
    color_type: Optional[str] = None


def _write_header(w: ByteWriter, block_count: int) -> None:
    w.write_bytes(ASE_SIGNATURE)
    w.write_u16be(ASE_VERSION_MAJOR)
    w.write_u16be(ASE_VERSION_MINOR)
    w.write_u32be(block_count)


def _write_name(w: ByteWriter, name: str) -> None:
    length = utf16_length(name) + 1  # null terminator
    if length > 0xFFFF:
        raise AseFormatError(f"Swatch name too long: {length} UTF-16 code units")
    w.write_u16be(length)
    w.write_utf16be(name)
    w.write_u16be(0)


def _write_block(w: ByteWriter, block_type: int, body: bytes) -> None:
    w.write_u16be(block_type)
    w.write_u32be(len(body))
    w.write_bytes(body)


def _color_body(color: ColorRecord) -> bytes:
    # Alpha has no representation in ASE and is dropped
    r, g, b, _ = color.channels
    body = ByteWriter()
    _write_name(body, color.display_name)
    body.write_bytes(ASE_MODEL_RGB)
    body.write_f32be(r)
    body.write_f32be(g)
    body.write_f32be(b)
    body.write_u16be(ASE_COLOR_TYPE_GLOBAL)
    return body.getvalue()


def encode_color_ase(color: ColorRecord) -> bytes:
    """Encode a single color as a one-block ASE file."""
    w = ByteWriter()
    _write_header(w, 1)
    _write_block(w, ASE_BLOCK_COLOR, _color_body(color))
    return w.getvalue()


def encode_palette_ase(palette: PaletteRecord) -> bytes:
    """Encode a palette as one ASE group.

    The block count is ``len(colors) + 2``: a group-start block carrying the
    palette name, one color block per color, and a zero-length group-end
    block.
    """
    w = ByteWriter()
    _write_header(w, len(palette.colors) + 2)

    group = ByteWriter()
    _write_name(group, palette.name)
    _write_block(w, ASE_BLOCK_GROUP_START, group.getvalue())

    for color in palette.colors:
        _write_block(w, ASE_BLOCK_COLOR, _color_body(color))

    _write_block(w, ASE_BLOCK_GROUP_END, b"")
    return w.getvalue()


def _parse_body(block_type: int, body: bytes) -> AseBlock:
    block = AseBlock(block_type=block_type)
    if not body:
        return block

    f = io.BytesIO(body)
    name_len = struct.unpack(">H", read_exact(f, 2, AseFormatError))[0]
    raw_name = read_exact(f, name_len * 2, AseFormatError)
    block.name = raw_name.decode("utf-16-be", errors="replace").rstrip("\x00")

    model = f.read(4)
    if not model:
        return block
    if model not in ASE_MODEL_VALUE_COUNTS:
        raise AseFormatError(f"Unknown color model: {model!r}")
    count = ASE_MODEL_VALUE_COUNTS[model]
    block.model = model.decode("ascii").strip()
    block.values = list(
        struct.unpack(f">{count}f", read_exact(f, 4 * count, AseFormatError))
    )
    color_type = struct.unpack(">H", read_exact(f, 2, AseFormatError))[0]
    block.color_type = ASE_COLOR_TYPES.get(color_type, str(color_type))
    return block


def parse_ase(data: bytes) -> list[AseBlock]:
    """Parse ASE bytes into a flat list of blocks.

    Raises:
        AseFormatError: If the signature or version is wrong, or a block is
            truncated.
    """
    f = io.BytesIO(data)
    header = read_exact(f, 12, AseFormatError)
    signature, major, minor, block_count = struct.unpack(">4sHHI", header)
    if signature != ASE_SIGNATURE:
        raise AseFormatError(f"Invalid ASE signature: {signature!r}")
    if (major, minor) != (ASE_VERSION_MAJOR, ASE_VERSION_MINOR):
        raise AseFormatError(f"Unsupported ASE version: {major}.{minor}")

    blocks = []
    for _ in range(block_count):
        block_type, length = struct.unpack(">HI", read_exact(f, 6, AseFormatError))
        if block_type not in (ASE_BLOCK_COLOR, ASE_BLOCK_GROUP_START, ASE_BLOCK_GROUP_END):
            raise AseFormatError(f"Unknown block type: 0x{block_type:04X}")
        body = read_exact(f, length, AseFormatError)
        blocks.append(_parse_body(block_type, body))

    if f.read(1):
        raise AseFormatError("Trailing data after last block")
    return blocks
