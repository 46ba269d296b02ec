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
Debugging utilities for exported files.

This module renders the structure of ASE files, swatch archives and native
documents as text. Nothing here writes output; callers print the strings.
"""

import io
import json
import os
from typing import Optional

from .archive import SwatchArchiveFormat
from .ase import parse_ase
from .constants import (
    ASE_BLOCK_COLOR,
    ASE_BLOCK_GROUP_END,
    ASE_BLOCK_GROUP_START,
    EXT_ASE,
    EXT_NATIVE_COLOR,
    EXT_NATIVE_PALETTE,
    EXT_PROCREATE,
)
from .errors import InvalidFormat, SharingError
from .native import load_document
from .structures import (
    parse_central_directory_header,
    parse_eocd,
    parse_local_file_header,
)

_BLOCK_NAMES = {
    ASE_BLOCK_COLOR: "color",
    ASE_BLOCK_GROUP_START: "group start",
    ASE_BLOCK_GROUP_END: "group end",
}


def hex_dump(data: bytes, offset: int = 0, length: Optional[int] = None) -> str:
    """Create a hex dump of binary data.

    Args:
        data: Binary data to dump.
        offset: Starting offset for display.
        length: Maximum length to dump (None for all).

    Returns:
        Formatted hex dump string.
    """
    if length is not None:
        data = data[:length]

    lines = []
    for i in range(0, len(data), 16):
        chunk = data[i : i + 16]
        hex_part = " ".join(f"{b:02X}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{offset + i:08X}  {hex_part:<48}  {ascii_part}")

    return "\n".join(lines)


def dump_ase_structure(data: bytes) -> str:
    """Describe every block of an ASE file.

    Raises:
        AseFormatError: If the data is not a valid ASE file.
    """
    blocks = parse_ase(data)
    output = [f"ASE File Structure ({len(data)} bytes)", "=" * 80]
    output.append(f"\nBlocks: {len(blocks)}")
    for i, block in enumerate(blocks):
        kind = _BLOCK_NAMES.get(block.block_type, f"0x{block.block_type:04X}")
        line = f"  [{i}] {kind}"
        if block.name is not None:
            line += f" name={block.name!r}"
        if block.model is not None:
            values = ", ".join(f"{v:.4f}" for v in block.values)
            line += f" {block.model}({values}) {block.color_type}"
        output.append(line)
    return "\n".join(output)


def dump_archive_structure(data: bytes) -> str:
    """Describe the headers of a single-entry swatch archive.

    Raises:
        ArchiveFormatError: If the archive structure is invalid.
    """
    member = SwatchArchiveFormat.unwrap(data)
    output = [f"Swatch Archive Structure ({len(data)} bytes)", "=" * 80]

    f = io.BytesIO(data)
    eocd_pos = data.rfind(b"PK\x05\x06")
    f.seek(eocd_pos)
    eocd = parse_eocd(f)
    f.seek(eocd.cd_offset)
    central = parse_central_directory_header(f)
    f.seek(central.local_header_offset)
    local = parse_local_file_header(f)
    output.append(f"\nLocal File Header: 0x{central.local_header_offset:08X}")
    output.append(f"  Name: {local.filename.decode('utf-8', errors='replace')}")
    output.append(f"  Version needed: {local.version}")
    output.append(f"  Method: {local.compression_method}")
    output.append(f"  Modified: {local.date_time.isoformat()}")
    output.append(f"  CRC32: 0x{local.crc32:08X}")
    output.append(f"  Size: {local.compressed_size} / {local.uncompressed_size}")

    output.append(f"\nCentral Directory Header: 0x{eocd.cd_offset:08X}")
    output.append(f"  Local header offset: {central.local_header_offset}")
    output.append(f"  CRC32: 0x{central.crc32:08X}")

    output.append(f"\nEnd of Central Directory: 0x{eocd_pos:08X}")
    output.append(f"  Entries: {eocd.cd_records_total}")
    output.append(f"  Central directory size: {eocd.cd_size}")

    output.append(f"\nPayload ({len(member.payload)} bytes, CRC OK):")
    output.append(hex_dump(member.payload, length=256))
    return "\n".join(output)


def dump_native_document(data: bytes) -> str:
    """Summarize a native color or palette document.

    Raises:
        InvalidFormat: If the data is not a JSON object.
    """
    document = load_document(data)
    output = ["Native Document", "=" * 80]
    output.append(f"\nid: {document.get('id')}")
    output.append(f"name: {document.get('name')}")
    colors = document.get("colors")
    if isinstance(colors, list):
        output.append(f"colors: {len(colors)}")
        for i, color in enumerate(colors):
            if isinstance(color, dict):
                output.append(f"  [{i}] {color.get('hex')} {color.get('name')}")
            else:
                output.append(f"  [{i}] (not an object)")
    else:
        output.append(f"hex: {document.get('hex')}")
    output.append(f"\nkeys: {json.dumps(sorted(document))}")
    return "\n".join(output)


def dump_structure(filename: str, data: bytes) -> str:
    """Dispatch to the dump function matching the file extension.

    Raises:
        InvalidFormat: If the extension is not one the codec produces.
    """
    extension = os.path.splitext(filename)[1].lower().lstrip(".")
    if extension == EXT_ASE:
        return dump_ase_structure(data)
    if extension == EXT_PROCREATE:
        return dump_archive_structure(data)
    if extension in (EXT_NATIVE_COLOR, EXT_NATIVE_PALETTE):
        return dump_native_document(data)
    raise InvalidFormat(f"No structure dump for .{extension} files")


def verify_archive(data: bytes) -> tuple[bool, list[str]]:
    """Verify a swatch archive reads back with a matching CRC.

    Returns:
        Tuple of (is_valid, list_of_errors).
    """
    errors = []
    try:
        SwatchArchiveFormat.unwrap(data)
    except SharingError as e:
        errors.append(f"Error reading archive: {e}")
    return len(errors) == 0, errors
