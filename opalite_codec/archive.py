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
Minimal single-entry ZIP container for swatch exports.

Procreate expects a ``.swatches`` file to be a ZIP holding one JSON member.
This module builds that archive byte for byte (store only, no compression)
and reads it back for verification.
"""

import io
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import (
    CENTRAL_DIR_HEADER,
    COMP_STORED,
    END_OF_CENTRAL_DIR,
    END_OF_CENTRAL_DIR_SIZE,
    LOCAL_FILE_HEADER,
    MAX_FILE_SIZE,
    MAX_NAME_LENGTH,
    VERSION_DEFAULT,
    VERSION_MADE_BY_DEFAULT,
)
from .errors import ArchiveCrcError, ArchiveFormatError
from .structures import (
    parse_central_directory_header,
    parse_eocd,
    parse_local_file_header,
)
from .utils import ByteWriter, crc32, dos_datetime, read_exact


@dataclass
class ArchiveMember:
    """The single member read back from a swatch archive."""

    name: str
    payload: bytes
    date_time: datetime
    crc32: int


class SwatchArchiveFormat:
    """Builder and reader for single-entry store-only ZIP archives.

    Example:
        data = SwatchArchiveFormat.wrap("Swatches.json", payload)
        member = SwatchArchiveFormat.unwrap(data)
    """

    @staticmethod
    def _encode_name(name: str) -> bytes:
        if not name:
            raise ArchiveFormatError("Entry name cannot be empty")
        if "\x00" in name:
            raise ArchiveFormatError("Entry name cannot contain null bytes")
        name_bytes = name.encode("utf-8")
        if len(name_bytes) > MAX_NAME_LENGTH:
            raise ArchiveFormatError(
                f"Entry name too long: {len(name_bytes)} bytes (max {MAX_NAME_LENGTH})"
            )
        return name_bytes

    @classmethod
    def wrap(
        cls, name: str, payload: bytes, date_time: Optional[datetime] = None
    ) -> bytes:
        """Wrap ``payload`` as the only member of a ZIP archive.

        Args:
            name: Member name inside the archive.
            payload: Member bytes, stored uncompressed.
            date_time: Modification time to record; defaults to now.

        Returns:
            Complete archive bytes.

        Raises:
            ArchiveFormatError: If the name is empty or too long, or the
                payload does not fit a classic (non-ZIP64) archive.
        """
        name_bytes = cls._encode_name(name)
        if len(payload) > MAX_FILE_SIZE:
            raise ArchiveFormatError(
                f"Payload too large: {len(payload)} bytes (max {MAX_FILE_SIZE})"
            )

        mod_date, mod_time = dos_datetime(date_time or datetime.now())
        entry_crc32 = crc32(payload)
        size = len(payload)

        w = ByteWriter()

        # Local file header, then the stored bytes
        w.write_u32le(LOCAL_FILE_HEADER)
        w.write_u16le(VERSION_DEFAULT)  # Version needed to extract
        w.write_u16le(0)  # General purpose bit flags
        w.write_u16le(COMP_STORED)
        w.write_u16le(mod_time)
        w.write_u16le(mod_date)
        w.write_u32le(entry_crc32)
        w.write_u32le(size)  # Compressed size
        w.write_u32le(size)  # Uncompressed size
        w.write_u16le(len(name_bytes))
        w.write_u16le(0)  # Extra field length
        w.write_bytes(name_bytes)
        w.write_bytes(payload)

        # Central directory
        cd_offset = len(w)
        w.write_u32le(CENTRAL_DIR_HEADER)
        w.write_u16le(VERSION_MADE_BY_DEFAULT)
        w.write_u16le(VERSION_DEFAULT)
        w.write_u16le(0)  # General purpose bit flags
        w.write_u16le(COMP_STORED)
        w.write_u16le(mod_time)
        w.write_u16le(mod_date)
        w.write_u32le(entry_crc32)
        w.write_u32le(size)
        w.write_u32le(size)
        w.write_u16le(len(name_bytes))
        w.write_u16le(0)  # Extra field length
        w.write_u16le(0)  # Comment length
        w.write_u16le(0)  # Disk number start
        w.write_u16le(0)  # Internal attributes
        w.write_u32le(0)  # External attributes
        w.write_u32le(0)  # Local header offset, single entry at start
        w.write_bytes(name_bytes)
        cd_size = len(w) - cd_offset

        # End of central directory
        w.write_u32le(END_OF_CENTRAL_DIR)
        w.write_u16le(0)  # Number of this disk
        w.write_u16le(0)  # Disk with start of central directory
        w.write_u16le(1)  # Entries on this disk
        w.write_u16le(1)  # Total entries
        w.write_u32le(cd_size)
        w.write_u32le(cd_offset)
        w.write_u16le(0)  # Comment length

        return w.getvalue()

    @staticmethod
    def unwrap(data: bytes) -> ArchiveMember:
        """Read the single member of a store-only archive.

        Args:
            data: Archive bytes.

        Returns:
            ArchiveMember with the decoded name and payload.

        Raises:
            ArchiveFormatError: If the structure is invalid, the archive has
                more than one entry or the member is compressed.
            ArchiveCrcError: If the payload does not match the stored CRC-32.
        """
        eocd_pos = data.rfind(b"PK\x05\x06")
        if eocd_pos == -1 or len(data) - eocd_pos < END_OF_CENTRAL_DIR_SIZE:
            raise ArchiveFormatError("End of Central Directory record not found")

        f = io.BytesIO(data)
        f.seek(eocd_pos)
        eocd = parse_eocd(f)

        if eocd.cd_records_total != 1:
            raise ArchiveFormatError(
                f"Expected a single-entry archive, found {eocd.cd_records_total} entries"
            )
        if eocd.cd_offset + eocd.cd_size > eocd_pos:
            raise ArchiveFormatError(
                f"Central directory extends beyond its end record: offset "
                f"{eocd.cd_offset}, size {eocd.cd_size} (end record at {eocd_pos})"
            )

        f.seek(eocd.cd_offset)
        cd_header = parse_central_directory_header(f)

        if cd_header.local_header_offset >= eocd.cd_offset:
            raise ArchiveFormatError(
                f"Invalid local header offset: {cd_header.local_header_offset}"
            )
        f.seek(cd_header.local_header_offset)
        local_header = parse_local_file_header(f)

        if local_header.compression_method != COMP_STORED:
            raise ArchiveFormatError(
                f"Unsupported compression method: {local_header.compression_method}"
            )
        if local_header.compressed_size != local_header.uncompressed_size:
            raise ArchiveFormatError(
                "Stored entry sizes differ: "
                f"{local_header.compressed_size} != {local_header.uncompressed_size}"
            )
        if local_header.filename != cd_header.filename:
            raise ArchiveFormatError("Local and central directory names differ")

        payload = read_exact(f, local_header.compressed_size)

        actual_crc = crc32(payload)
        if actual_crc != cd_header.crc32:
            raise ArchiveCrcError(
                f"CRC32 mismatch: expected 0x{cd_header.crc32:08X}, got 0x{actual_crc:08X}"
            )

        return ArchiveMember(
            name=local_header.filename.decode("utf-8", errors="replace"),
            payload=payload,
            date_time=local_header.date_time,
            crc32=actual_crc,
        )
