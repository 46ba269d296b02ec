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
Record layouts of the single-entry swatch archive.

Each record is a fixed little-endian prefix described by a ``struct.Struct``
followed by variable-length fields whose sizes the prefix carries. Only the
fields the reader validates or the debug dump shows are kept.
"""

import struct
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO

from .constants import (
    CENTRAL_DIR_HEADER,
    CENTRAL_DIR_HEADER_SIZE,
    END_OF_CENTRAL_DIR,
    END_OF_CENTRAL_DIR_SIZE,
    LOCAL_FILE_HEADER,
    LOCAL_FILE_HEADER_SIZE,
)
from .errors import ArchiveFormatError
from .utils import dos_datetime_to_timestamp, read_exact

# signature, version, flags, method, time, date, crc, sizes, name/extra lengths
_LOCAL = struct.Struct("<IHHHHHIIIHH")
# as above with version made by first, plus comment length, disk, attributes
# and the local header offset
_CENTRAL = struct.Struct("<IHHHHHHIIIHHHHHII")
_EOCD = struct.Struct("<IHHHHIIH")


@dataclass
class LocalFileHeader:
    version: int
    flags: int
    compression_method: int
    mod_time: int
    mod_date: int
    crc32: int
    compressed_size: int
    uncompressed_size: int
    filename: bytes

    @property
    def date_time(self) -> datetime:
        return dos_datetime_to_timestamp(self.mod_date, self.mod_time)


@dataclass
class CentralDirectoryHeader:
    version_made_by: int
    compression_method: int
    crc32: int
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int
    filename: bytes


@dataclass
class EndOfCentralDirectory:
    cd_records_on_disk: int
    cd_records_total: int
    cd_size: int
    cd_offset: int


def _unpack(
    f: BinaryIO, layout: struct.Struct, size: int, expected: int, what: str
) -> tuple:
    # layout.size must equal the fixed record size
    fields = layout.unpack(read_exact(f, size))
    if fields[0] != expected:
        raise ArchiveFormatError(
            f"Invalid {what} signature: 0x{fields[0]:08X} (expected 0x{expected:08X})"
        )
    return fields


def parse_local_file_header(f: BinaryIO) -> LocalFileHeader:
    """Parse a local file header at the current stream position.

    The stream is left at the start of the member data.

    Raises:
        ArchiveFormatError: If the signature is invalid or data is truncated.
    """
    fields = _unpack(
        f, _LOCAL, LOCAL_FILE_HEADER_SIZE, LOCAL_FILE_HEADER, "local file header"
    )
    (_, version, flags, method, mod_time, mod_date, crc, csize, usize,
     name_len, extra_len) = fields
    filename = read_exact(f, name_len)
    read_exact(f, extra_len)
    return LocalFileHeader(
        version=version,
        flags=flags,
        compression_method=method,
        mod_time=mod_time,
        mod_date=mod_date,
        crc32=crc,
        compressed_size=csize,
        uncompressed_size=usize,
        filename=filename,
    )


def parse_central_directory_header(f: BinaryIO) -> CentralDirectoryHeader:
    """Parse a central directory header at the current stream position.

    Raises:
        ArchiveFormatError: If the signature is invalid or data is truncated.
    """
    fields = _unpack(
        f, _CENTRAL, CENTRAL_DIR_HEADER_SIZE, CENTRAL_DIR_HEADER, "central directory header"
    )
    name_len, extra_len, comment_len = fields[10:13]
    filename = read_exact(f, name_len)
    read_exact(f, extra_len + comment_len)
    return CentralDirectoryHeader(
        version_made_by=fields[1],
        compression_method=fields[4],
        crc32=fields[7],
        compressed_size=fields[8],
        uncompressed_size=fields[9],
        local_header_offset=fields[16],
        filename=filename,
    )


def parse_eocd(f: BinaryIO) -> EndOfCentralDirectory:
    """Parse an End of Central Directory record at the current position.

    Raises:
        ArchiveFormatError: If the signature is invalid or data is truncated.
    """
    fields = _unpack(
        f, _EOCD, END_OF_CENTRAL_DIR_SIZE, END_OF_CENTRAL_DIR, "end of central directory"
    )
    _, _, _, on_disk, total, cd_size, cd_offset, comment_len = fields
    read_exact(f, comment_len)
    return EndOfCentralDirectory(
        cd_records_on_disk=on_disk,
        cd_records_total=total,
        cd_size=cd_size,
        cd_offset=cd_offset,
    )
