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
Utility functions for the interchange codec.

This module provides the byte buffer builder shared by every binary encoder,
CRC-32 calculation, DOS date/time conversion, and safe binary reads.
"""

import struct
from datetime import datetime
from typing import BinaryIO

from .constants import (
    CRC32_INITIAL,
    CRC32_POLYNOMIAL,
    DOS_EPOCH_YEAR,
    DOS_MAX_YEAR_OFFSET,
)
from .errors import ArchiveFormatError


class ByteWriter:
    """Growable byte buffer with fixed-width integer and string packing.

    ASE fields are big-endian while ZIP fields are little-endian, so both
    byte orders are provided. Values are masked to their field width.

    Example:
        w = ByteWriter()
        w.write_bytes(b"ASEF")
        w.write_u16be(1)
        data = w.getvalue()
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def write_bytes(self, data: bytes) -> None:
        self._buffer.extend(data)

    def write_u16be(self, value: int) -> None:
        self._buffer.extend(struct.pack(">H", value & 0xFFFF))

    def write_u32be(self, value: int) -> None:
        self._buffer.extend(struct.pack(">I", value & 0xFFFFFFFF))

    def write_u16le(self, value: int) -> None:
        self._buffer.extend(struct.pack("<H", value & 0xFFFF))

    def write_u32le(self, value: int) -> None:
        self._buffer.extend(struct.pack("<I", value & 0xFFFFFFFF))

    def write_f32be(self, value: float) -> None:
        """Append a 32-bit IEEE-754 float, big-endian."""
        self._buffer.extend(struct.pack(">f", value))

    def write_utf16be(self, text: str) -> int:
        """Append each UTF-16 code unit of ``text`` big-endian, without a BOM.

        Characters outside the BMP are written as surrogate pairs.

        Returns:
            Number of code units written.
        """
        encoded = text.encode("utf-16-be", errors="surrogatepass")
        self._buffer.extend(encoded)
        return len(encoded) // 2

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


def utf16_length(text: str) -> int:
    """Number of UTF-16 code units needed to encode ``text``."""
    return len(text.encode("utf-16-be", errors="surrogatepass")) // 2


def crc32(data: bytes) -> int:
    """Calculate the IEEE 802.3 CRC-32 of data, one bit at a time.

    The register starts at 0xFFFFFFFF, the reflected polynomial 0xEDB88320 is
    applied LSB-first and the result is inverted. This matches the checksum
    stored in ZIP headers.

    Args:
        data: Bytes to calculate CRC32 for.

    Returns:
        CRC32 value as unsigned 32-bit integer.
    """
    crc = CRC32_INITIAL
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ CRC32_POLYNOMIAL
            else:
                crc >>= 1
    return crc ^ 0xFFFFFFFF


def dos_datetime_to_timestamp(dos_date: int, dos_time: int) -> datetime:
    """Convert DOS date and time to Python datetime.

    DOS date format (16 bits):
        Bits 0-4: Day (1-31)
        Bits 5-8: Month (1-12)
        Bits 9-15: Year - 1980 (0-127, so 1980-2107)

    DOS time format (16 bits):
        Bits 0-4: Second / 2 (0-29, so 0-58 seconds in 2-second increments)
        Bits 5-10: Minute (0-59)
        Bits 11-15: Hour (0-23)

    Args:
        dos_date: DOS date value (16-bit unsigned integer).
        dos_time: DOS time value (16-bit unsigned integer).

    Returns:
        datetime object representing the DOS date/time.
    """
    day = dos_date & 0x1F
    month = (dos_date >> 5) & 0x0F
    year = ((dos_date >> 9) & 0x7F) + DOS_EPOCH_YEAR

    second = (dos_time & 0x1F) * 2
    minute = (dos_time >> 5) & 0x3F
    hour = (dos_time >> 11) & 0x1F

    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return datetime(DOS_EPOCH_YEAR, 1, 1, 0, 0, 0)


def dos_datetime(dt: datetime) -> tuple[int, int]:
    """Pack a datetime into DOS (date, time) fields.

    Years before 1980 clamp to 1980, years after 2107 clamp to 2107. Seconds
    are stored at 2-second resolution.

    Args:
        dt: datetime object to convert.

    Returns:
        Tuple of (dos_date, dos_time) as 16-bit unsigned integers.
    """
    year = dt.year - DOS_EPOCH_YEAR
    if year < 0:
        year = 0
    elif year > DOS_MAX_YEAR_OFFSET:
        year = DOS_MAX_YEAR_OFFSET

    dos_date = (year << 9) | (dt.month << 5) | dt.day
    dos_time = (dt.hour << 11) | (dt.minute << 5) | (dt.second // 2)

    return (dos_date & 0xFFFF, dos_time & 0xFFFF)


def read_exact(f: BinaryIO, size: int, error: type = ArchiveFormatError) -> bytes:
    """Read exactly 'size' bytes from a stream, raising ``error`` on short read.

    Args:
        f: Binary file-like object to read from.
        size: Number of bytes to read.
        error: Exception class raised on a short or invalid read.

    Returns:
        Exactly 'size' bytes of data.
    """
    if size < 0:
        raise error(f"Invalid read size: {size} (must be non-negative)")

    data = f.read(size)
    if len(data) != size:
        raise error(
            f"Unexpected end of data: expected {size} bytes, got {len(data)}"
        )
    return data
