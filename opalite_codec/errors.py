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
Custom exception classes for the color/palette interchange codec.

This module defines specific exception types for the export and import
boundary, plus the errors raised by the archive and ASE readers.
"""


class SharingError(Exception):
    """Base exception class for all codec errors."""

    pass


class InvalidFormat(SharingError):
    """Raised when raw bytes are not a parseable structured document.

    This exception is raised when:
    - The bytes are not valid JSON (or not decodable text at all)
    - The top-level value is not a JSON object
    - An import file has an extension the codec does not read
    """

    def __init__(self, message: str = "The file format is invalid or corrupted."):
        super().__init__(message)


class MissingRequiredFields(SharingError):
    """Raised when a document parsed but lacked a required field.

    Required fields are the identifier, the red/green/blue channels of a
    color and the name of a palette.
    """

    def __init__(self, message: str = "The file is missing required data."):
        super().__init__(message)


class ExportFailed(SharingError):
    """Raised when an encoder failed while producing export bytes.

    The original exception is kept on ``cause``.
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to export: {cause}")


class DecodingFailed(SharingError):
    """Raised for any decode error not classified as a format or field error.

    The original exception is kept on ``cause``.
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to read file: {cause}")


class UnsupportedFormat(SharingError):
    """Raised when an export format identifier is unknown or does not apply
    to the kind of record being exported."""

    pass


class ArchiveFormatError(SharingError):
    """Raised when swatch archive bytes have an invalid structure.

    This exception is raised when:
    - Required signatures are missing or incorrect
    - Offsets or sizes point outside the buffer
    - The archive uses compression or holds more than one entry
    """

    pass


class ArchiveCrcError(ArchiveFormatError):
    """Raised when the CRC-32 of an archive member does not match the
    value stored in its headers."""

    pass


class AseFormatError(SharingError):
    """Raised when ASE bytes have a bad signature, version or block layout."""

    pass
