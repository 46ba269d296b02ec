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
Format constants including signatures, block tags, versions and defaults.

This module defines the constants shared by the binary encoders (ASE and the
swatch archive), the text encoders and the native document codec.
"""

# ZIP signatures (little-endian on disk)
LOCAL_FILE_HEADER = 0x04034B50  # "PK\x03\x04"
CENTRAL_DIR_HEADER = 0x02014B50  # "PK\x01\x02"
END_OF_CENTRAL_DIR = 0x06054B50  # "PK\x05\x06"

# ZIP versions and methods
VERSION_DEFAULT = 20  # 2.0, store only
VERSION_MADE_BY_DEFAULT = 20
COMP_STORED = 0

# Fixed header sizes (excluding variable-length name/extra/comment)
LOCAL_FILE_HEADER_SIZE = 30
CENTRAL_DIR_HEADER_SIZE = 46
END_OF_CENTRAL_DIR_SIZE = 22

# Classic ZIP limits (32-bit)
MAX_FILE_SIZE = 0xFFFFFFFF
MAX_NAME_LENGTH = 0xFFFF

# DOS epoch
DOS_EPOCH_YEAR = 1980
DOS_MAX_YEAR_OFFSET = 127

# CRC-32 (IEEE 802.3, reflected)
CRC32_POLYNOMIAL = 0xEDB88320
CRC32_INITIAL = 0xFFFFFFFF

# Adobe Swatch Exchange
ASE_SIGNATURE = b"ASEF"
ASE_VERSION_MAJOR = 1
ASE_VERSION_MINOR = 0
ASE_BLOCK_COLOR = 0x0001
ASE_BLOCK_GROUP_START = 0xC001
ASE_BLOCK_GROUP_END = 0xC002
ASE_MODEL_RGB = b"RGB "
ASE_COLOR_TYPE_GLOBAL = 0
ASE_COLOR_TYPES = {0: "Global", 1: "Spot", 2: "Process"}
ASE_MODEL_VALUE_COUNTS = {b"RGB ": 3, b"LAB ": 3, b"CMYK": 4, b"Gray": 1}

# Procreate swatches
PROCREATE_MEMBER_NAME = "Swatches.json"
PROCREATE_COLOR_SPACE_RGB = 0

# GIMP palette
GPL_HEADER = "GIMP Palette"
GPL_MAX_COLUMNS = 16

# Text exports
EXPORT_SOURCE_LABEL = "Exported from Opalite"
CSS_DEFAULT_NAME = "color"
SNIPPET_DEFAULT_NAME = "customColor"

# Native documents
NATIVE_JSON_INDENT = 2
UNKNOWN_PROVENANCE = "Unknown"
UNTITLED = "Untitled"

# File extensions
EXT_NATIVE_COLOR = "opalitecolor"
EXT_NATIVE_PALETTE = "opalitepalette"
EXT_ASE = "ase"
EXT_PROCREATE = "swatches"
EXT_GPL = "gpl"
EXT_CSS = "css"
EXT_SOURCE_SNIPPET = "swift"

# Format identifiers
FORMAT_NATIVE_COLOR = "native-color"
FORMAT_NATIVE_PALETTE = "native-palette"
FORMAT_ASE = "ase"
FORMAT_PROCREATE = "procreate"
FORMAT_GPL = "gpl"
FORMAT_CSS = "css"
FORMAT_SOURCE_SNIPPET = "source-snippet"
