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
OPALITE CODEC - Pure Python color/palette interchange codec.

Encodes color and palette records to ASE, Procreate swatches, GIMP palette,
CSS, source snippets and the native Opalite document format, and decodes
native documents back with duplicate-aware import previews. Bytes in, bytes
out; no file or network I/O.
"""

__version__ = "0.1.0"

from .archive import ArchiveMember, SwatchArchiveFormat
from .errors import (
    DecodingFailed,
    ExportFailed,
    InvalidFormat,
    MissingRequiredFields,
    SharingError,
    UnsupportedFormat,
)
from .formats import (
    FORMATS,
    ExportFormatDescriptor,
    ExportResult,
    export_color,
    export_palette,
    filename_from_hex,
    import_color,
    import_palette,
    preview_import,
    sanitize_filename,
)
from .models import ColorRecord, PaletteRecord
from .reconcile import (
    ColorImportPreview,
    PaletteImportPlan,
    PaletteImportPreview,
    plan_color_import,
    plan_palette_import,
)

__all__ = [
    "ArchiveMember",
    "ColorImportPreview",
    "ColorRecord",
    "DecodingFailed",
    "ExportFailed",
    "ExportFormatDescriptor",
    "ExportResult",
    "FORMATS",
    "InvalidFormat",
    "MissingRequiredFields",
    "PaletteImportPlan",
    "PaletteImportPreview",
    "PaletteRecord",
    "SharingError",
    "SwatchArchiveFormat",
    "UnsupportedFormat",
    "export_color",
    "export_palette",
    "filename_from_hex",
    "import_color",
    "import_palette",
    "plan_color_import",
    "plan_palette_import",
    "preview_import",
    "sanitize_filename",
]
