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
Import reconciliation.

Compares a decoded record against the caller's existing records by id and
describes what applying the import would do. Nothing here mutates the
caller's collections; the plan functions return data for the caller to act
on.
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .models import ColorRecord, PaletteRecord, utc_now


@dataclass
class ColorImportPreview:
    """A decoded color and the existing color with the same id, if any."""

    color: ColorRecord
    existing_color: Optional[ColorRecord] = None

    @property
    def will_skip(self) -> bool:
        return self.existing_color is not None


@dataclass
class PaletteImportPreview:
    """A decoded palette split into colors the caller lacks and colors it
    already has.

    ``existing_colors`` holds the caller's own instances, not the decoded
    copies.
    """

    palette: PaletteRecord
    existing_palette: Optional[PaletteRecord] = None
    new_colors: list[ColorRecord] = field(default_factory=list)
    existing_colors: list[ColorRecord] = field(default_factory=list)

    @property
    def will_update(self) -> bool:
        return self.existing_palette is not None


@dataclass
class PaletteImportPlan:
    """What applying a palette import amounts to.

    When ``create_palette`` is set the caller creates that palette (it
    already holds ``colors_to_attach``). Otherwise the caller attaches
    ``colors_to_attach`` to the existing palette ``palette_id``.
    """

    palette_id: uuid.UUID
    create_palette: Optional[PaletteRecord]
    colors_to_attach: list[ColorRecord]


def _find(records: Iterable, record_id: uuid.UUID):
    return next((r for r in records if r.id == record_id), None)


def preview_color_import(
    color: ColorRecord, existing_colors: Iterable[ColorRecord]
) -> ColorImportPreview:
    """Classify a decoded color as new or duplicate by id."""
    return ColorImportPreview(color=color, existing_color=_find(existing_colors, color.id))


def preview_palette_import(
    palette: PaletteRecord,
    existing_palettes: Iterable[PaletteRecord],
    existing_colors: Iterable[ColorRecord],
) -> PaletteImportPreview:
    """Classify a decoded palette and partition its colors by id."""
    known = {}
    for color in existing_colors:
        known.setdefault(color.id, color)

    new_colors = []
    found = []
    for color in palette.colors:
        if color.id in known:
            found.append(known[color.id])
        else:
            new_colors.append(color)

    return PaletteImportPreview(
        palette=palette,
        existing_palette=_find(existing_palettes, palette.id),
        new_colors=new_colors,
        existing_colors=found,
    )


def plan_color_import(
    preview: ColorImportPreview, now: Optional[datetime] = None
) -> Optional[ColorRecord]:
    """Return the color to create, or None when the import is skipped.

    The returned copy has ``updated_at`` set to the import time.
    """
    if preview.will_skip:
        return None
    return dataclasses.replace(preview.color, updated_at=now or utc_now())


def plan_palette_import(preview: PaletteImportPreview) -> PaletteImportPlan:
    """Apply policy for a palette import.

    Updating an existing palette only attaches the new colors and leaves
    its metadata alone. Otherwise a new palette is created with the decoded
    metadata and only the new colors; colors that already exist elsewhere
    are dropped from it.
    """
    colors = list(preview.new_colors)
    if preview.will_update:
        return PaletteImportPlan(
            palette_id=preview.existing_palette.id,
            create_palette=None,
            colors_to_attach=colors,
        )

    decoded = preview.palette
    created = dataclasses.replace(
        decoded, colors=colors, tags=list(decoded.tags)
    )
    return PaletteImportPlan(
        palette_id=decoded.id,
        create_palette=created,
        colors_to_attach=colors,
    )
