"""Shared fixtures for the opalite_codec test suite."""

import uuid
from datetime import datetime, timezone

import pytest

from opalite_codec.models import ColorRecord, PaletteRecord

FIXED_TIME = datetime(2025, 12, 21, 14, 30, 10, 250000, tzinfo=timezone.utc)


@pytest.fixture
def red():
    return ColorRecord(
        id=uuid.UUID("6F9619FF-8B86-D011-B42D-00C04FC964FF"),
        name="Red",
        red=1.0,
        green=0.0,
        blue=0.0,
        alpha=1.0,
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


@pytest.fixture
def sky():
    return ColorRecord(
        id=uuid.UUID("0B1C2D3E-4F50-4617-8899-AABBCCDDEEFF"),
        name="Sky Blue",
        notes="Morning sky",
        red=0.2,
        green=0.5,
        blue=0.8,
        alpha=0.5,
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
        created_by_display_name="Ada",
        created_on_device_name="iPad",
        updated_on_device_name="iPhone",
    )


@pytest.fixture
def palette(red, sky):
    return PaletteRecord(
        id=uuid.UUID("11111111-2222-4333-8444-555555555555"),
        name="Ocean Breeze",
        colors=[red, sky],
        notes="Beach day",
        tags=["summer", "water"],
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
        created_by_display_name="Ada",
        preview_background="navy",
    )
