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
Channel helpers and color space conversions used by the encoders.

All channels are normalized floats; hue values are returned in turns [0, 1).
"""

import math


def clamp_unit(value: float) -> float:
    """Clamp a channel value to [0.0, 1.0]. NaN clamps to 0.0."""
    if value != value:
        return 0.0
    return max(0.0, min(1.0, float(value)))


def to_byte(value: float) -> int:
    """Convert a normalized channel to 0-255, rounding halves away from zero."""
    return int(math.floor(clamp_unit(value) * 255 + 0.5))


def _hue(r: float, g: float, b: float, max_val: float, delta: float) -> float:
    if max_val == r:
        h = (g - b) / delta + (6 if g < b else 0)
    elif max_val == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4
    return h / 6


def rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB to HSV using the max/min/delta formula.

    Returns:
        Tuple of (hue, saturation, value), each in [0, 1]; hue is in turns.
    """
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    delta = max_val - min_val

    s = 0.0 if max_val == 0 else delta / max_val
    h = 0.0 if delta == 0 else _hue(r, g, b, max_val, delta)
    return (h, s, max_val)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB to HSL.

    Returns:
        Tuple of (hue, saturation, lightness), each in [0, 1]; hue is in turns.
    """
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    delta = max_val - min_val
    lightness = (max_val + min_val) / 2

    if delta == 0:
        return (0.0, 0.0, lightness)

    if lightness > 0.5:
        s = delta / (2 - max_val - min_val)
    else:
        s = delta / (max_val + min_val)
    return (_hue(r, g, b, max_val, delta), s, lightness)
