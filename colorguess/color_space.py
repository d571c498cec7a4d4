"""Hue/saturation color model and the pixel <-> color mapping of the heatmap."""

import colorsys
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from colorguess.constants import HUE_RANGE, LIGHTNESS, PLACEHOLDER_HSL, SATURATION_RANGE
from colorguess.utils import clamp

_HSL_PATTERN = re.compile(
    r"^\s*hsl\(\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)%?\s*,\s*([-+0-9.eE]+)%?\s*\)\s*$"
)
_HEX_PATTERN = re.compile(r"^\s*#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})\s*$")


@dataclass(frozen=True)
class Color:
    """A color on the game's hue/saturation plane (lightness is fixed at 50)."""

    hue: float
    saturation: float
    lightness: float = LIGHTNESS

    def to_rgb(self) -> Tuple[int, int, int]:
        return hsl_to_rgb(self.hue, self.saturation, self.lightness)

    def to_css(self) -> str:
        """Textual hsl() form used for persistence. Float repr keeps it lossless."""
        return f"hsl({float(self.hue)!r}, {float(self.saturation)!r}%, {float(self.lightness)!r}%)"

    def describe(self) -> str:
        """Short label like 'H:120° S:45%' for result panels."""
        return f"H:{round_half_up(self.hue)}° S:{round_half_up(self.saturation)}%"


PLACEHOLDER_COLOR = Color(*PLACEHOLDER_HSL)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Tuple[int, int, int]:
    """
    Convert HSL (degrees, percent, percent) to an 8-bit RGB triple.

    Uses the chroma form a = s * min(l, 1 - l) with channel functions at
    offsets 0, 8 and 4 over a 12-periodic ramp.
    """
    h = hue / HUE_RANGE
    s = saturation / 100.0
    l = lightness / 100.0

    a = s * min(l, 1 - l)

    def channel(n: int) -> int:
        k = (n + h * 12) % 12
        value = l - a * max(min(k - 3, 9 - k, 1), -1)
        return int(clamp(round_half_up(value * 255), 0, 255))

    return (channel(0), channel(8), channel(4))


def hsl_to_rgb_array(hue: np.ndarray, saturation: np.ndarray, lightness: float = LIGHTNESS) -> np.ndarray:
    """Vectorised hsl_to_rgb. Returns a uint8 array with a trailing RGB axis."""
    h = np.asarray(hue, dtype=np.float64) / HUE_RANGE
    s = np.asarray(saturation, dtype=np.float64) / 100.0
    h, s = np.broadcast_arrays(h, s)
    l = lightness / 100.0

    a = s * min(l, 1 - l)
    channels = []
    for n in (0, 8, 4):
        k = (n + h * 12) % 12
        ramp = np.maximum(np.minimum(np.minimum(k - 3, 9 - k), 1), -1)
        channels.append(np.floor((l - a * ramp) * 255 + 0.5))

    return np.clip(np.stack(channels, axis=-1), 0, 255).astype(np.uint8)


def position_to_color(px: float, py: float, width: float, height: float) -> Color:
    """
    Map a surface position to the color drawn there.

    Hue runs left to right across the full spectrum, saturation top (0%) to
    bottom (100%). Callers clamp to [0, width] x [0, height] first; the right
    edge px == width maps to hue 360, which is equivalent to 0.
    """
    hue = HUE_RANGE * px / width
    saturation = SATURATION_RANGE * py / height
    return Color(float(hue), float(saturation))


def color_to_position(color: Color, width: float, height: float) -> Tuple[float, float]:
    """Inverse of position_to_color, used to place result markers."""
    return (
        (color.hue % HUE_RANGE) / HUE_RANGE * width,
        color.saturation / SATURATION_RANGE * height
    )


def clamp_to_surface(px: float, py: float, width: float, height: float) -> Tuple[float, float]:
    """Clamp a pointer position to the surface rectangle."""
    return (clamp(px, 0, width), clamp(py, 0, height))


def hue_distance(hue_a: float, hue_b: float) -> float:
    """Circular distance between two hues in degrees, in [0, 180]."""
    diff = abs(hue_a - hue_b) % HUE_RANGE
    return min(diff, HUE_RANGE - diff)


def parse_color(text) -> Optional[Color]:
    """
    Parse a persisted color string.

    Accepts 'hsl(h, s%, l%)' and, for records written by older versions,
    '#rgb' / '#rrggbb'. Hues outside [0, 360] are wrapped; saturation or
    lightness outside [0, 100] makes the string unparseable (None).
    """
    if not isinstance(text, str):
        return None

    match = _HSL_PATTERN.match(text)
    if match:
        try:
            hue, saturation, lightness = (float(g) for g in match.groups())
        except ValueError:
            return None
        if not all(math.isfinite(v) for v in (hue, saturation, lightness)):
            return None
        if not (0 <= saturation <= 100 and 0 <= lightness <= 100):
            return None
        if not 0 <= hue <= HUE_RANGE:
            hue %= HUE_RANGE
        return Color(hue, saturation, lightness)

    match = _HEX_PATTERN.match(text)
    if match:
        raw = match.group(1)
        if len(raw) == 3:
            raw = "".join(ch * 2 for ch in raw)
        r, g, b = (int(raw[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return Color(h * HUE_RANGE, s * 100.0, l * 100.0)

    return None
