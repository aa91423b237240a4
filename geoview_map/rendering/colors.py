"""
ARGB Colour Helpers
===================

Features store colours as 32-bit ARGB ints (0xAARRGGBB). Drawing goes
through supervision, which wants an sv.Color plus a separate opacity.
"""

import supervision as sv
from typing import Tuple

BLACK = 0xFF000000
WHITE = 0xFFFFFFFF
BLUE = 0xFF0000FF
CYAN = 0xFF00FFFF
TRANSPARENT = 0x00000000


def argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack channels (0-255 each) into an ARGB int."""
    for name, value in (("alpha", alpha), ("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} must be in [0, 255], got {value}")

    return (alpha << 24) | (red << 16) | (green << 8) | blue


def alpha_of(color: int) -> int:
    return (color >> 24) & 0xFF


def to_sv_color(color: int) -> Tuple[sv.Color, float]:
    """
    Split an ARGB int into a supervision colour and an opacity.

    Returns:
        (sv.Color, opacity in [0.0, 1.0])
    """
    rgb = sv.Color(r=(color >> 16) & 0xFF, g=(color >> 8) & 0xFF, b=color & 0xFF)
    return rgb, alpha_of(color) / 255.0


def to_bgr(color: int) -> Tuple[int, int, int]:
    """ARGB int to an OpenCV BGR tuple (alpha dropped)."""
    return (color & 0xFF, (color >> 8) & 0xFF, (color >> 16) & 0xFF)


def parse_color(value) -> int:
    """
    Parse a colour from config.

    Accepts an int (ARGB) or a "#AARRGGBB" / "#RRGGBB" hex string
    (opaque when alpha is omitted).

    Raises:
        ValueError: If the value is not a valid colour
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid colour: {value!r}")

    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"ARGB colour out of range: {value:#x}")
        return value

    if isinstance(value, str) and value.startswith("#"):
        digits = value[1:]
        if len(digits) == 6:
            digits = "FF" + digits
        if len(digits) == 8:
            try:
                return int(digits, 16)
            except ValueError:
                pass

    raise ValueError(f"Invalid colour: {value!r} (expected ARGB int or '#AARRGGBB')")
