"""
Color formatting helpers for palette presentation.

HEX/RGB text output and a relative-luminance test for picking readable
text on top of a swatch.
"""

from typing import Tuple

# Text colors placed over light and dark swatches
DARK_TEXT = "#1A1209"
LIGHT_TEXT = "#FAFAFA"

LUMINANCE_THRESHOLD = 0.179


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to an uppercase ``#RRGGBB`` string."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert ``#RRGGBB`` (or ``RRGGBB``) to an RGB tuple."""
    value = hex_color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    try:
        return tuple(int(value[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color!r}") from None


def format_rgb(r: int, g: int, b: int) -> str:
    """CSS-style decimal text, e.g. ``rgb(96, 144, 192)``."""
    return f"rgb({int(r)}, {int(g)}, {int(b)})"


def linearize_channel(value: int) -> float:
    """Convert an 8-bit sRGB channel to linear light."""
    s = value / 255
    return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """WCAG relative luminance in [0, 1]."""
    return (0.2126 * linearize_channel(r)
            + 0.7152 * linearize_channel(g)
            + 0.0722 * linearize_channel(b))


def choose_text_color(r: int, g: int, b: int) -> str:
    """Dark text on light swatches, light text on dark ones."""
    if relative_luminance(r, g, b) > LUMINANCE_THRESHOLD:
        return DARK_TEXT
    return LIGHT_TEXT
