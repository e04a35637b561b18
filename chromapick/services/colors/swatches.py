"""
Swatch Rendering Module

Renders an extracted palette as a horizontal strip of solid color chips,
returned as a base64 PNG for clients that want a ready-made preview.
"""

import base64
from typing import List, Tuple

import cv2
import numpy as np
from loguru import logger

from .formatting import hex_to_rgb


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    r, g, b = hex_to_rgb(hex_color)
    return (b, g, r)


def render_swatch_strip(hex_colors: List[str], chip_size: int = 40) -> str:
    """
    Render a horizontal strip of color swatches.

    Args:
        hex_colors: Palette colors in display order
        chip_size: Edge length of each square chip in pixels

    Returns:
        Base64-encoded PNG image string

    Raises:
        ValueError: If the palette is empty or chip_size is not positive
        RuntimeError: If PNG encoding fails
    """
    if not hex_colors:
        raise ValueError("Empty hex_colors list provided")
    if chip_size <= 0:
        raise ValueError(f"chip_size must be positive, got {chip_size}")

    k = len(hex_colors)
    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)

    for i, hex_color in enumerate(hex_colors):
        x_start = i * chip_size
        img[:, x_start:x_start + chip_size, :] = hex_to_bgr(hex_color)

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch strip as PNG")

    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded swatch strip: {chip_size * k}x{chip_size} -> {len(b64_string)} chars")
    return b64_string
