"""
Unit tests for swatch strip rendering.
"""

import base64

import cv2
import numpy as np
import pytest

from chromapick.services.colors.swatches import hex_to_bgr, render_swatch_strip


def _decode(b64_string):
    data = np.frombuffer(base64.b64decode(b64_string), np.uint8)
    return cv2.imdecode(data, cv2.IMREAD_COLOR)


def test_hex_to_bgr():
    assert hex_to_bgr("#6090C0") == (192, 144, 96)


def test_strip_dimensions_and_colors():
    strip = _decode(render_swatch_strip(["#6090C0", "#000000", "#F0F0F0"], chip_size=20))

    assert strip.shape == (20, 60, 3)
    assert tuple(strip[10, 10]) == (192, 144, 96)
    assert tuple(strip[10, 30]) == (0, 0, 0)
    assert tuple(strip[10, 50]) == (240, 240, 240)


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        render_swatch_strip([])


def test_invalid_chip_size_rejected():
    with pytest.raises(ValueError):
        render_swatch_strip(["#000000"], chip_size=0)
