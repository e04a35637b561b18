"""
Unit tests for upload validation and image decoding.
"""

import io

import numpy as np
import pytest
from fastapi import HTTPException
from PIL import Image

from chromapick.services.colors.extraction import Color, extract_palette
from chromapick.services.imaging import decode_image_bytes
from conftest import encode_png, solid_bitmap


def _encode(image, fmt):
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


class TestDecodeImageBytes:

    def test_png_rgba_preserved(self):
        bitmap = solid_bitmap(12, 8, (10, 20, 30, 40))
        decoded = decode_image_bytes(encode_png(bitmap))

        assert decoded.shape == (8, 12, 4)
        assert decoded.dtype == np.uint8
        np.testing.assert_array_equal(decoded, bitmap)

    def test_rgb_gets_opaque_alpha(self):
        image = Image.new("RGB", (5, 5), (100, 150, 200))
        decoded = decode_image_bytes(_encode(image, "PNG"))

        assert decoded.shape == (5, 5, 4)
        assert np.all(decoded[:, :, 3] == 255)

    def test_palette_gif_decoded(self):
        image = Image.new("RGB", (6, 4), (255, 0, 0)).convert("P")
        decoded = decode_image_bytes(_encode(image, "GIF"))

        assert decoded.shape == (4, 6, 4)
        assert tuple(decoded[0, 0, :3]) == (255, 0, 0)

    def test_16bit_grayscale_rescaled(self):
        samples = np.full((20, 20), 30000, dtype=np.uint16)
        decoded = decode_image_bytes(_encode(Image.fromarray(samples), "PNG"))

        assert decoded.dtype == np.uint8
        # 30000 / 257 = 116.7
        assert tuple(decoded[0, 0]) == (117, 117, 117, 255)
        assert extract_palette(decoded, 3) == [Color(120, 120, 120)]

    def test_16bit_extremes_map_to_8bit_extremes(self):
        samples = np.zeros((4, 8), dtype=np.uint16)
        samples[:, 4:] = 65535
        decoded = decode_image_bytes(_encode(Image.fromarray(samples), "PNG"))

        assert tuple(decoded[0, 0, :3]) == (0, 0, 0)
        assert tuple(decoded[0, 7, :3]) == (255, 255, 255)

    def test_decompression_bomb_rejected(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        bitmap = solid_bitmap(30, 30, (10, 20, 30, 255))

        with pytest.raises(HTTPException) as exc_info:
            decode_image_bytes(encode_png(bitmap))
        assert exc_info.value.status_code == 400
        assert "too large" in exc_info.value.detail

    def test_garbage_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_image_bytes(b"definitely not an image")
        assert exc_info.value.status_code == 400

    def test_empty_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_image_bytes(b"")
        assert exc_info.value.status_code == 400
