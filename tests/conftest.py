"""
Test configuration and fixtures for Chromapick tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from chromapick.utils.metrics import reset_metrics


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics_state():
    """Reset metrics before each test."""
    reset_metrics()


def solid_bitmap(width, height, rgba):
    """Build an RGBA bitmap filled with a single color."""
    bitmap = np.zeros((height, width, 4), dtype=np.uint8)
    bitmap[:, :] = rgba
    return bitmap


def dominant_bitmap(width=100, height=100):
    """90% mid-tone blue on top, 10% near-black strip at the bottom."""
    bitmap = solid_bitmap(width, height, (100, 150, 200, 255))
    bitmap[int(height * 0.9):, :] = (10, 10, 10, 255)
    return bitmap


def encode_png(bitmap):
    """Encode an RGBA bitmap as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(bitmap).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def dominant_png():
    return encode_png(dominant_bitmap())


@pytest.fixture
def white_png():
    return encode_png(solid_bitmap(64, 64, (255, 255, 255, 255)))
