"""
Chromapick Imaging Utilities
Handles upload validation and decoding of images into RGBA bitmaps.
"""
import io

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from chromapick.config import config

NOT_AN_IMAGE = (
    "That file doesn't look like an image. "
    "Please choose a PNG, JPG, GIF, WEBP, or similar file."
)
UNDECODABLE = "Could not decode the image. The file might be corrupt or an unsupported format."
TOO_LARGE = "Image dimensions are too large to process."

# Integer modes wider than 8 bits per sample; convert() would clip them instead of scaling
HIGH_DEPTH_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Raises:
        HTTPException: 415 for non-image content types, 400 for oversize files
    """
    content_type = file.content_type or ""
    if not content_type.startswith(config.SUPPORTED_MIME_PREFIX):
        raise HTTPException(status_code=415, detail=NOT_AN_IMAGE)

    # file.size might be None for some clients
    if file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )


def decode_image_bytes(file_bytes: bytes) -> np.ndarray:
    """
    Decode raw image bytes into an RGBA bitmap.

    Multi-frame formats contribute their first frame.

    Returns:
        numpy array of shape (H, W, 4), dtype uint8

    Raises:
        HTTPException: 400 when the bytes are not a decodable raster
    """
    if not file_bytes:
        raise HTTPException(status_code=400, detail=UNDECODABLE)

    try:
        with Image.open(io.BytesIO(file_bytes)) as pil_image:
            pil_image.load()
            if pil_image.mode in HIGH_DEPTH_MODES:
                rgba = _to_8bit_gray(pil_image).convert("RGBA")
            else:
                rgba = pil_image.convert("RGBA")
    except Image.DecompressionBombError as e:
        raise HTTPException(status_code=400, detail=TOO_LARGE) from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise HTTPException(status_code=400, detail=UNDECODABLE) from e

    return np.array(rgba, dtype=np.uint8)


def _to_8bit_gray(pil_image: Image.Image) -> Image.Image:
    """Rescale a 16-bit grayscale image to 8 bits (0..65535 -> 0..255)."""
    samples = np.asarray(pil_image).astype(np.float64) / 257.0
    return Image.fromarray(np.clip(samples, 0, 255).round().astype(np.uint8))


async def read_image(file: UploadFile) -> np.ndarray:
    """
    Validate, read and decode an uploaded image.

    Returns:
        RGBA bitmap (H, W, 4) uint8

    Raises:
        HTTPException: 400/415 for invalid uploads
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    return decode_image_bytes(file_bytes)
