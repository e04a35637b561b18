"""
Chromapick API Schemas
Pydantic models for palette extraction request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("chromapick", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


class SwatchEntry(BaseModel):
    """Single palette color with its display strings."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-F]{6}$",
        description="Uppercase hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Channel values [r, g, b], each 0-255"
    )
    rgb_text: str = Field(..., description="Decimal representation, e.g. 'rgb(96, 144, 192)'")
    text_color: str = Field(
        ...,
        pattern=r"^#[0-9A-F]{6}$",
        description="Readable text color to place over this swatch"
    )


class PaletteDebug(BaseModel):
    """Fixed pipeline parameters used for the extraction."""
    target_size: int = Field(..., description="Maximum edge of the working bitmap")
    sample_stride: int = Field(..., description="One pixel in this many is examined")
    alpha_threshold: int = Field(..., description="Pixels with lower alpha are skipped")
    bucket_step: int = Field(..., description="Channel quantization step")
    unique_threshold: int = Field(..., description="Minimum RGB distance between palette colors")


class PaletteArtifacts(BaseModel):
    """Optional rendered outputs."""
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG strip of the palette colors"
    )


class PaletteResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    width: int = Field(..., description="Decoded image width in pixels")
    height: int = Field(..., description="Decoded image height in pixels")
    working_width: int = Field(..., description="Width after downscaling")
    working_height: int = Field(..., description="Height after downscaling")
    requested_count: int = Field(..., ge=1, description="Palette size requested")
    count: int = Field(..., ge=0, description="Number of colors returned")
    sampled_pixels: int = Field(..., description="Pixels examined at the sampling stride")
    accepted_pixels: int = Field(..., description="Sampled pixels that passed the alpha and extreme filters")
    bucket_count: int = Field(..., description="Distinct quantized colors found")
    palette: List[SwatchEntry] = Field(
        ...,
        description="Colors ordered from most to least frequent"
    )
    empty: bool = Field(..., description="True when no palette could be extracted")
    message: Optional[str] = Field(
        None,
        description="User-facing explanation when the palette is empty"
    )
    debug: PaletteDebug = Field(..., description="Pipeline parameters")
    artifacts: Optional[PaletteArtifacts] = Field(None, description="Optional rendered artifacts")
