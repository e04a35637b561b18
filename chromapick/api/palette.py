"""
Chromapick Palette API Routes
Implements /palette/extract and supporting routes.
"""
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from chromapick.config import config
from chromapick.schemas import ErrorResponse, PaletteResponse
from chromapick.services.colors.extract_api import handle_extract
from chromapick.utils.metrics import get_metrics

router = APIRouter(prefix="/palette", tags=["Palette"])


@router.post(
    "/extract",
    response_model=PaletteResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Corrupt, oversized or undecodable image"},
        415: {"model": ErrorResponse, "description": "Upload is not an image"},
    },
)
async def extract_palette_endpoint(
    file: UploadFile = File(..., description="Image to extract colors from"),
    count: int = Query(
        config.DEFAULT_COLOR_COUNT,
        ge=1,
        le=config.MAX_COLOR_COUNT,
        description="Number of colors to extract"
    ),
    include_swatch: bool = Query(False, description="Include a PNG swatch strip in the response")
) -> PaletteResponse:
    """
    Extract a small, visually distinct palette from an uploaded image.

    - **file**: any raster image Pillow can decode (PNG, JPG, GIF, WEBP, ...)
    - **count**: maximum number of colors to return
    - **include_swatch**: render the palette as a base64 PNG strip

    Colors are ordered from most to least frequent. Images that are fully
    transparent or a single near-white/near-black tone return an empty
    palette with ``empty=true`` and an explanatory message.
    """
    params = {
        'count': count,
        'include_swatch': include_swatch
    }
    return await handle_extract(file=file, params=params)


@router.get("/metrics")
def palette_metrics() -> Dict[str, Any]:
    """Get palette extraction metrics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()
