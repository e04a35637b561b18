"""
Palette Extraction API Orchestrator

Coordinates a palette request from upload decoding through the extraction
pipeline to the response payload, with logging and metrics around each stage.
"""

import time
from typing import Any, Dict, List

from fastapi import HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from chromapick.config import config
from chromapick.schemas import PaletteArtifacts, PaletteDebug, PaletteResponse, SwatchEntry
from chromapick.services.colors.extraction import Color, analyze_bitmap
from chromapick.services.colors.formatting import choose_text_color, format_rgb
from chromapick.services.colors.swatches import render_swatch_strip
from chromapick.services.imaging import read_image
from chromapick.utils.ids import generate_request_id
from chromapick.utils.logging import get_logger
from chromapick.utils.metrics import get_metrics

EMPTY_PALETTE_MESSAGE = "No colors could be extracted. The image may be fully transparent or too uniform."

logger = get_logger()


def build_swatch_entries(colors: List[Color]) -> List[SwatchEntry]:
    """Attach display strings to each palette color."""
    return [
        SwatchEntry(
            hex=color.hex,
            rgb=list(color.as_tuple()),
            rgb_text=format_rgb(color.r, color.g, color.b),
            text_color=choose_text_color(color.r, color.g, color.b),
        )
        for color in colors
    ]


async def handle_extract(file: UploadFile, params: Dict[str, Any]) -> PaletteResponse:
    """
    Extract a palette from an uploaded image.

    Args:
        file: Uploaded image
        params: ``count`` (requested palette size) and ``include_swatch``

    Returns:
        PaletteResponse; an empty palette is reported with ``empty=True``

    Raises:
        HTTPException: For uploads that cannot be decoded
        ValueError: For malformed bitmaps reaching the pipeline
    """
    request_id = generate_request_id("pal")
    start_time = time.time()
    metrics = get_metrics()

    count = params.get('count', config.DEFAULT_COLOR_COUNT)
    include_swatch = params.get('include_swatch', False)

    logger.info("Starting palette extraction", extra={"request_id": request_id, "count": count})
    if config.METRICS_ENABLED:
        metrics.increment_request_count()

    try:
        bitmap = await read_image(file)
        decode_time = time.time() - start_time

        extract_start = time.time()
        result = await run_in_threadpool(analyze_bitmap, bitmap, count)
        extract_time = time.time() - extract_start

        palette = build_swatch_entries(result.colors)

        artifacts = None
        if include_swatch and palette:
            swatch_b64 = render_swatch_strip([entry.hex for entry in palette], config.SWATCH_CHIP_SIZE)
            artifacts = PaletteArtifacts(swatch_png_b64=swatch_b64)
            if config.METRICS_ENABLED:
                metrics.increment_swatch_count()

        if result.is_empty:
            logger.warning(EMPTY_PALETTE_MESSAGE, extra={
                "request_id": request_id,
                "accepted_pixels": result.accepted_pixels,
                "bucket_count": result.bucket_count
            })

        response = PaletteResponse(
            request_id=request_id,
            width=result.width,
            height=result.height,
            working_width=result.working_width,
            working_height=result.working_height,
            requested_count=result.requested_count,
            count=len(palette),
            sampled_pixels=result.sampled_pixels,
            accepted_pixels=result.accepted_pixels,
            bucket_count=result.bucket_count,
            palette=palette,
            empty=result.is_empty,
            message=EMPTY_PALETTE_MESSAGE if result.is_empty else None,
            debug=PaletteDebug(**result.parameters),
            artifacts=artifacts
        )

        total_time = time.time() - start_time
        logger.info("Palette extraction completed", extra={
            "request_id": request_id,
            "dims": f"{result.width}x{result.height}",
            "working_dims": f"{result.working_width}x{result.working_height}",
            "requested": result.requested_count,
            "returned": len(palette),
            "ms_decode": decode_time * 1000,
            "ms_extract": extract_time * 1000,
            "ms_total": total_time * 1000,
            "result": "empty" if result.is_empty else "ok"
        })

        if config.METRICS_ENABLED:
            if result.is_empty:
                metrics.increment_empty_count()
            metrics.record_extraction(
                palette_size=len(palette),
                sampled_pixels=result.sampled_pixels,
                accepted_pixels=result.accepted_pixels,
                bucket_count=result.bucket_count
            )
            metrics.record_timing("decode", decode_time * 1000)
            metrics.record_timing("extract", extract_time * 1000)
            metrics.record_timing("total", total_time * 1000)

        return response

    except HTTPException as e:
        logger.warning(f"Palette request rejected: {e.detail}", extra={
            "request_id": request_id,
            "status_code": e.status_code,
            "result": "rejected"
        })
        if config.METRICS_ENABLED:
            metrics.increment_failure_count(f"http_{e.status_code}")
        raise
    except Exception as e:
        error_time = time.time() - start_time
        logger.error(f"Palette extraction failed: {str(e)}", extra={
            "request_id": request_id,
            "ms_total": error_time * 1000,
            "result": "error",
            "error_type": type(e).__name__
        })
        if config.METRICS_ENABLED:
            metrics.increment_failure_count(type(e).__name__.lower())
        raise
