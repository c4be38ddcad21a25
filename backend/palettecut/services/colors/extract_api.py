"""
Palette Extraction API Orchestrator

Coordinates an upload request from decoding through pixel sampling and
quantization to the response model, recording timings and failures.
"""

import time

from fastapi import HTTPException, UploadFile
from pydantic import ValidationError

from palettecut.config import config
from palettecut.schemas import PaletteColor, PaletteParams, PaletteResponse
from palettecut.services.imaging import get_pixels, read_image
from palettecut.services.colors.extraction import palette_entries
from palettecut.services.colors.median_cut import VBoxCutError
from palettecut.services.colors.mmcq import quantize
from palettecut.services.colors.swatches import render_swatch_strip
from palettecut.utils.ids import generate_request_id
from palettecut.utils.logging import get_logger
from palettecut.utils.metrics import get_metrics


async def handle_extract(
    file: UploadFile,
    color_count: int = None,
    quality: int = None,
    ignore_white: bool = None,
    include_swatch: bool = False
) -> PaletteResponse:
    """
    Extract a palette from an uploaded image.

    Args:
        file: Uploaded JPEG or PNG
        color_count: Maximum palette size (default from config)
        quality: Pixel sampling step (default from config)
        ignore_white: Skip near-white pixels (default from config)
        include_swatch: Attach a base64 PNG swatch strip

    Returns:
        PaletteResponse with colors ordered most important first

    Raises:
        HTTPException: 400 for bad uploads or parameters, 422 when no
            pixels are left to quantize, 500 on internal failures
    """
    log = get_logger()
    metrics = get_metrics() if config.METRICS_ENABLED else None
    request_id = generate_request_id("pal")
    start_time = time.time()

    color_count = config.DEFAULT_COLOR_COUNT if color_count is None else color_count
    quality = config.DEFAULT_QUALITY if quality is None else quality
    ignore_white = config.IGNORE_WHITE if ignore_white is None else ignore_white

    if metrics:
        metrics.increment_request_count()
    log.info("Starting palette extraction", extra={"request_id": request_id})

    try:
        if not config.validate_color_count(color_count):
            raise HTTPException(
                status_code=400,
                detail=f"color_count must be between {config.MIN_COLOR_COUNT} and {config.MAX_COLOR_COUNT}"
            )
        if not config.validate_quality(quality):
            raise HTTPException(status_code=400, detail="quality must be at least 1")

        rgb = await read_image(file)
        height, width = rgb.shape[:2]
        decode_ms = (time.time() - start_time) * 1000

        pixels = get_pixels(rgb, quality=quality, ignore_white=ignore_white)

        quantize_start = time.time()
        color_map = quantize(pixels, color_count)
        quantize_ms = (time.time() - quantize_start) * 1000

        if color_map is None:
            if metrics:
                metrics.increment_empty_count()
            raise HTTPException(
                status_code=422,
                detail="No pixels left to quantize. Try ignore_white=false or a lower quality value."
            )

        entries = palette_entries(color_map)
        hex_colors = [entry["hex"] for entry in entries]
        swatch = render_swatch_strip(hex_colors, highlight_index=0) if include_swatch else None

        total_ms = (time.time() - start_time) * 1000
        if metrics:
            metrics.record_timing("decode", decode_ms)
            metrics.record_timing("quantize", quantize_ms)
            metrics.record_timing("total", total_ms)
            metrics.record_palette_size(len(entries))

        log.info(
            f"Palette extraction complete: {len(entries)} colors",
            extra={
                "request_id": request_id,
                "sampled_pixels": len(pixels),
                "ms_decode": round(decode_ms, 2),
                "ms_quantize": round(quantize_ms, 2),
                "ms_total": round(total_ms, 2)
            }
        )

        return PaletteResponse(
            request_id=request_id,
            width=width,
            height=height,
            sampled_pixels=len(pixels),
            params=PaletteParams(
                color_count=color_count,
                quality=quality,
                ignore_white=ignore_white
            ),
            palette=[PaletteColor(**entry) for entry in entries],
            dominant_hex=hex_colors[0],
            swatch_png_b64=swatch
        )

    except HTTPException as e:
        if metrics and e.status_code != 422:
            metrics.increment_failure_count(f"http_{e.status_code}")
        log.warning(f"Palette extraction rejected: {e.detail}",
                    extra={"request_id": request_id, "status": e.status_code})
        raise
    except VBoxCutError as e:
        if metrics:
            metrics.increment_failure_count("cut")
        log.error(f"Palette extraction failed: {str(e)}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Palette quantization failed")
    except ValidationError as e:
        # must come before ValueError, which it subclasses
        if metrics:
            metrics.increment_failure_count("response")
        log.error(f"Palette response invalid: {str(e)}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to build palette response")
    except ValueError as e:
        if metrics:
            metrics.increment_failure_count("invalid")
        log.warning(f"Invalid palette request: {str(e)}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))
